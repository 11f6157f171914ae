"""Track data loading, validation, cleaning, and the in-memory store."""
from .loader import discover_csvs, load_all_csvs, load_csv, load_rows
from .cleaner import clean, invalid_records
from .store import TrackStore
from .schemas import TrackTable, RejectedRow, TRACK_COLUMNS
from .normalize import normalize_columns, coerce_types
