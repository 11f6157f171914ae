"""
Track Analytics — Configuration: paths, constants, column map, query thresholds.
"""
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths — override with TRACK_ANALYTICS_DATA_DIR env var for cloud deployment
# ---------------------------------------------------------------------------
_data_dir = Path(os.environ.get("TRACK_ANALYTICS_DATA_DIR", str(Path.home() / "Track Analytics")))
BASE_FOLDER = _data_dir
INBOX_FOLDER = _data_dir / "inbox"
REPORTS_FOLDER = _data_dir / "reports"

# ---------------------------------------------------------------------------
# File-discovery patterns (keywords matched case-insensitively in filename)
# ---------------------------------------------------------------------------
TRACK_KEYWORDS = ["spotify", "youtube", "track"]

# ---------------------------------------------------------------------------
# Load behaviour — strict aborts on the first bad row, lenient skips it
# ---------------------------------------------------------------------------
STRICT_LOAD = os.environ.get("TRACK_ANALYTICS_STRICT", "1").strip().lower() not in ("0", "false", "no")

# ---------------------------------------------------------------------------
# Column mapping from raw Spotify/YouTube CSV headers → internal names
# Headers not listed here are lower-cased and snake-cased.
# ---------------------------------------------------------------------------
COLUMN_MAP = {
    "Artist": "artist",
    "Track": "track",
    "Album": "album",
    "Album_type": "album_type",
    "Danceability": "danceability",
    "Energy": "energy",
    "Loudness": "loudness",
    "Speechiness": "speechiness",
    "Acousticness": "acousticness",
    "Instrumentalness": "instrumentalness",
    "Liveness": "liveness",
    "Valence": "valence",
    "Tempo": "tempo",
    "Duration_min": "duration_min",
    "Duration_ms": "duration_ms",
    "Title": "title",
    "Channel": "channel",
    "Views": "views",
    "Likes": "likes",
    "Comments": "comments",
    "Licensed": "licensed",
    "official_video": "official_video",
    "Stream": "stream",
    "EnergyLiveness": "energy_liveness",
    "Energy_Liveness": "energy_liveness",
    "most_playedon": "most_played_on",
    "Most_Played_On": "most_played_on",
}

MS_PER_MINUTE = 60_000

# ---------------------------------------------------------------------------
# Platform labels used in most_played_on
# ---------------------------------------------------------------------------
SPOTIFY = "Spotify"
YOUTUBE = "Youtube"

# ---------------------------------------------------------------------------
# Query constants
# ---------------------------------------------------------------------------
BILLION_STREAMS = 1_000_000_000
SINGLE_ALBUM_TYPE = "single"
TOP_N = 5
RANK_LIMIT = 3
ENERGY_LIVENESS_RATIO = 1.2
