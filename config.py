# config.py
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

# --- IMPORTANT: EDIT THESE FOR YOUR EVENT ---
APP_TITLE = "Live Scores"
LOGO_PATH: Optional[str] = None  # e.g. "static/Logo.png"; None hides the logo
BRAND_COLOR = "#6366f1"          # any CSS color

# How often the sheet is polled (seconds)
REFRESH_SECONDS = 10
REQUEST_TIMEOUT_SECONDS = 10
# How often the page redraws from the latest fetched state (no network involved)
DISPLAY_POLL_SECONDS = 2

# Header names in the sheet (matched case-insensitively, surrounding spaces ignored)
NAME_COL = "Name"
SCORE_COL = "Sum"
COUNT_COL = "Count"
AVG_COL = "Avg"

SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"

# Optional: photos keyed by the *exact* Name in the sheet. Anyone missing gets initials.
PHOTO_BY_NAME: Dict[str, str] = {
    # "Alice": "static/photos/Alice.jpg",
}

# Podium colors: gold, silver, bronze
PODIUM_COLORS = ("#FFD700", "#C0C0C0", "#CD7F32")


@dataclass(frozen=True)
class SourceConfig:
    """Where the scores live. Set csv_url, or all of api_key + sheet_id + range."""
    csv_url: Optional[str] = None
    api_key: Optional[str] = None
    sheet_id: Optional[str] = None
    range: Optional[str] = None


# Secrets key -> environment fallback
_SOURCE_KEYS = {
    "csv_url": "SCOREBOARD_CSV_URL",
    "api_key": "GSHEETS_API_KEY",
    "sheet_id": "GSHEETS_SHEET_ID",
    "range": "GSHEETS_RANGE",
}


def _secret(secrets: Mapping[str, Any], key: str) -> Optional[Any]:
    try:
        return secrets.get(key)
    except FileNotFoundError:
        # st.secrets raises when there is no secrets.toml at all
        return None


def load_source_config(secrets: Optional[Mapping[str, Any]] = None) -> SourceConfig:
    """Build the source config, preferring Streamlit secrets over environment variables."""
    if secrets is None:
        secrets = {}
    values = {}
    for field_name, env_name in _SOURCE_KEYS.items():
        value = _secret(secrets, env_name) or os.getenv(env_name)
        values[field_name] = value.strip() if isinstance(value, str) and value.strip() else None
    return SourceConfig(**values)
