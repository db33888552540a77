# scoreboard/display.py
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from scoreboard.models import RankedEntry


def initials(name: str) -> str:
    """'Abin Sheen' -> 'AS', 'midhuna' -> 'M'."""
    return "".join(part[0] for part in name.split()[:2]).upper()


def photo_for(name: str, photos: Dict[str, str]) -> Optional[str]:
    # Exact match only: the sheet's Name is the key
    return photos.get(name)


def podium(entries: Sequence[RankedEntry]) -> List[RankedEntry]:
    """Top three, or nothing until there are three people to put on the podium."""
    if len(entries) < 3:
        return []
    return list(entries[:3])


def updated_label(last_updated: Optional[datetime]) -> str:
    if last_updated is None:
        return ""
    return f"Updated {last_updated.astimezone().strftime('%H:%M:%S')}"


def avg_label(entry: RankedEntry) -> str:
    return f"Avg: {entry.avg or '-'}"
