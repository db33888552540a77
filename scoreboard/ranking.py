# scoreboard/ranking.py
import re
from dataclasses import asdict
from typing import List, Sequence

import pandas as pd

from config import AVG_COL, COUNT_COL, NAME_COL, SCORE_COL
from scoreboard.models import RankedEntry, RawRecord

RAW_COLUMNS = ["name", "sum", "count", "avg"]

# Leading ASCII decimal number, e.g. "42", "-3.5", ".5", "1e3", "12 pts", "Infinity"
_NUMBER_PREFIX = re.compile(
    r"^\s*[+-]?(?:Infinity|(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.ASCII,
)


def parse_score(text: str) -> float:
    """Lenient, locale-free float parse. Anything without a leading number is 0."""
    m = _NUMBER_PREFIX.match(text or "")
    if not m:
        return 0.0
    try:
        value = float(m.group(0))
    except (OverflowError, ValueError):
        return 0.0
    return value if value == value else 0.0  # NaN -> 0


def rank_records(records: Sequence[RawRecord]) -> List[RankedEntry]:
    """
    Sort by score (highest first, input order kept on ties) and attach ranks.
    Equal scores share a rank; the next score ranks at its position: [50, 50, 40] -> [1, 1, 3].
    """
    if not records:
        return []

    df = pd.DataFrame([asdict(r) for r in records], columns=RAW_COLUMNS)
    df["score_num"] = df["sum"].map(parse_score).astype(float)
    df = df.sort_values("score_num", ascending=False, kind="stable").reset_index(drop=True)

    # Add rank with ties
    df["rank"] = df["score_num"].rank(method="min", ascending=False).astype(int)

    return [
        RankedEntry(
            name=r["name"],
            sum=r["sum"],
            count=r["count"],
            avg=r["avg"],
            score_num=float(r["score_num"]),
            rank=int(r["rank"]),
        )
        for r in df.to_dict("records")
    ]


def leaderboard_frame(entries: Sequence[RankedEntry]) -> pd.DataFrame:
    """Ranked entries as a display/download table using the sheet's own headings."""
    cols = ["Rank", NAME_COL, SCORE_COL, COUNT_COL, AVG_COL]
    if not entries:
        return pd.DataFrame(columns=cols)
    return pd.DataFrame(
        [[e.rank, e.name, e.sum, e.count, e.avg] for e in entries],
        columns=cols,
    )
