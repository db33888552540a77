# scoreboard/table.py
"""
Delimited-text parser for published spreadsheet exports.

- Delimiter is guessed once from the first line (';' only when the line has
  semicolons and no commas) and used for the whole payload.
- Quoted fields may hold the delimiter or newlines; "" inside quotes is a quote.
- Carriage returns are dropped, so both \\n and \\r\\n line endings work.
- Rows that are blank after trimming are skipped.
- Never raises: an unterminated quote simply runs to the end of the text.
"""

import re
from typing import List

QUOTE = '"'
BOM = "\ufeff"


def detect_delimiter(text: str) -> str:
    first_line = re.split(r"\r?\n", text, maxsplit=1)[0] if text else ""
    if ";" in first_line and "," not in first_line:
        return ";"
    return ","


def _is_blank(row: List[str]) -> bool:
    return all(cell.strip() == "" for cell in row)


def parse_table(text: str) -> List[List[str]]:
    """Split raw export text into rows of string cells. The first row is the header."""
    if text.startswith(BOM):
        text = text[len(BOM):]
    delim = detect_delimiter(text)

    rows: List[List[str]] = []
    row: List[str] = []
    cell: List[str] = []
    in_quotes = False
    i, n = 0, len(text)

    while i < n:
        c = text[i]
        if c == "\r":
            pass
        elif in_quotes:
            if c == QUOTE:
                if i + 1 < n and text[i + 1] == QUOTE:
                    cell.append(QUOTE)
                    i += 1
                else:
                    in_quotes = False
            else:
                cell.append(c)
        elif c == QUOTE:
            in_quotes = True
        elif c == delim:
            row.append("".join(cell))
            cell = []
        elif c == "\n":
            row.append("".join(cell))
            rows.append(row)
            row, cell = [], []
        else:
            cell.append(c)
        i += 1

    row.append("".join(cell))
    rows.append(row)
    return [r for r in rows if not _is_blank(r)]
