# scoreboard/errors.py
from typing import Optional


class ScoreboardError(Exception):
    """Base class for failures that end a refresh cycle."""


class ConfigurationError(ScoreboardError):
    """Neither the export URL nor the full API triple was supplied."""


class TransportError(ScoreboardError):
    """Network failure, non-success status or an unreadable response body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
