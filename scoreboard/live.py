# scoreboard/live.py
"""
Streamlit glue: one RefreshOrchestrator per server process, shared by every page and session.

The source config is re-read from Streamlit secrets / environment on every script run,
so editing secrets while the app is up triggers an immediate refetch.
"""

from __future__ import annotations

import atexit
import logging
import os

import streamlit as st

from config import load_source_config
from scoreboard.models import BoardState
from scoreboard.refresh import RefreshOrchestrator


def configure_logging() -> None:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@st.cache_resource
def get_refresher() -> RefreshOrchestrator:
    """Create (or reuse) the process-wide refresher and start polling."""
    refresher = RefreshOrchestrator(load_source_config(st.secrets))
    refresher.start()
    atexit.register(refresher.stop, 1.0)
    return refresher


def current_state() -> BoardState:
    refresher = get_refresher()
    refresher.reconfigure(load_source_config(st.secrets))
    return refresher.snapshot()
