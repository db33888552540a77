# app.py
from html import escape

import streamlit as st

from config import (
    APP_TITLE,
    BRAND_COLOR,
    DISPLAY_POLL_SECONDS,
    LOGO_PATH,
    PHOTO_BY_NAME,
    PODIUM_COLORS,
    REFRESH_SECONDS,
)
from scoreboard.display import avg_label, initials, photo_for, podium, updated_label
from scoreboard.live import configure_logging, current_state
from scoreboard.models import RankedEntry

st.set_page_config(page_title=APP_TITLE, page_icon="🏆", layout="wide")


def header(last_updated):
    left, right = st.columns([4, 1])
    with left:
        if LOGO_PATH:
            st.image(LOGO_PATH, width=72)
        st.title(APP_TITLE)
    with right:
        label = updated_label(last_updated)
        if label:
            st.caption(label)


def avatar(entry: RankedEntry, size: int, border: str):
    photo = photo_for(entry.name, PHOTO_BY_NAME)
    if photo:
        st.image(photo, width=size)
        return
    st.markdown(
        f"<div style='width:{size}px;height:{size}px;border-radius:50%;background:{BRAND_COLOR};"
        f"border:4px solid {border};color:white;display:flex;align-items:center;"
        f"justify-content:center;font-weight:700;font-size:{size // 3}px'>"
        f"{escape(initials(entry.name))}</div>",
        unsafe_allow_html=True,
    )


def podium_section(top3):
    st.subheader("🏆 Top Performers")
    cols = st.columns(3)
    for i, (col, entry) in enumerate(zip(cols, top3)):
        with col:
            if i == 0:
                st.markdown("### 👑")
            avatar(entry, 96, PODIUM_COLORS[i])
            st.markdown(f"**{escape(entry.name)}**")
            st.metric("Score", entry.sum or "0")
            st.caption(avg_label(entry))
            st.markdown(
                f"<div style='background:{PODIUM_COLORS[i]};text-align:center;"
                f"font-size:2rem;font-weight:800;border-radius:8px'>{i + 1}</div>",
                unsafe_allow_html=True,
            )


def participant_card(entry: RankedEntry):
    rank_col, avatar_col, info_col = st.columns([1, 1, 6])
    with rank_col:
        st.markdown(
            f"<div style='background:{BRAND_COLOR};color:white;border-radius:8px;"
            f"text-align:center;font-weight:700;padding:0.4rem'>#{entry.rank}</div>",
            unsafe_allow_html=True,
        )
    with avatar_col:
        avatar(entry, 48, BRAND_COLOR)
    with info_col:
        st.markdown(f"**{escape(entry.name)}**")
        st.caption(f"Sum: {entry.sum or '0'} · Count: {entry.count or '-'} · Avg: {entry.avg or '-'}")


@st.fragment(run_every=DISPLAY_POLL_SECONDS)
def scoreboard():
    state = current_state()

    header(state.last_updated)

    if state.loading:
        st.info("Loading scores…")

    # Stale data stays visible under the error
    if state.error:
        st.error(f"Couldn't refresh scores: {state.error}")

    if state.entries:
        top3 = podium(state.entries)
        if top3:
            podium_section(top3)

        st.subheader(f"📊 All Participants ({len(state.entries)})")
        for entry in state.entries:
            participant_card(entry)

    if not state.loading and not state.entries and not state.error:
        st.info("No scores yet. Once the sheet has rows with a Name and Sum, they will appear here.")

    st.divider()
    st.caption(f"Updates automatically every {REFRESH_SECONDS} seconds")


def main():
    configure_logging()
    scoreboard()


if __name__ == "__main__":
    main()
