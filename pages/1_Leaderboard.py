# pages/1_📊_Leaderboard.py
import streamlit as st

from config import DISPLAY_POLL_SECONDS
from scoreboard.display import updated_label
from scoreboard.live import configure_logging, current_state
from scoreboard.ranking import leaderboard_frame

st.set_page_config(page_title="Leaderboard", page_icon="📊", layout="wide")


@st.fragment(run_every=DISPLAY_POLL_SECONDS)
def standings():
    state = current_state()
    if state.error:
        st.error(f"Couldn't refresh scores: {state.error}")

    lb = leaderboard_frame(state.entries)
    if lb.empty:
        if not state.loading and not state.error:
            st.info("No scores yet. Once the sheet has rows with a Name and Sum, they will appear here.")
        return

    st.caption(updated_label(state.last_updated))
    st.dataframe(
        lb,
        use_container_width=True,
        hide_index=True,
    )

    csv = lb.to_csv(index=False).encode("utf-8")
    st.download_button("Download Leaderboard (CSV)", csv, "leaderboard.csv", "text/csv")


def main():
    configure_logging()
    st.title("📊 Overall Leaderboard")
    standings()


if __name__ == "__main__":
    main()
