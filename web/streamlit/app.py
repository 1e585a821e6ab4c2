"""Ranked Survey Dashboard."""

import sys
from pathlib import Path

# Add project root to path (for streamlit which runs this file directly)
_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(_root))

import plotly.graph_objects as go  # noqa: E402
import streamlit as st  # noqa: E402
from loguru import logger  # noqa: E402

from app.container import container  # noqa: E402
from app.errors import SurveyError  # noqa: E402
from app.models.survey import ChoiceScore  # noqa: E402
from app.services.survey import rank_by_score  # noqa: E402
from web.api import surveys  # noqa: E402

# Ensure container is initialized
container.init()

st.set_page_config(page_title="Ranked Survey", page_icon="🗳️", layout="wide")

PALETTE = ["#7C3AED", "#8B5CF6", "#A78BFA", "#C4B5FD", "#DDD6FE"]


def color(index: int) -> str:
    return PALETTE[min(index, len(PALETTE) - 1)]


def auth_header() -> str | None:
    token = st.session_state.get("admin_token")
    return f"Bearer {token}" if token else None


def score_chart(stats: list[dict]) -> go.Figure:
    return go.Figure(
        go.Bar(
            x=[s["choice"] for s in stats],
            y=[s["score"] for s in stats],
            marker_color=[color(i) for i in range(len(stats))],
            text=[s["score"] for s in stats],
            textposition="outside",
        )
    ).update_layout(
        title="Weighted score per choice",
        xaxis_title="",
        yaxis_title="",
        margin=dict(t=40, b=40, l=40, r=20),
        height=350,
    )


def surveys_tab():
    """Admin survey list and creation form."""
    st.subheader("➕ New Survey")
    with st.form("create_survey", clear_on_submit=True):
        title = st.text_input("Title")
        choices = st.text_input("Choices (comma-separated)")
        submitted = st.form_submit_button("Create")

    if submitted:
        try:
            created = surveys.create_survey(title, choices, auth_header())
        except SurveyError as e:
            st.error(e.message)
        else:
            logger.info("Dashboard created survey {}", created.token)
            st.success(f"Survey created: **{created.token}**")

    st.subheader("📋 Surveys")
    try:
        listing = surveys.list_surveys(auth_header())
    except SurveyError as e:
        st.warning(e.message)
        return

    if not listing.items:
        st.info("No surveys yet.")
        return

    for s in listing.items:
        created = s.created_at.strftime("%Y-%m-%d %H:%M") if s.created_at else ""
        st.write(f"**{s.token}** — {s.title} · {len(s.choices)} choices · {created}")


def respond_tab():
    """Participant ballot: choices are ranked in the order they are picked."""
    token = st.text_input("Survey token", key="respond_token").strip()
    if not token:
        return

    try:
        survey = surveys.get_survey(token)
    except SurveyError as e:
        st.warning(e.message)
        return

    st.subheader(survey.title)
    pseudonym = st.text_input("Your pseudonym")
    picked = st.multiselect("Pick choices in order of preference", survey.choices)

    if st.button("Submit", disabled=not picked):
        votes = [{"choice": c, "rank": i + 1} for i, c in enumerate(picked)]
        try:
            surveys.record_response(survey.token, pseudonym, votes)
        except SurveyError as e:
            st.error(e.message)
        else:
            st.success("Thanks, your ranking was recorded.")


def results_tab():
    """Admin results view, sorted by score."""
    token = st.text_input("Survey token", key="results_token").strip()
    if not token:
        return

    try:
        data = surveys.get_stats(token, auth_header())
    except SurveyError as e:
        st.warning(e.message)
        return

    st.subheader(f"📊 {data.survey.title}")

    ranked = rank_by_score([ChoiceScore(choice=s.choice, score=s.score, vote_count=s.vote_count) for s in data.stats])
    stats = [s.to_dict() for s in ranked]

    cols = st.columns(3)
    cols[0].metric("Respondents", data.total_respondents)
    cols[1].metric("Choices", len(stats))
    cols[2].metric("Leader", stats[0]["choice"] if data.total_respondents else "—")

    st.plotly_chart(score_chart(stats), width="stretch")

    for i, s in enumerate(stats):
        st.write(f"{i + 1}. **{s['choice']}** — {s['score']} pts ({s['vote_count']} votes)")

    if data.respondents:
        with st.expander(f"Respondents ({data.total_respondents})"):
            st.write(", ".join(data.respondents))


def main():
    st.title("🗳️ Ranked Survey")
    st.markdown("*Publish a survey, collect rankings, read the weighted results*")

    st.sidebar.text_input("Admin token", type="password", key="admin_token")

    tab1, tab2, tab3 = st.tabs(["📋 Surveys", "✍️ Respond", "📊 Results"])

    with tab1:
        surveys_tab()

    with tab2:
        respond_tab()

    with tab3:
        results_tab()

    st.sidebar.markdown("---")
    st.sidebar.markdown(f"**Storage:** {container.storage.dialect}")


if __name__ == "__main__":
    main()
