"""Streamlit viewer for discussion topics and their comments.

Run with: streamlit run topic_feed/ui/dashboard.py
"""

import html

import streamlit as st

from topic_feed.data import DataService
from topic_feed.models.topic_data import (
    Comment,
    Dataset,
    Topic,
    SOURCE_API,
    SOURCE_CACHE,
    SOURCE_CACHE_FALLBACK,
)


# Badge styling per data source
SOURCES = {
    SOURCE_API: {"color": "#10b981", "label": "LIVE"},
    SOURCE_CACHE: {"color": "#3b82f6", "label": "CACHED"},
    SOURCE_CACHE_FALLBACK: {"color": "#f97316", "label": "STALE CACHE"},
}


def get_source_badge(source: str | None) -> dict:
    """Get badge info for a dataset source."""
    return SOURCES.get(source, {"color": "#6b7280", "label": "UNKNOWN"})


def render_header(dataset: Dataset) -> None:
    """Render title bar with topic count and source badge."""
    badge = get_source_badge(dataset.source)
    comment_count = sum(len(t.comments) for t in dataset.topics)

    st.markdown(
        f"""<div style="display: flex; justify-content: space-between; align-items: center; padding: 0.5rem 0 1rem 0; border-bottom: 1px solid #334155; margin-bottom: 1rem;">
            <div>
                <h1 style="margin: 0; font-size: 1.5rem; color: #f1f5f9;">Topics</h1>
                <div style="color: #64748b; font-size: 0.75rem; margin-top: 0.25rem;">
                    {len(dataset.topics)} topics | {comment_count} comments
                </div>
            </div>
            <div style="
                background: {badge['color']}22;
                border: 1px solid {badge['color']};
                color: {badge['color']};
                padding: 0.25rem 1rem;
                border-radius: 4px;
                font-weight: 600;
                font-size: 0.8rem;
            " title="source: {html.escape(dataset.source or '')}">
                {badge['label']}
            </div>
        </div>""",
        unsafe_allow_html=True,
    )


def render_comment(comment: Comment) -> None:
    """Render a single comment card."""
    st.markdown(
        f"""<div style="background: #1e293b; border: 1px solid #334155; border-radius: 6px; padding: 0.75rem 1rem; margin-bottom: 0.5rem;">
            <div style="display: flex; justify-content: space-between; font-size: 0.75rem; color: #94a3b8;">
                <span style="font-weight: 600; color: #e2e8f0;">{html.escape(comment.by)}</span>
                <span>{html.escape(comment.time)}</span>
            </div>
            <div style="margin-top: 0.4rem; color: #e2e8f0;">{html.escape(comment.text)}</div>
        </div>""",
        unsafe_allow_html=True,
    )


def render_topic(topic: Topic) -> None:
    """Render a topic as an expander listing its comments."""
    title = topic.name or topic.guid or "(untitled)"
    with st.expander(f"{title} ({len(topic.comments)})"):
        if not topic.comments:
            st.caption("No comments yet")
            return
        for comment in topic.comments:
            render_comment(comment)


def load(force_reload: bool = False) -> Dataset | None:
    """Load the dataset, closing the HTTP client afterwards."""
    with DataService() as service:
        return service.load_data(force_reload=force_reload)


def main() -> None:
    """Main viewer entry point."""
    st.set_page_config(
        page_title="Topics",
        page_icon="",
        layout="centered",
    )

    st.markdown(
        """
        <style>
            .stApp { background-color: #0f172a; }
            .stMarkdown, .stText, p, span, label { color: #e2e8f0; }
            #MainMenu, footer { visibility: hidden; }
        </style>
        """,
        unsafe_allow_html=True,
    )

    reload_clicked = st.button("Reload")

    with st.spinner("Loading..."):
        dataset = load(force_reload=reload_clicked)

    if dataset is None:
        st.error("No data available. Check the network connection and try Reload.")
        return

    render_header(dataset)

    query = st.text_input(
        "Filter topics",
        placeholder="Filter topics",
        label_visibility="collapsed",
    )
    topics = [
        t for t in dataset.topics
        if not query or query.lower() in t.name.lower()
    ]
    if not topics:
        st.info("No topics match")
        return

    for topic in topics:
        render_topic(topic)


if __name__ == "__main__":
    main()
