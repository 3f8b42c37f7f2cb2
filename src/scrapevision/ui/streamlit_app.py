"""Simple Streamlit UI for ScrapeVision."""

import logging
import time

import pandas as pd
import streamlit as st

from scrapevision.core.config import settings
from scrapevision.core.constants import CrawlConstants, DisplayConstants, LabelConstants
from scrapevision.core.aggregation import compute_star_histogram, compute_average_confidence, summarize
from scrapevision.core.filters import FilterCriteria, filter_records
from scrapevision.core.models import JobState, StarLabel, SentimentLabel, crawl_params
from scrapevision.core.views import ResultView, ViewSelector
from scrapevision.services.job_controller import JobController
from scrapevision.services.scheduler import ThreadScheduler
from scrapevision.utils.csv_export import to_csv, table_rows, CSV_FILENAME, CSV_MIME_TYPE

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO),
                    format=DisplayConstants.LOG_FORMAT)
logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title="ScrapeVision",
    page_icon="🤖",
    layout="wide"
)


@st.cache_resource
def get_scheduler() -> ThreadScheduler:
    """One worker shared by every browser session."""
    return ThreadScheduler(name="scrapevision-ui")


def start_over():
    """Release the session's controller and start from an empty form."""
    st.session_state.controller.close()
    st.session_state.controller = JobController.from_settings(scheduler=get_scheduler())
    st.rerun()


# One controller per browser session
if "controller" not in st.session_state:
    st.session_state.controller = JobController.from_settings(scheduler=get_scheduler())
    st.session_state.view_selector = ViewSelector()

controller: JobController = st.session_state.controller
view_selector: ViewSelector = st.session_state.view_selector
snapshot = controller.observe()

st.title("🤖 ScrapeVision")
st.caption("AI based web scraper: crawl a site and score every page's sentiment.")

# Input form, only while nothing is running or shown
if snapshot.state == JobState.IDLE:
    with st.form("analyse"):
        url = st.text_input("Start URL", placeholder="https://example.com")
        col1, col2 = st.columns(2)
        with col1:
            method = st.selectbox("Crawl method", CrawlConstants.METHODS,
                                  index=CrawlConstants.METHODS.index(settings.default_method))
        with col2:
            depth = st.slider("Depth", CrawlConstants.MIN_DEPTH, CrawlConstants.MAX_DEPTH,
                              settings.default_depth)
        if st.form_submit_button("Analyse", width='stretch'):
            if not url.strip():
                st.warning("Please enter a URL.")
            else:
                controller.submit(url, crawl_params(method, depth))
                st.rerun()

# Progress
if snapshot.is_active:
    st.info(f"🤖 Generating summaries... ({len(snapshot.results)} pages so far)")
    if st.button("Cancel"):
        start_over()

# Error
if snapshot.state == JobState.FAILED:
    st.error(snapshot.last_error)
    if st.button("Go back"):
        start_over()

if snapshot.state == JobState.CANCELED_LOCALLY:
    start_over()

# Results
if view_selector.is_meaningful(snapshot):
    records = list(snapshot.results)
    summary = summarize(records)

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Pages", summary.total)
    with col2:
        st.metric("Positive", summary.pos)
    with col3:
        st.metric("Negative", summary.neg)
    with col4:
        st.metric("Avg Confidence", f"{summary.average_confidence * 100:.1f}%")

    col1, col2 = st.columns(2)
    with col1:
        st.download_button("Download CSV", to_csv(records), file_name=CSV_FILENAME,
                           mime=CSV_MIME_TYPE, width='stretch')
    with col2:
        if st.button("New Crawl", width='stretch'):
            start_over()

    selected = st.radio("View", [v.value for v in ResultView], horizontal=True,
                        index=[v for v in ResultView].index(view_selector.view))
    view_selector.select(selected)

    if view_selector.view == ResultView.TABLE:
        col1, col2 = st.columns(2)
        with col1:
            star = st.selectbox("Star Rating", [LabelConstants.ALL] + [s.value for s in StarLabel])
        with col2:
            sentiment = st.selectbox("Sentiment", [LabelConstants.ALL] + [s.value for s in SentimentLabel])
        filtered = filter_records(records, FilterCriteria(star_label=star, sentiment_label=sentiment))
        if not filtered:
            st.info("No results match the filters.")
        else:
            df = pd.DataFrame(table_rows(filtered))
            st.dataframe(df, hide_index=True, width='stretch')

    elif view_selector.view == ResultView.STAR_HISTOGRAM:
        st.subheader("Star Rating Distribution")
        df = pd.DataFrame([{"Star Rating": b.star_label, "Pages": b.count}
                           for b in compute_star_histogram(records)])
        st.bar_chart(df, x="Star Rating", y="Pages")

    else:
        st.subheader("Average Confidence by Star Rating")
        df = pd.DataFrame([{"Star Rating": b.star_label, "Average Confidence (%)": b.average_percent}
                           for b in compute_average_confidence(records)])
        st.bar_chart(df, x="Star Rating", y="Average Confidence (%)")
elif snapshot.state == JobState.COMPLETED:
    st.info("The crawl finished without any results.")
    if st.button("New Crawl"):
        start_over()

# Refresh while the job is still running
if snapshot.is_active:
    time.sleep(settings.poll_interval)
    st.rerun()
