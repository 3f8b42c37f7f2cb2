"""Basic usage examples for ScrapeVision."""

from scrapevision import JobController
from scrapevision.core import (
    FilterCriteria, JobState, compute_average_confidence, compute_star_histogram,
    crawl_params, filter_records,
)
from scrapevision.utils import export_to_csv


def example_crawl(url: str):
    """Example: crawl a site, print the charts and export the positive pages."""
    print(f"🔍 Crawling {url}")

    with JobController.from_settings() as controller:
        controller.add_listener(lambda s: print(f"  {s.state.value}: {len(s.results)} pages"))
        controller.submit(url, crawl_params("bfs", 2))
        snapshot = controller.wait()

    if snapshot.state != JobState.COMPLETED:
        print(f"❌ {snapshot.last_error or snapshot.state.value}")
        return

    print("📊 Star rating distribution:")
    for bucket in compute_star_histogram(snapshot.results):
        print(f"  {bucket.star_label}: {bucket.count}")

    print("🎯 Average confidence:")
    for bucket in compute_average_confidence(snapshot.results):
        print(f"  {bucket.star_label}: {bucket.average_percent:.1f}%")

    positive = filter_records(snapshot.results, FilterCriteria(sentiment_label="POSITIVE"))
    path = export_to_csv(positive)
    print(f"💾 Saved {len(positive)} positive pages to {path}")


if __name__ == "__main__":
    example_crawl("https://example.com")
