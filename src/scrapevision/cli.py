"""Command-line interface for ScrapeVision."""

import argparse
import logging
import subprocess
import sys
from pathlib import Path

from .core.config import settings
from .core.constants import CrawlConstants, DisplayConstants, LabelConstants
from .core.errors import JobError
from .core.filters import FilterCriteria, filter_records
from .core.aggregation import compute_star_histogram, compute_average_confidence, summarize
from .core.models import JobSnapshot, JobState, crawl_params, limit_params
from .services.job_client import JobApiClient
from .services.job_controller import JobController
from .utils.csv_export import export_to_csv, CSV_FILENAME

logger = logging.getLogger(__name__)


def setup_logging():
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=DisplayConstants.LOG_FORMAT
    )


def _print_progress(snapshot: JobSnapshot):
    job = snapshot.job_id or "-"
    print(f"[{job}] {snapshot.state.value}: {len(snapshot.results)} results", end="\r", flush=True)


def _print_report(records):
    summary = summarize(records)
    print(f"\nResults: {summary.total} pages "
          f"({summary.pos} positive, {summary.neg} negative, {summary.neu} neutral)")

    print("\nStar rating distribution:")
    for bucket in compute_star_histogram(records):
        print(f"  {bucket.star_label:<8} {bucket.count:>5}")

    print("\nAverage confidence by rating:")
    for bucket in compute_average_confidence(records):
        print(f"  {bucket.star_label:<8} {bucket.average_percent:>6.1f}%")


def cmd_analyse(args):
    """Submit a crawl, wait for it and export the results."""
    if args.limit is not None:
        params = limit_params(args.limit)
    else:
        params = crawl_params(args.method, args.depth)
    criteria = FilterCriteria(star_label=args.star, sentiment_label=args.sentiment)

    with JobController.from_settings() as controller:
        controller.add_listener(_print_progress)
        print(f"Analysing {args.url} with {params}...")
        controller.submit(args.url, params)
        try:
            snapshot = controller.wait()
        except KeyboardInterrupt:
            controller.cancel()
            print("\nJob canceled")
            return 130

    print()
    if snapshot.state == JobState.FAILED:
        print(f"Job failed: {snapshot.last_error}")
        return 1

    records = filter_records(snapshot.results, criteria)
    if not snapshot.results:
        print("No results returned.")
        return 0
    if not records:
        print("No results match the filters.")
        return 0

    _print_report(records)
    out = Path(args.out)
    path = export_to_csv(records, out.parent, out.name)
    print(f"\nResults exported to {path}")
    return 0


def cmd_status(args):
    """Print the status of an existing job."""
    client = JobApiClient.from_settings()
    try:
        response = client.get_status(args.job_id)
    except JobError as e:
        print(f"Status check failed: {e}")
        return 1
    finally:
        client.close()

    if response.error:
        print(f"Job {args.job_id}: error: {response.error}")
        return 1
    print(f"Job {args.job_id}: {response.status} ({len(response.results)} results)")
    return 0


def cmd_cancel(args):
    """Ask the server to cancel a job."""
    client = JobApiClient.from_settings()
    try:
        client.cancel(args.job_id)
        print(f"Cancel requested for job {args.job_id}")
    except Exception as e:
        logger.warning(f"Cancel request failed: {e}")
        print(f"Could not reach the server to cancel job {args.job_id}")
    finally:
        client.close()
    return 0


def cmd_ui(args):
    """UI command."""
    app_path = Path(__file__).parent / "ui" / "streamlit_app.py"

    if not app_path.exists():
        print(f"Streamlit app not found at {app_path}")
        return 1

    print("Launching ScrapeVision UI...")
    try:
        subprocess.run([
            sys.executable, "-m", "streamlit", "run", str(app_path)
        ], check=True)
    except subprocess.CalledProcessError as e:
        print(f"Failed to launch UI: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nUI stopped by user")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ScrapeVision - AI based web scraper and sentiment analysis")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Analyse command
    analyse_parser = subparsers.add_parser('analyse', help='Crawl a site and score its pages')
    analyse_parser.add_argument('url', help='Start URL')
    analyse_parser.add_argument('--method', choices=CrawlConstants.METHODS, default=settings.default_method,
                                help='Crawl order')
    analyse_parser.add_argument('--depth', type=int, default=settings.default_depth, help='Crawl depth')
    analyse_parser.add_argument('--limit', type=int, help='Page limit (replaces method/depth)')
    analyse_parser.add_argument('--out', default=CSV_FILENAME, help='Output CSV file')
    analyse_parser.add_argument('--star', default=LabelConstants.ALL,
                                help='Only export one star rating, e.g. "4 stars"')
    analyse_parser.add_argument('--sentiment', default=LabelConstants.ALL,
                                help='Only export one sentiment label')

    # Status command
    status_parser = subparsers.add_parser('status', help='Show the status of a job')
    status_parser.add_argument('job_id', help='Job id')

    # Cancel command
    cancel_parser = subparsers.add_parser('cancel', help='Cancel a job')
    cancel_parser.add_argument('job_id', help='Job id')

    # UI command
    subparsers.add_parser('ui', help='Launch web UI')
    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging()

    commands = {
        'analyse': cmd_analyse,
        'status': cmd_status,
        'cancel': cmd_cancel,
        'ui': cmd_ui,
    }
    try:
        return commands[args.command](args)
    except ValueError as e:
        parser.error(str(e))
    except Exception as e:
        logger.error(f"Command failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
