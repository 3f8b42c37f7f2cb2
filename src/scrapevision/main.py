"""Main entry point for ScrapeVision."""

import sys

from scrapevision.cli import main as cli_main
from scrapevision.ui import run_streamlit_app


def main():
    """Main entry point - delegates to CLI or UI based on arguments."""
    if len(sys.argv) > 1 and sys.argv[1] == "ui":
        run_streamlit_app()
        return 0
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
