"""CSV export of result records."""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Union

from ..core.constants import ExportConstants
from ..core.models import ResultRecord

logger = logging.getLogger(__name__)

CSV_FILENAME = ExportConstants.CSV_FILENAME
CSV_MIME_TYPE = ExportConstants.CSV_MIME_TYPE


def _quote(value: str) -> str:
    return '"' + str(value).replace('"', '""') + '"'


def format_confidence(score: float) -> str:
    return f"{score:.{ExportConstants.CONFIDENCE_DECIMALS}f}"


def table_rows(records: Iterable[ResultRecord]) -> List[Dict[str, str]]:
    """Rows keyed by the CSV header, as shown in the results table."""
    return [
        dict(zip(ExportConstants.CSV_HEADER, [
            r.url, r.star_label, r.sentiment_label, format_confidence(r.sentiment_score), r.summary,
        ]))
        for r in records
    ]


def to_csv(records: Iterable[ResultRecord]) -> str:
    """Serialize records to CSV text.

    Text fields are always quoted with embedded quotes doubled, so summaries
    containing commas, quotes or newlines survive a round trip through a
    standard CSV reader. Confidence is written with three decimals.
    """
    lines = [",".join(ExportConstants.CSV_HEADER)]
    for r in records:
        lines.append(",".join([
            _quote(r.url),
            _quote(r.star_label),
            _quote(r.sentiment_label),
            format_confidence(r.sentiment_score),
            _quote(r.summary),
        ]))
    return "\n".join(lines) + "\n"


def export_to_csv(records: Iterable[ResultRecord], directory: Union[str, Path] = ".",
                  filename: str = CSV_FILENAME) -> Path:
    """Write records to ``directory/filename`` and return the path."""
    records = list(records)
    path = Path(directory) / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(to_csv(records))
    logger.info(f"Exported {len(records)} results to {path}")
    return path
