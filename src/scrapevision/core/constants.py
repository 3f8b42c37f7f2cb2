"""Constants and configuration values for ScrapeVision."""

# Label vocabularies
class LabelConstants:
    """Closed label sets used by the analysis service."""
    
    STAR_LABELS = ("1 star", "2 stars", "3 stars", "4 stars", "5 stars")
    SENTIMENT_LABELS = ("POSITIVE", "NEGATIVE", "NEUTRAL")
    ALL = "all"  # identity filter value

# Remote job API
class ApiConstants:
    """Endpoint paths and status values of the job API."""
    
    ANALYSE_PATH = "/analyse"
    STATUS_PATH = "/status/{job_id}"
    CANCEL_PATH = "/cancel/{job_id}"
    
    STATUS_PENDING = "pending"
    STATUS_COMPLETED = "completed"
    STATUS_FAILED = "failed"

# User-visible error messages
class ErrorConstants:
    """Messages recorded as the job's last error."""
    
    SUBMIT_NETWORK_ERROR = "Network error"
    SUBMIT_SERVER_ERROR = "Server error occurred"
    POLL_NETWORK_ERROR = "Error fetching job status."
    UNEXPECTED_RESPONSE = "Unexpected response from server."
    JOB_FAILED = "Crawl job failed."
    POLL_LIMIT_REACHED = "Job did not finish before the polling limit."
    
    RETRY_BASE_DELAY = 0.5  # base delay for cancel notification backoff
    RETRY_MAX_DELAY = 4.0

# Export
class ExportConstants:
    """Constants for the CSV export."""
    
    CSV_FILENAME = "results.csv"
    CSV_MIME_TYPE = "text/csv"
    CSV_HEADER = ("URL", "Star Rating", "Sentiment Label", "Confidence", "Summary")
    CONFIDENCE_DECIMALS = 3

# Crawl parameters
class CrawlConstants:
    """Constants for the crawl parameter bag."""
    
    METHODS = ("bfs", "dfs")
    MIN_DEPTH = 1
    MAX_DEPTH = 10

# Presentation
class DisplayConstants:
    """Formatting shared by the CLI and the presentation shell."""
    
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
