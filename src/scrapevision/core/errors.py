"""Error taxonomy for ScrapeVision."""


class ScrapeVisionError(Exception):
    """Base class for all ScrapeVision errors."""


class JobError(ScrapeVisionError):
    """An error that ends the current job; ``message`` is shown to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class SubmissionError(JobError):
    """Job creation failed (transport error or rejected by the server)."""


class PollingError(JobError):
    """A status poll failed or reported an error."""


class JobFailed(JobError):
    """The server marked the job as failed without a specific message."""


class JobStateError(ScrapeVisionError):
    """A command was issued in a state that does not allow it."""
