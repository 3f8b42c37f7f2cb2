"""HTTP client for the remote analysis job API."""

import logging
from typing import Any, Dict, Optional

import requests
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from ..core.config import settings
from ..core.constants import ApiConstants, ErrorConstants
from ..core.errors import SubmissionError, PollingError
from ..core.models import StatusResponse, parse_results

logger = logging.getLogger(__name__)


class JobApiClient:
    """Talks to the ``/analyse``, ``/status`` and ``/cancel`` endpoints.

    Transport failures and error bodies are translated into
    :class:`SubmissionError` / :class:`PollingError` carrying the message
    that should be shown to the user.
    """
    
    def __init__(self, base_url: str, timeout: float = 30.0, verify: bool = True,
                 session: Optional[requests.Session] = None, cancel_attempts: int = 2):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.verify = verify
        self.cancel_attempts = max(1, int(cancel_attempts))
        self.session = session or requests.Session()
        self.session.headers.setdefault("Accept", "application/json")
    
    @classmethod
    def from_settings(cls, config=None) -> "JobApiClient":
        config = config or settings
        return cls(config.api_base_url, timeout=config.request_timeout, verify=config.verify_ssl,
                   cancel_attempts=config.cancel_attempts)
    
    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"
    
    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None
    
    def submit(self, url: str, params: Optional[Dict[str, Any]] = None) -> str:
        """Create a job for ``url`` and return its id."""
        payload = dict(params or {})
        payload["urls"] = [url]
        try:
            response = self.session.post(
                self._url(ApiConstants.ANALYSE_PATH),
                json=payload,
                timeout=self.timeout,
                verify=self.verify,
            )
        except requests.RequestException as e:
            logger.error(f"Job submission failed: {e}")
            raise SubmissionError(ErrorConstants.SUBMIT_NETWORK_ERROR) from e
        
        data = self._json(response)
        if isinstance(data, dict) and data.get("error"):
            raise SubmissionError(str(data["error"]))
        if not response.ok:
            logger.error(f"Job submission rejected: {response.status_code}")
            raise SubmissionError(ErrorConstants.SUBMIT_SERVER_ERROR)
        
        job_id = data.get("job_id") if isinstance(data, dict) else None
        if job_id is None or str(job_id) == "":
            logger.error(f"Job submission returned no job id: {data!r}")
            raise SubmissionError(ErrorConstants.UNEXPECTED_RESPONSE)
        return str(job_id)
    
    def get_status(self, job_id: str) -> StatusResponse:
        """Fetch the current status and result snapshot of a job."""
        try:
            response = self.session.get(
                self._url(ApiConstants.STATUS_PATH.format(job_id=job_id)),
                timeout=self.timeout,
                verify=self.verify,
            )
        except requests.RequestException as e:
            logger.error(f"Status request for job {job_id} failed: {e}")
            raise PollingError(ErrorConstants.POLL_NETWORK_ERROR) from e
        
        data = self._json(response)
        if not isinstance(data, dict):
            raise PollingError(ErrorConstants.UNEXPECTED_RESPONSE)
        
        error = data.get("error")
        if error:
            return StatusResponse(status=str(data.get("status") or ""), error=str(error))
        if not response.ok:
            logger.error(f"Status request for job {job_id} returned {response.status_code}")
            raise PollingError(ErrorConstants.UNEXPECTED_RESPONSE)
        
        status = data.get("status")
        results = data.get("results")
        if results is None:
            results = []
        if not isinstance(status, str) or not isinstance(results, list):
            raise PollingError(ErrorConstants.UNEXPECTED_RESPONSE)
        return StatusResponse(status=status.lower(), results=parse_results(results))
    
    def cancel(self, job_id: str) -> None:
        """Ask the server to stop a job. Raises ``requests.RequestException`` on failure."""
        self._post_cancel.retry_with(stop=stop_after_attempt(self.cancel_attempts))(self, job_id)
    
    @retry(
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=ErrorConstants.RETRY_BASE_DELAY, max=ErrorConstants.RETRY_MAX_DELAY),
        retry=retry_if_exception_type(requests.RequestException),
        reraise=True,
    )
    def _post_cancel(self, job_id: str) -> None:
        response = self.session.post(
            self._url(ApiConstants.CANCEL_PATH.format(job_id=job_id)),
            timeout=self.timeout,
            verify=self.verify,
        )
        response.raise_for_status()
        logger.info(f"Cancel request for job {job_id} accepted")
    
    def close(self) -> None:
        self.session.close()
