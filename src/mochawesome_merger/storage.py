"""
Reading source reports and writing the merged report.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import requests
from requests.adapters import HTTPAdapter
from requests.exceptions import ConnectionError, Timeout
from urllib3.util.retry import Retry

from .exceptions import ReportFetchError, ReportFormatError, ReportHTTPError, ReportTimeoutError
from .models import Report
from .reporting import JSONReporter, ReportGenerator

logger = logging.getLogger(__name__)


def is_remote(source: str) -> bool:
    """Return True if the source is an http(s) URL."""
    return source.startswith("http://") or source.startswith("https://")


class ReportReader:
    """
    Loads mochawesome reports from local files or http(s) URLs.

    Remote sources share one session with retries on transient server
    errors, so CI jobs can merge shard artifacts straight from an artifact
    store.
    """

    def __init__(
        self,
        timeout: int = 10,
        auth_token: Optional[str] = None,
        max_retries: int = 3,
    ):
        """
        Initialize the reader.

        Args:
            timeout: Request timeout in seconds for remote sources
            auth_token: Optional bearer token sent with remote requests
            max_retries: Maximum number of retries for 5xx responses
        """
        self.timeout = timeout
        self.auth_token = auth_token

        self.session = requests.Session()
        retry = Retry(
            total=max_retries,
            backoff_factor=0.5,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=["GET"],
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        if self.auth_token:
            self.session.headers.update({"Authorization": f"Bearer {self.auth_token}"})

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self) -> "ReportReader":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __call__(self, source: str) -> Report:
        return self.read(source)

    def read(self, source: str) -> Report:
        """
        Read and parse one source report.

        Raises:
            OSError: If a local file cannot be read
            json.JSONDecodeError: If the content is not JSON
            ReportFormatError: If the JSON is not a mochawesome report
            ReportFetchError, ReportTimeoutError, ReportHTTPError: For remote sources
        """
        if is_remote(source):
            text = self._fetch(source)
        else:
            logger.debug("Reading report file %s", source)
            text = Path(source).read_text(encoding="utf-8")

        data = json.loads(text)
        try:
            return Report.from_dict(data)
        except ReportFormatError as e:
            e.source = source
            raise

    def _fetch(self, url: str) -> str:
        logger.debug("Fetching report from %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except Timeout as e:
            logger.warning("Request to %s timed out after %ds", url, self.timeout)
            raise ReportTimeoutError(url, self.timeout) from e
        except ConnectionError as e:
            logger.error("Connection failed to %s: %s", url, e)
            raise ReportFetchError(url, e) from e
        except requests.RequestException as e:
            logger.error("Request failed for %s: %s", url, e)
            raise ReportFetchError(url, e) from e

        if response.status_code >= 400:
            raise ReportHTTPError(response.status_code, url, response.text or "")
        return response.text


class ReportWriter:
    """Renders a report and writes it to a file, replacing any existing content."""

    def __init__(self, generator: Optional[ReportGenerator] = None):
        self.generator = generator or JSONReporter()
        self.last_report: Optional[Report] = None

    def __call__(self, report: Report, destination: str) -> None:
        self.write(report, destination)

    def write(self, report: Report, destination: str) -> None:
        output_path = Path(destination)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.generator.generate(report), encoding="utf-8")
        self.last_report = report
        logger.info("Merged report written to %s", destination)
