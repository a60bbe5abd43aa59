"""Dataset loader: fetches a JSON array of records from a URL."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

import requests

from ..constants import ERROR_MESSAGES, REQUEST_TIMEOUT, USER_AGENT
from ..exceptions import DataLoadError, DataParseError, InvalidUrlError
from ..utils.validators import is_url, validate_records

logger = logging.getLogger(__name__)


@dataclass
class Result:
    """A loaded dataset: column names (from the first record) and the records."""

    columns: List[str] = field(default_factory=list)
    data: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "Result":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return {"columns": list(self.columns), "data": list(self.data)}


class UrlService:
    """Loads a dataset from a URL returning a JSON array of key/value records."""

    def __init__(self, url: str, timeout: int = REQUEST_TIMEOUT) -> None:
        """Initialize the loader.

        Args:
            url: The dataset URL
            timeout: Request timeout in seconds
        """
        self.url = url.strip() if isinstance(url, str) else url
        self.timeout = timeout
        self.headers = {
            "user-agent": USER_AGENT,
            "accept": "application/json",
        }

    def validate_url(self) -> None:
        """Raise InvalidUrlError unless the URL is well formed."""
        if not is_url(self.url):
            raise InvalidUrlError(ERROR_MESSAGES["invalid_url"], url=self.url)

    def fetch_result(self) -> Result:
        """Fetch and parse the dataset.

        Returns:
            Result with the column names and records

        Raises:
            InvalidUrlError: When the URL is malformed
            DataParseError: When the body is not a non-empty array of objects
            DataLoadError: When the service reports an error or the request fails
        """
        self.validate_url()

        request_id = str(uuid.uuid4())
        start_time = datetime.now()
        logger.info(f"Request {request_id}: Starting GET {self.url}")

        try:
            response = requests.get(self.url, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as e:
            duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
            logger.exception(f"Request {request_id}: Failed in {duration_ms}ms: {e}")
            raise DataLoadError(ERROR_MESSAGES["load_failed"], url=self.url) from e

        duration_ms = int((datetime.now() - start_time).total_seconds() * 1000)
        logger.info(f"Request {request_id}: Success in {duration_ms}ms, status={response.status_code}")

        if isinstance(payload, dict) and payload.get("error"):
            message = payload.get("message") or ERROR_MESSAGES["load_failed"]
            logger.warning(f"Request {request_id}: Service reported an error: {message}")
            raise DataLoadError(str(message), url=self.url)

        return self.parse_result(payload)

    def parse_result(self, payload: Any) -> Result:
        """Turn a decoded JSON payload into a Result.

        Args:
            payload: The decoded response body

        Returns:
            Result whose columns are the keys of the first record
        """
        is_valid, errors = validate_records(payload)
        if not is_valid:
            logger.warning(f"Unusable dataset from {self.url}: {'; '.join(errors[:5])}")
            raise DataParseError(ERROR_MESSAGES["parse_failed"], url=self.url)

        return Result(columns=list(payload[0].keys()), data=payload)
