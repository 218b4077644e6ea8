"""HTTP client with timeouts, status validation and retry with backoff."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from typing import Any

import requests

from ..common.config import HttpSettings, settings as default_settings

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})


class HTTPStatusError(requests.HTTPError):
    """Response status was not one of the accepted statuses."""


class HTTPClient:
    """HTTP client wrapping a requests session.

    Features:
    - Per-call timeout and retry count (defaults from HttpSettings)
    - Explicit accepted-status list, else any 2xx
    - Exponential backoff on transport errors, 429 and 5xx
    """

    def __init__(
        self,
        settings: HttpSettings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = settings or default_settings.http
        self._session = session or requests.Session()

    def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        json_body: Any = None,
        data: str | bytes | None = None,
        retries: int | None = None,
        timeout: float | None = None,
        valid_statuses: Iterable[int] | None = None,
    ) -> requests.Response:
        """Send a request, retrying transient failures.

        Args:
            method: HTTP method.
            url: Target URL.
            params: Query parameters.
            headers: Extra headers (merged with defaults).
            json_body: Body serialized as JSON.
            data: Raw body, sent as-is.
            retries: Extra attempts after the first one.
            timeout: Seconds before the request is abandoned.
            valid_statuses: Accepted statuses. Any 2xx when omitted.

        Returns:
            requests.Response object.

        Raises:
            HTTPStatusError: Status not accepted (after retries for 429/5xx).
            requests.RequestException: Transport failure after all retries.
        """
        retries = self.settings.retries if retries is None else retries
        timeout = self.settings.timeout_seconds if timeout is None else timeout
        accepted = frozenset(valid_statuses) if valid_statuses else None

        merged_headers = {"User-Agent": self.settings.user_agent}
        if headers:
            merged_headers.update(headers)

        attempts = retries + 1
        last_exc: Exception | None = None
        for attempt in range(attempts):
            try:
                resp = self._session.request(
                    method,
                    url,
                    params=params,
                    headers=merged_headers,
                    json=json_body,
                    data=data,
                    timeout=timeout,
                )
                self._validate(resp, accepted)
                return resp

            except requests.RequestException as exc:
                last_exc = exc

                status = exc.response.status_code if exc.response is not None else None
                if status is not None and status not in RETRYABLE_STATUSES:
                    logger.warning("%s %s failed (%d, no retry)", method, url, status)
                    raise

                if attempt + 1 >= attempts:
                    break

                wait_time = self.settings.backoff_base ** attempt
                logger.warning(
                    "%s %s failed (attempt %d/%d): %s, retrying in %.1fs",
                    method,
                    url,
                    attempt + 1,
                    attempts,
                    exc,
                    wait_time,
                )
                time.sleep(wait_time)

        raise last_exc  # type: ignore[misc]

    def get_json(self, url: str, **kwargs: Any) -> Any:
        """GET a URL and return the decoded JSON body."""
        return self.request("GET", url, **kwargs).json()

    @staticmethod
    def _validate(resp: requests.Response, accepted: frozenset[int] | None) -> None:
        ok = resp.status_code in accepted if accepted else 200 <= resp.status_code < 300
        if not ok:
            raise HTTPStatusError(
                f"Unexpected status {resp.status_code} from {resp.url}",
                response=resp,
            )

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def __enter__(self) -> HTTPClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
