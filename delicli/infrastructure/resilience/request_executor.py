"""Service for executing Delicious API requests with throttling and retries.

Every attempt waits on the shared RateLimiter first. An empty body (HTTP
error status, dropped connection, timeout) is retried up to the attempt
budget. HTTP 500 and 999 mean the service is throttling this client and
abort the request at once, since retrying only prolongs the ban.
"""

import logging
import time
from typing import Any, Optional, Tuple

import httpx

from delicli.core.exceptions import DeliciousConnectionError
from delicli.domain.events.api_events import (
    RequestDeferred,
    RequestFailed,
    RequestInitiated,
    RequestSucceeded,
    RetryScheduled,
)
from delicli.domain.models.common import ResponseBody
from delicli.domain.models.settings import ClientSettings, redact_secret
from delicli.infrastructure.resilience.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

THROTTLING_STATUS_CODES = (500, 999)


def dispatch_event(event: Any) -> None:
    logger.debug(f"EVENT: {event}")


class RequestExecutor:
    """Owns the outbound HTTP calls of one client instance."""

    def __init__(
        self,
        settings: ClientSettings,
        rate_limiter: Optional[RateLimiter] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """Initializes the RequestExecutor.

        Args:
            settings: Credentials and connection settings.
            rate_limiter: Throttle shared by every request of this executor.
            http_client: Optional pre-built httpx client (tests pass one
                backed by httpx.MockTransport). Owned and closed by the
                executor only when it creates it.
        """
        self.settings = settings
        self.rate_limiter = rate_limiter or RateLimiter(min_interval=settings.min_interval)
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client()

        logger.debug(
            f"RequestExecutor initialized: max_attempts={settings.max_attempts}, "
            f"timeout={settings.timeout}s, min_interval={self.rate_limiter.min_interval}s"
        )

    def __enter__(self) -> "RequestExecutor":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _send_once(self, url: str) -> Tuple[Optional[int], str]:
        """Performs a single GET. Error statuses and transport errors give an empty body."""
        try:
            response = self._client.get(
                url,
                auth=(self.settings.user, self.settings.password),
                headers={"User-Agent": self.settings.user_agent},
                timeout=self.settings.timeout,
                follow_redirects=True,
            )
        except httpx.RequestError as e:
            logger.warning(f"Request to {url} failed: {type(e).__name__}: {e}")
            return None, ""

        status_code = response.status_code
        if status_code in THROTTLING_STATUS_CODES:
            return status_code, response.text
        if response.is_error:
            logger.warning(f"HTTP {status_code} from {url}")
            return status_code, ""
        return status_code, response.text

    def execute(self, url: str) -> ResponseBody:
        """Fetches `url`, returning the first non-empty body.

        Raises:
            DeliciousConnectionError: On HTTP 500/999, or when every attempt
                came back empty.
        """
        max_attempts = self.settings.max_attempts
        attempts = 0
        status_code: Optional[int] = None

        while attempts < max_attempts:
            waited = self.rate_limiter.wait_for_permission()
            if waited > 0:
                dispatch_event(RequestDeferred(url=url, wait_time_seconds=waited))

            attempts += 1
            dispatch_event(RequestInitiated(url=url, attempt_number=attempts))
            start_time = time.perf_counter()
            status_code, body = self._send_once(url)
            latency_ms = (time.perf_counter() - start_time) * 1000

            if status_code in THROTTLING_STATUS_CODES:
                message = (
                    f"Delicious has throttled the application. Attempts: {attempts}. "
                    f'HTTP code: "{status_code}". URL: {url}'
                )
                logger.error(message)
                dispatch_event(RequestFailed(url=url, error_type="throttled", error_message=message, status_code=status_code))
                raise DeliciousConnectionError(message, attempts=attempts, url=url, status_code=status_code)

            if body:
                logger.debug(f"Received {len(body)} bytes from {url} in {latency_ms:.0f}ms")
                dispatch_event(RequestSucceeded(url=url, attempt_number=attempts, latency_ms=latency_ms, status_code=status_code))
                return ResponseBody(body)

            if attempts < max_attempts:
                logger.warning(f"Empty response from {url} on attempt {attempts}/{max_attempts}. Retrying...")
                dispatch_event(RetryScheduled(url=url, attempt_number=attempts, status_code=status_code))

        message = (
            f"No response from Delicious after {attempts} attempts. URL: {url}. "
            f"User: {self.settings.user}. Password: {redact_secret(self.settings.password)}"
        )
        logger.error(message)
        dispatch_event(RequestFailed(url=url, error_type="no_response", error_message=message, status_code=status_code))
        raise DeliciousConnectionError(message, attempts=attempts, url=url, status_code=status_code)
