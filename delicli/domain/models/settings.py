"""Client configuration value object."""

from dataclasses import dataclass, replace

from .common import EndpointPath, RequestUrl

DEFAULT_PROTOCOL = "https"
DEFAULT_BASE_HOST = "api.del.icio.us/v1/"
DEFAULT_FEEDS_URL = "http://feeds.delicious.com/v2/json/"
DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_USER_AGENT = "Lalicious/1.0"
DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_MIN_INTERVAL_SECONDS = 1.0


@dataclass(frozen=True)
class ClientSettings:
    """Connection settings and credentials for one client instance.

    Immutable: credentials are swapped with `with_credentials`, which
    returns a new instance.
    """
    user: str = ""
    password: str = ""
    protocol: str = DEFAULT_PROTOCOL
    base_host: str = DEFAULT_BASE_HOST
    feeds_url: str = DEFAULT_FEEDS_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    min_interval: float = DEFAULT_MIN_INTERVAL_SECONDS

    def api_url(self, path: EndpointPath) -> RequestUrl:
        """Builds `{protocol}://{base_host}{path}`."""
        return RequestUrl(f"{self.protocol}://{self.base_host}{path}")

    def with_credentials(self, user: str, password: str) -> "ClientSettings":
        return replace(self, user=user, password=password)

    def __repr__(self) -> str:
        # Keep the secret out of logs and tracebacks.
        return (
            f"ClientSettings(user={self.user!r}, password={redact_secret(self.password)!r}, "
            f"protocol={self.protocol!r}, base_host={self.base_host!r})"
        )


def redact_secret(secret: str) -> str:
    """Keeps only the first and last character: 'abcdef' -> 'a...f'.

    Secrets of two characters or fewer are hidden completely.
    """
    if len(secret) <= 2:
        return "..."
    return f"{secret[:1]}...{secret[-1:]}"
