"""delicli: client library and CLI for the Delicious bookmarking API."""

from delicli.core.exceptions import (
    DeliciousConnectionError,
    DeliciousError,
    MalformedResponseError,
)
from delicli.core.services.bookmark_service import DeliciousClient
from delicli.domain.models.settings import ClientSettings

__version__ = "1.0.0"

__all__ = [
    "ClientSettings",
    "DeliciousClient",
    "DeliciousConnectionError",
    "DeliciousError",
    "MalformedResponseError",
]
