"""Interface for presenting results to the user.

Defines the contract for displaying envelopes, errors and warnings,
allowing different UI implementations.
"""

import abc
from typing import Any

from delicli.domain.models.common import Envelope


class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_envelope(self, envelope: Envelope, **kwargs: Any) -> None:
        """Displays the result of one API operation.

        Args:
            envelope: The Result Envelope returned by the client.
            **kwargs: Additional arguments for formatting (e.g. title).
        """
        pass

    @abc.abstractmethod
    def display_json(self, data: Any) -> None:
        """Displays data as JSON, for scripting."""
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        pass
