"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py), delegates the
work to the bookmark service and hands the resulting envelope to the
user interface. Returns the process exit code.
"""

import logging
from typing import Any

from delicli.core.exceptions import DeliciousError
from delicli.domain.interfaces.bookmark_service import BookmarkService
from delicli.domain.interfaces.user_interface import UserInterface

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class CommandHandler:
    """Handles incoming commands and delegates to the bookmark service."""

    def __init__(
        self,
        service: BookmarkService,
        ui: UserInterface,
        json_output: bool = False,
    ):
        """Initializes the CommandHandler.

        Args:
            service: The bookmark service (normally a DeliciousClient).
            ui: Where results and errors are shown.
            json_output: Print raw envelopes as JSON instead of tables.
        """
        self.service = service
        self.ui = ui
        self.json_output = json_output

    def handle(self, operation: str, **params: Any) -> int:
        """Runs one service operation and displays its envelope.

        Args:
            operation: Name of the BookmarkService method, e.g. 'recent'.
            **params: Keyword arguments for that method.

        Returns:
            EXIT_OK for a success envelope, EXIT_FAILURE for a failure
            envelope or a raised DeliciousError.
        """
        logger.info(f"Handling '{operation}' command")
        method = getattr(self.service, operation)
        try:
            envelope = method(**params)
        except DeliciousError as e:
            logger.error(f"'{operation}' failed: {e}", exc_info=True)
            self.ui.display_error(f"{operation} failed: {e}")
            return EXIT_FAILURE

        if self.json_output:
            self.ui.display_json(envelope)
        else:
            self.ui.display_envelope(envelope, title=operation)

        if not envelope.get("success"):
            logger.info(f"'{operation}' returned a failure envelope: {envelope.get('message')!r}")
            return EXIT_FAILURE
        return EXIT_OK
