"""Interface for bookmarking services.

Defines the contract the CLI front end is written against. Every
operation returns a Result Envelope dict; transport failures raise.
"""

import abc
from typing import Optional, Sequence

from ..models.common import Envelope


class BookmarkService(abc.ABC):
    """Abstract Base Class for a Delicious-compatible bookmarking API."""

    @abc.abstractmethod
    def set_user_password(self, user: str, password: str) -> "BookmarkService":
        """Overrides the configured credentials for this instance."""
        pass

    # --- Posts ---

    @abc.abstractmethod
    def update(self) -> Envelope:
        """Time of the user's last post and the number of new inbox items."""
        pass

    @abc.abstractmethod
    def add(
        self,
        url: str,
        description: str,
        extended: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
        dt: Optional[str] = None,
        replace: Optional[bool] = None,
        shared: Optional[bool] = None,
    ) -> Envelope:
        pass

    @abc.abstractmethod
    def delete(self, url: str) -> Envelope:
        pass

    @abc.abstractmethod
    def get(
        self,
        tags: Optional[Sequence[str]] = None,
        dt: Optional[str] = None,
        url: Optional[str] = None,
        hashes: Optional[Sequence[str]] = None,
        meta: Optional[bool] = None,
    ) -> Envelope:
        pass

    @abc.abstractmethod
    def get_by_user(
        self,
        user: str,
        tags: Optional[Sequence[str]] = None,
        private: Optional[str] = None,
        count: Optional[int] = None,
    ) -> Envelope:
        pass

    @abc.abstractmethod
    def recent(self, tag: Optional[str] = None, count: Optional[int] = None) -> Envelope:
        pass

    @abc.abstractmethod
    def dates(self, tag: Optional[str] = None) -> Envelope:
        pass

    @abc.abstractmethod
    def all(
        self,
        tag: Optional[str] = None,
        start: Optional[int] = None,
        results: Optional[int] = None,
        fromdt: Optional[str] = None,
        todt: Optional[str] = None,
        meta: Optional[bool] = None,
        tag_separator: Optional[str] = None,
    ) -> Envelope:
        pass

    @abc.abstractmethod
    def hashes(self) -> Envelope:
        pass

    @abc.abstractmethod
    def suggest(self, url: str) -> Envelope:
        pass

    # --- Tags ---

    @abc.abstractmethod
    def get_tags(self) -> Envelope:
        pass

    @abc.abstractmethod
    def delete_tag(self, tag: str) -> Envelope:
        pass

    @abc.abstractmethod
    def rename_tag(self, old: str, new: str) -> Envelope:
        pass

    # --- Tag bundles ---

    @abc.abstractmethod
    def get_tag_bundles(self, bundle: Optional[str] = None) -> Envelope:
        pass

    @abc.abstractmethod
    def set_tag_bundle(self, bundle: str, tags: Sequence[str]) -> Envelope:
        pass

    @abc.abstractmethod
    def delete_tag_bundle(self, bundle: str) -> Envelope:
        pass
