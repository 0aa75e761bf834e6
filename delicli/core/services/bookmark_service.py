"""Delicious API facade.

Each public method pairs one endpoint with its parameter handling, its
success test and the fields it returns. The success tests differ from
endpoint to endpoint because the remote API reports outcomes
inconsistently (a 'code' attribute, the echoed user name, or the root
element's text), so each method checks its own.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Any, Dict, Optional, Sequence, Tuple

import httpx

from delicli.domain.interfaces.bookmark_service import BookmarkService
from delicli.domain.models import common
from delicli.domain.models.common import (
    Envelope,
    EndpointPath,
    Params,
    ParamValue,
    RequestUrl,
)
from delicli.domain.models.settings import ClientSettings
from delicli.infrastructure.http.url_builder import (
    build_feed_path,
    build_query_string,
    to_ascii,
    url_encode_non_ascii,
)
from delicli.infrastructure.parsing.response_normalizer import (
    attribute,
    element_text,
    failure_envelope,
    is_bare_prolog,
    parse_item_list,
    parse_json,
    parse_tag_list,
    parse_xml,
    success_envelope,
)
from delicli.infrastructure.resilience.request_executor import RequestExecutor

logger = logging.getLogger(__name__)

NO_BOOKMARKS = "no bookmarks"
NO_SUGGESTIONS = "no suggestions"
NO_TAGS = "no tags"
ACCESS_DENIED = "access denied"


def _ordered(**params: ParamValue) -> Dict[str, ParamValue]:
    # kwargs keep their call-site order, which becomes the query order.
    return dict(params)


class DeliciousClient(BookmarkService):
    """Client for the Delicious v1 API and the v2 JSON feeds.

    Usage:
        with DeliciousClient(ClientSettings(user="me", password="secret")) as client:
            result = client.recent(count=10)
            if result["success"]:
                for post in result["posts"]:
                    print(post["href"], post["tag"])
    """

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        executor: Optional[RequestExecutor] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """Initializes the client.

        Args:
            settings: Credentials and connection settings. Loaded from the
                configuration layer (env, .env, YAML) when omitted.
            executor: Request executor; built from `settings` when omitted.
            http_client: Optional httpx client handed to the executor.
        """
        if settings is None:
            # Imported lazily so the library can be used without touching config files.
            from delicli.infrastructure.config.settings import load_client_settings
            settings = load_client_settings()
        self.settings = settings
        self.executor = executor or RequestExecutor(settings, http_client=http_client)
        self.url: RequestUrl = RequestUrl("")
        logger.debug(f"DeliciousClient initialized: {settings!r}")

    def __enter__(self) -> "DeliciousClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.executor.close()

    def set_user_password(self, user: str, password: str) -> "DeliciousClient":
        """Overrides the configured credentials. Returns self for chaining."""
        self.settings = self.settings.with_credentials(user, password)
        self.executor.settings = self.settings
        logger.info(f"Credentials overridden for user '{user}'")
        return self

    # --- Request helpers ---

    def _build_url(self, path: EndpointPath, params: Optional[Params] = None) -> RequestUrl:
        url = build_query_string(self.settings.api_url(path), params)
        # Last URL built, for inspection. Envelopes carry their own.
        self.url = url
        return url

    def _fetch_xml(
        self, path: EndpointPath, params: Optional[Params] = None
    ) -> Tuple[ET.Element, RequestUrl]:
        url = self._build_url(path, params)
        logger.info(f"GET {path}")
        return parse_xml(self.executor.execute(url), url), url

    def _is_own_response(self, root: ET.Element) -> bool:
        return attribute(root, "user") == self.settings.user

    # --- Posts ---

    def update(self) -> Envelope:
        """Checks when the user last posted. Call before `all` to skip unchanged fetches."""
        root, request_url = self._fetch_xml(common.POSTS_UPDATE)
        code = attribute(root, "code")
        if code == "200":
            return success_envelope(
                request_url,
                inboxnew=attribute(root, "inboxnew"),
                time=attribute(root, "time"),
                message=code,
            )
        return failure_envelope(request_url, code)

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
        """Adds a post.

        The API mangles non-ASCII input, so the URL gets only its non-ASCII
        characters percent-encoded (which the query builder then encodes a
        second time) and the text fields are transliterated to ASCII.

        Args:
            url: URL of the bookmark.
            description: Title of the bookmark.
            extended: Notes.
            tags: Tags for the item.
            dt: Datestamp, 'CCYY-MM-DDThh:mm:ssZ'.
            replace: Replace an existing post for the same URL.
            shared: False makes the post private.
        """
        params = _ordered(
            url=url_encode_non_ascii(url),
            description=to_ascii(description),
            extended=to_ascii(extended) if extended is not None else None,
            tags=tags,
            dt=dt,
            replace=replace,
            shared=shared,
        )
        root, request_url = self._fetch_xml(common.POSTS_ADD, params)
        code = attribute(root, "code")
        if code == "done":
            return success_envelope(request_url, message=code)
        return failure_envelope(request_url, code)

    def delete(self, url: str) -> Envelope:
        root, request_url = self._fetch_xml(common.POSTS_DELETE, _ordered(url=url))
        code = attribute(root, "code")
        if code == "done":
            return success_envelope(request_url, message=code)
        return failure_envelope(request_url, code)

    def get(
        self,
        tags: Optional[Sequence[str]] = None,
        dt: Optional[str] = None,
        url: Optional[str] = None,
        hashes: Optional[Sequence[str]] = None,
        meta: Optional[bool] = None,
    ) -> Envelope:
        """Returns posts on a single day (the most recent one by default) or for one URL."""
        # Comma-separated tags so that each post's 'tag' attribute splits cleanly.
        params = _ordered(tags=tags, dt=dt, url=url, hashes=hashes, meta=meta, tag_separator="comma")
        root, request_url = self._fetch_xml(common.POSTS_GET, params)
        code = attribute(root, "code")
        if code not in (NO_BOOKMARKS, ACCESS_DENIED):
            return success_envelope(
                request_url,
                dt=attribute(root, "dt"),
                bookmark_key=attribute(root, "bookmark_key"),
                inbox_key=attribute(root, "inbox_key"),
                network_key=attribute(root, "network_key"),
                tags=attribute(root, "tags"),
                posts=parse_item_list(root.findall("post")),
            )
        return failure_envelope(request_url, code)

    def get_by_user(
        self,
        user: str,
        tags: Optional[Sequence[str]] = None,
        private: Optional[str] = None,
        count: Optional[int] = None,
    ) -> Envelope:
        """Public (or, given the private key, private) bookmarks of any user, from the JSON feed."""
        request_url = build_feed_path(
            self.settings.feeds_url,
            _ordered(user=user, tags=tags, private=private, count=count),
        )
        self.url = request_url
        logger.info(f"GET feed for user '{user}'")
        posts = parse_json(self.executor.execute(request_url), request_url)
        if posts:
            return success_envelope(request_url, message="done", posts=posts)
        return failure_envelope(request_url, NO_BOOKMARKS)

    def recent(self, tag: Optional[str] = None, count: Optional[int] = None) -> Envelope:
        """Most recent posts (15 by default, 100 at most)."""
        root, request_url = self._fetch_xml(common.POSTS_RECENT, _ordered(tag=tag, count=count))
        if self._is_own_response(root):
            return success_envelope(
                request_url,
                message=attribute(root, "code"),
                posts=parse_item_list(root.findall("post")),
            )
        return failure_envelope(request_url, attribute(root, "code"))

    def dates(self, tag: Optional[str] = None) -> Envelope:
        """Dates with the number of posts made on each."""
        root, request_url = self._fetch_xml(common.POSTS_DATES, _ordered(tag=tag))
        if self._is_own_response(root):
            return success_envelope(
                request_url,
                message=attribute(root, "code"),
                dates=parse_item_list(root.findall("date")),
            )
        return failure_envelope(request_url, attribute(root, "code"))

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
        """Fetches all bookmarks, optionally by tag, date or index range. Use sparingly."""
        params = _ordered(
            tag_separator=tag_separator,
            tag=tag,
            start=start,
            results=results,
            fromdt=fromdt,
            todt=todt,
            meta=meta,
        )
        root, request_url = self._fetch_xml(common.POSTS_ALL, params)
        if self._is_own_response(root):
            return success_envelope(
                request_url,
                message=attribute(root, "code"),
                posts=parse_item_list(root.findall("post")),
                total=attribute(root, "total"),
            )
        return failure_envelope(request_url, attribute(root, "code"))

    def hashes(self) -> Envelope:
        """Change manifest: URL MD5 and change signature ('meta') of every post."""
        root, request_url = self._fetch_xml(common.POSTS_ALL_HASHES)
        if self._is_own_response(root):
            return success_envelope(
                request_url,
                message=attribute(root, "code"),
                posts=parse_item_list(root.findall("post")),
            )
        return failure_envelope(request_url, attribute(root, "code"))

    def suggest(self, url: str) -> Envelope:
        """Popular, recommended and network tag suggestions for a URL."""
        root, request_url = self._fetch_xml(common.POSTS_SUGGEST, _ordered(url=url))
        code = attribute(root, "code")
        if code not in (NO_SUGGESTIONS, ACCESS_DENIED):
            return success_envelope(
                request_url,
                message=code,
                popular=parse_tag_list(root.findall("popular")),
                recommended=parse_tag_list(root.findall("recommended")),
                network=parse_tag_list(root.findall("network")),
            )
        return failure_envelope(request_url, code)

    # --- Tags ---

    def get_tags(self) -> Envelope:
        """Tags with the number of times each is used."""
        root, request_url = self._fetch_xml(common.TAGS_GET)
        code = attribute(root, "code")
        if code not in (NO_TAGS, ACCESS_DENIED):
            return success_envelope(
                request_url,
                message=code,
                tags=parse_item_list(root.findall("tag"), split_tags=False),
            )
        return failure_envelope(request_url, code)

    def delete_tag(self, tag: str) -> Envelope:
        """Removes a tag from every post."""
        return self._tag_change(common.TAGS_DELETE, _ordered(tag=tag))

    def rename_tag(self, old: str, new: str) -> Envelope:
        return self._tag_change(common.TAGS_RENAME, _ordered(old=old, new=new))

    def _tag_change(self, path: EndpointPath, params: Params) -> Envelope:
        root, request_url = self._fetch_xml(path, params)
        code = attribute(root, "code")
        if code not in (NO_TAGS, ACCESS_DENIED):
            return success_envelope(request_url, message=code)
        return failure_envelope(request_url, code)

    # --- Tag bundles ---

    def get_tag_bundles(self, bundle: Optional[str] = None) -> Envelope:
        """All bundles, or just the named one."""
        request_url = self._build_url(common.TAGS_BUNDLES_ALL, _ordered(bundle=bundle))
        logger.info(f"GET {common.TAGS_BUNDLES_ALL}")
        body = self.executor.execute(request_url)
        # A user without bundles gets nothing but the XML declaration.
        if is_bare_prolog(body):
            return failure_envelope(request_url, "")
        root = parse_xml(body, request_url)
        return success_envelope(
            request_url,
            message=attribute(root, "code"),
            bundles=parse_item_list(root.findall("bundle")),
        )

    def set_tag_bundle(self, bundle: str, tags: Sequence[str]) -> Envelope:
        """Assigns tags to a bundle, replacing whatever it held before."""
        root, request_url = self._fetch_xml(common.TAGS_BUNDLES_SET, _ordered(bundle=bundle, tags=tags))
        if element_text(root) == "ok":
            return success_envelope(request_url, message=element_text(root.find("bundle")))
        return failure_envelope(request_url, attribute(root, "code"))

    def delete_tag_bundle(self, bundle: str) -> Envelope:
        root, request_url = self._fetch_xml(common.TAGS_BUNDLES_DELETE, _ordered(bundle=bundle))
        if element_text(root) == "done":
            return success_envelope(request_url, message=element_text(root.find("bundle")))
        return failure_envelope(request_url, attribute(root, "code"))

    # Names used by the published API documentation.
    getByUser = get_by_user
    getTags = get_tags
    deleteTag = delete_tag
    renameTag = rename_tag
    getTagBundles = get_tag_bundles
    setTagBundle = set_tag_bundle
    deleteTagBundle = delete_tag_bundle
    setUserPassword = set_user_password
