"""Builds request URLs for the Delicious API.

Two styles are supported:
- `build_query_string` appends parameters as a query string (every
  `posts/*` and `tags/*` endpoint).
- `build_feed_path` encodes parameters as path segments (the JSON user
  feed on feeds.delicious.com).

Strings are percent-encoded (space -> %20) while list elements are
form-encoded (space -> +). The remote service accepts both, and tag
lists rely on '+' being the word separator.
"""

import logging
import re
from typing import Optional
from urllib.parse import quote, quote_plus

from unidecode import unidecode

from delicli.domain.models.common import Params, ParamValue, RequestUrl

logger = logging.getLogger(__name__)

TAG_PARAM_NAMES = ("tag", "tags")
TAG_SEPARATOR = quote(",", safe="")  # '%2C'
LIST_SEPARATOR = "+"
DEFAULT_FEED_COUNT = 100

_NON_ASCII = re.compile(r"[^\x00-\x7F]")


def _is_empty(value: ParamValue) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return False  # False is a real answer ('no'), not a missing one
    if isinstance(value, (str, list, tuple)):
        return len(value) == 0
    return False


def _separator_for(url: str) -> str:
    """'?' for the first parameter, '&' once a query string has started."""
    return "&" if "?" in url else "?"


def encode_param(name: str, value: ParamValue) -> str:
    """Encodes one parameter as `name=value` following the type rules."""
    if isinstance(value, bool):
        return f"{name}={'yes' if value else 'no'}"
    if isinstance(value, str):
        return f"{name}={quote(value, safe='')}"
    if isinstance(value, int):
        return f"{name}={value}"
    if isinstance(value, (list, tuple)):
        separator = TAG_SEPARATOR if name in TAG_PARAM_NAMES else LIST_SEPARATOR
        return f"{name}=" + separator.join(quote_plus(str(item)) for item in value)
    raise TypeError(f"Unsupported value type for parameter '{name}': {type(value).__name__}")


def build_query_string(url: str, params: Optional[Params]) -> RequestUrl:
    """Appends every non-empty parameter to `url`.

    Args:
        url: Base URL, possibly already carrying a query string
            (e.g. 'posts/all?hashes').
        params: Parameter name to value. Order is preserved.

    Returns:
        The URL with the query string appended.
    """
    if not params:
        return RequestUrl(url)

    for name, value in params.items():
        if _is_empty(value):
            logger.debug(f"Skipping empty parameter '{name}'")
            continue
        url += _separator_for(url) + encode_param(name, value)

    return RequestUrl(url)


def build_feed_path(url: str, params: Params) -> RequestUrl:
    """Builds a user-feed URL: `{url}{user}[/{tags}][?private=...]&count=N`.

    The user name and private key are percent-encoded. `count` defaults to
    100, the feed's maximum page size.
    """
    user = params.get("user")
    if user:
        url += quote(str(user), safe="")

    tags = params.get("tags")
    if tags:
        if isinstance(tags, str):
            tags = [tags]
        url += "/" + LIST_SEPARATOR.join(quote_plus(tag) for tag in tags)

    private = params.get("private")
    if private:
        url += _separator_for(url) + f"private={quote(str(private), safe='')}"

    count = params.get("count") or DEFAULT_FEED_COUNT
    url += _separator_for(url) + f"count={count}"

    return RequestUrl(url)


def url_encode_non_ascii(value: str) -> str:
    """Percent-encodes only the non-ASCII characters, one at a time.

    'http://example.com/caña' -> 'http://example.com/ca%C3%B1a'
    """
    return _NON_ASCII.sub(lambda match: quote(match.group(0), safe=""), value)


def to_ascii(value: str) -> str:
    """Transliterates text to plain ASCII ('Camión' -> 'Camion', 'Straße' -> 'Strasse')."""
    return unidecode(value)
