"""Turns raw Delicious responses into plain Python structures.

The API answers in XML whose payload lives in element attributes
(`<post href="..." description="..." tag="a,b"/>`); the user feed answers
with a JSON array. Both are flattened into lists of dicts, and every
operation result is wrapped in a Result Envelope:

    {'success': True, ...fields..., 'url': url}
    {'success': False, 'message': code, 'url': url}
"""

import json
import logging
import xml.etree.ElementTree as ET
from typing import Any, Iterable, List, Optional

from delicli.core.exceptions import MalformedResponseError
from delicli.domain.models.common import Envelope, ParsedItem

logger = logging.getLogger(__name__)

XML_PROLOG = '<?xml version="1.0" encoding="UTF-8"?>'
TAG_ATTRIBUTE = "tag"
TAG_LIST_SEPARATOR = ","


def parse_xml(body: str, url: Optional[str] = None) -> ET.Element:
    """Parses an XML body into its root element.

    Raises:
        MalformedResponseError: If the body is not well-formed XML.
    """
    try:
        return ET.fromstring(body)
    except ET.ParseError as e:
        logger.error(f"Unparseable XML from {url}: {e}")
        raise MalformedResponseError(f"Invalid XML response ({e})", body=body, url=url) from e


def parse_json(body: str, url: Optional[str] = None) -> Any:
    """Parses a JSON body.

    Raises:
        MalformedResponseError: If the body is not valid JSON.
    """
    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        logger.error(f"Unparseable JSON from {url}: {e}")
        raise MalformedResponseError(f"Invalid JSON response ({e})", body=body, url=url) from e


def is_bare_prolog(body: str) -> bool:
    """True for a body that is empty or holds nothing but the XML declaration."""
    stripped = body.strip()
    return not stripped or stripped == XML_PROLOG


def attribute(element: ET.Element, name: str) -> str:
    """Returns an attribute as a string, '' when absent."""
    return element.get(name, "")


def element_text(element: Optional[ET.Element]) -> str:
    if element is None:
        return ""
    return (element.text or "").strip()


def parse_item_list(elements: Iterable[ET.Element], split_tags: bool = True) -> List[ParsedItem]:
    """Flattens each element to a dict of its attributes.

    Args:
        elements: e.g. every <post/> child of a <posts> root.
        split_tags: Turn the 'tag' attribute into a list split on ','.
            Off for tags/get, whose 'tag' attribute is a single tag name.
    """
    items: List[ParsedItem] = []
    for element in elements:
        item: ParsedItem = {}
        for name, value in element.attrib.items():
            if name == TAG_ATTRIBUTE and split_tags:
                item[name] = value.split(TAG_LIST_SEPARATOR)
            else:
                item[name] = value
        items.append(item)
    return items


def parse_tag_list(elements: Iterable[ET.Element]) -> List[str]:
    """Collects the 'tag' attribute of each element into a flat list.

    Used for posts/suggest, whose <popular>, <recommended> and <network>
    elements each name one tag.
    """
    return [attribute(element, TAG_ATTRIBUTE) for element in elements]


def success_envelope(url: str, **fields: Any) -> Envelope:
    envelope: Envelope = {"success": True}
    envelope.update(fields)
    envelope["url"] = url
    return envelope


def failure_envelope(url: str, message: str = "") -> Envelope:
    return {"success": False, "message": message, "url": url}
