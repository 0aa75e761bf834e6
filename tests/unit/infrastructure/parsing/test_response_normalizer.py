import pytest

from delicli.core.exceptions import MalformedResponseError
from delicli.infrastructure.parsing.response_normalizer import (
    XML_PROLOG,
    element_text,
    failure_envelope,
    is_bare_prolog,
    parse_item_list,
    parse_json,
    parse_tag_list,
    parse_xml,
    success_envelope,
)

POSTS_XML = """<?xml version="1.0" encoding="UTF-8"?>
<posts user="alice" tag="">
  <post href="http://a.example/" description="A" tag="python,web" hash="h1"/>
  <post href="http://b.example/" description="B" tag="misc" hash="h2"/>
</posts>"""


def test_parse_item_list_keeps_every_attribute_and_splits_tags():
    root = parse_xml(POSTS_XML)
    items = parse_item_list(root.findall("post"))
    assert items == [
        {"href": "http://a.example/", "description": "A", "tag": ["python", "web"], "hash": "h1"},
        {"href": "http://b.example/", "description": "B", "tag": ["misc"], "hash": "h2"},
    ]


def test_parse_item_list_can_leave_tag_attribute_alone():
    root = parse_xml('<tags><tag count="4" tag="python,web"/></tags>')
    assert parse_item_list(root.findall("tag"), split_tags=False) == [{"count": "4", "tag": "python,web"}]


def test_parse_item_list_of_nothing_is_empty():
    assert parse_item_list(parse_xml("<posts/>").findall("post")) == []


def test_parse_tag_list_flattens_tag_attributes():
    root = parse_xml('<suggest><popular tag="python"/><popular tag="code"/><network tag="web"/></suggest>')
    assert parse_tag_list(root.findall("popular")) == ["python", "code"]
    assert parse_tag_list(root.findall("network")) == ["web"]
    assert parse_tag_list(root.findall("recommended")) == []


def test_parse_xml_rejects_malformed_body():
    with pytest.raises(MalformedResponseError) as excinfo:
        parse_xml("<html><body>Service Unavailable", url="https://x/")
    assert excinfo.value.url == "https://x/"
    assert "Service Unavailable" in str(excinfo.value)


def test_parse_json_returns_python_values():
    assert parse_json('[{"u": "http://a.example/"}]') == [{"u": "http://a.example/"}]


def test_parse_json_rejects_malformed_body():
    with pytest.raises(MalformedResponseError):
        parse_json("<html></html>")


@pytest.mark.parametrize("body, expected", [
    ("", True),
    (XML_PROLOG, True),
    (XML_PROLOG + "\n", True),
    (XML_PROLOG + "<bundles/>", False),
])
def test_is_bare_prolog(body, expected):
    assert is_bare_prolog(body) is expected


def test_element_text_strips_and_tolerates_missing_elements():
    root = parse_xml("<result> ok </result>")
    assert element_text(root) == "ok"
    assert element_text(root.find("bundle")) == ""


def test_success_envelope_starts_with_success_and_ends_with_url():
    envelope = success_envelope("https://x/", message="done", posts=[])
    assert list(envelope) == ["success", "message", "posts", "url"]
    assert envelope["success"] is True


def test_failure_envelope_shape():
    assert failure_envelope("https://x/", "no bookmarks") == {
        "success": False,
        "message": "no bookmarks",
        "url": "https://x/",
    }
    assert failure_envelope("https://x/")["message"] == ""
