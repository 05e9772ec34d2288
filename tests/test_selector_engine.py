import logging

import cssselect
import pytest

from html5_tree.dom import CaseSensitivity, Element, NodeType, SelectorEngine
from html5_tree.parser import parse_html

PAGE = ('<!DOCTYPE html><html><head><title>Menu</title></head><body>'
        '<ul id="menu" class="nav main">'
        '<li class="item first" data-id="1">One</li>'
        '<li class="item" data-id="2" lang="en-US">Two</li>'
        '<li class="item last" data-id="3"></li>'
        '</ul>'
        '<p class="Note">Text</p><p></p>'
        '</body></html>')


@pytest.fixture()
def document():
    return parse_html(PAGE)


def _ids(elements):
    return [element.get_attribute("data-id") for element in elements]


def test_type_id_and_class_selectors(document):
    assert _ids(document.select("li")) == ["1", "2", "3"]
    assert document.select_first("#menu").local_name == "ul"
    assert _ids(document.select(".item.first")) == ["1"]
    assert document.select(".missing") == []


def test_class_matching_agrees_with_attribute_store(document):
    elements = [n for n in document.descendants() if n.node_type == NodeType.ELEMENT_NODE]

    for name in ["item", "first", "nav", "Note", "note", "last", "absent"]:
        expected = [e for e in elements if e.attributes.has_class(name, CaseSensitivity.CASE_SENSITIVE)]
        assert document.select(f".{name}") == expected


@pytest.mark.parametrize("selector, expected", [
    ("[data-id]", ["1", "2", "3"]),
    ('[data-id="2"]', ["2"]),
    ('[class~="first"]', ["1"]),
    ('[lang|="en"]', ["2"]),
    ('[class^="item l"]', ["3"]),
    ('[class$="first"]', ["1"]),
    ('[class*="tem"]', ["1", "2", "3"]),
])
def test_attribute_selectors(document, selector, expected):
    assert _ids(document.select(selector)) == expected


def test_combinators(document):
    assert _ids(document.select("body li")) == ["1", "2", "3"]
    assert _ids(document.select("ul > li")) == ["1", "2", "3"]
    assert _ids(document.select("body > li")) == []
    assert _ids(document.select(".first + li")) == ["2"]
    assert _ids(document.select(".first ~ li")) == ["2", "3"]


def test_structural_pseudo_classes(document):
    assert _ids(document.select("li:first-child")) == ["1"]
    assert _ids(document.select("li:last-child")) == ["3"]
    assert _ids(document.select("li:nth-child(odd)")) == ["1", "3"]
    assert _ids(document.select("li:nth-child(2)")) == ["2"]
    assert _ids(document.select("li:nth-last-child(1)")) == ["3"]
    assert _ids(document.select("li:empty")) == ["3"]
    assert _ids(document.select("li:not(.first)")) == ["2", "3"]
    assert [e.local_name for e in document.select(":root")] == ["html"]
    assert len(document.select("p:first-of-type")) == 1
    assert len(document.select("p:last-of-type")) == 1
    assert document.select("ul:only-of-type")[0].id == "menu"


def test_selector_groups_keep_document_order(document):
    result = document.select("p, #menu, li.last")

    assert [e.local_name for e in result] == ["ul", "li", "p", "p"]


def test_select_includes_root(document):
    ul = document.select_first("ul")

    assert ul.select("ul") == [ul]
    assert ul.select_first(".last").get_attribute("data-id") == "3"


def test_matches_and_closest(document):
    li = document.select_first(".first")

    assert li.matches("ul > .item")
    assert not li.matches("p")
    assert li.closest("ul").id == "menu"
    assert li.closest("li") is li
    assert li.closest("table") is None


def test_class_is_case_sensitive_in_standards_mode(document):
    assert document.select(".note") == []
    assert len(document.select(".Note")) == 1


def test_class_and_id_are_case_insensitive_in_quirks_mode():
    document = parse_html('<p id="Main" class="Note Other">x</p>')

    assert document.quirks_mode == "quirks"
    assert len(document.select(".note")) == 1
    assert len(document.select(".OTHER")) == 1
    assert len(document.select("#main")) == 1


def test_detached_elements_use_case_sensitive_matching():
    element = Element("div", {"class": "A"})
    engine = SelectorEngine()

    assert engine.matches(element, ".A")
    assert not engine.matches(element, ".a")


def test_invalid_selector_raises(document):
    with pytest.raises(cssselect.SelectorError):
        document.select("li[")


def test_unsupported_pseudo_class_matches_nothing(document, caplog):
    with caplog.at_level(logging.WARNING):
        assert document.select("li:hover") == []

    assert "hover" in caplog.text


def test_parsed_selectors_are_cached():
    engine = SelectorEngine()
    element = Element("p")

    engine.matches(element, "p")
    engine.matches(element, "p")

    assert list(engine._selector_cache) == ["p"]
