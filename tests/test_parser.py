import pytest
from bs4 import BeautifulSoup

from html5_tree.dom import (NULL_NS, SVG_NS, XLINK_NS, Attribute, Comment, DocumentFragment,
                            ExpandedName, NodeType, ProcessingInstruction, Text)
from html5_tree.parser import HTMLParser, parse_fragment, parse_html
from html5_tree.parser.html_parser import _parse_doctype
from html5_tree.utils.config import Config

PAGE = ('<!DOCTYPE html><html><head><title>T</title></head>'
        '<body><div id="a" class="x y" data-z="1">Hi &amp; bye<br><img src="a.png" alt=""></div>'
        '<!-- note --></body></html>')


def _elements(node):
    return [n for n in node.inclusive_descendants() if n.node_type == NodeType.ELEMENT_NODE]


def test_parse_document_structure():
    document = parse_html(PAGE)

    assert document.doctype.name == "html"
    assert document.quirks_mode == "no-quirks"
    assert document.document_element.local_name == "html"
    assert document.head.first_child.local_name == "title"
    assert document.title == "T"
    assert isinstance(document.body.last_child, Comment)
    assert document.body.last_child.data == " note "


def test_round_trip_reproduces_markup():
    assert parse_html(PAGE).to_html() == PAGE


def test_round_trip_preserves_attribute_stores():
    original = parse_html(PAGE)
    reparsed = parse_html(original.to_html())

    for before, after in zip(_elements(original), _elements(reparsed)):
        assert before.name == after.name
        assert before.attributes == after.attributes
        assert list(before.attributes) == list(after.attributes)


def test_attribute_order_and_class_string():
    div = parse_html(PAGE).select_first("div")

    assert [name.local for name in div.attributes] == ["id", "class", "data-z"]
    assert div.get_attribute("class") == "x y"
    assert div.has_class("y")


def test_text_nodes_are_kept():
    document = parse_html("<!DOCTYPE html><p> a <b>b</b> c </p>")
    p = document.select_first("p")

    assert [type(child) for child in p.child_nodes] == [Text, type(p), Text]
    assert p.text_contents() == " a b c "


def test_missing_doctype_means_quirks_mode():
    assert parse_html("<p>x</p>").quirks_mode == "quirks"
    assert parse_html('<!DOCTYPE svg><p>x</p>').quirks_mode == "quirks"


def test_doctype_identifiers():
    document = parse_html('<!DOCTYPE html PUBLIC "-//W3C//DTD HTML 4.01//EN" '
                          '"http://www.w3.org/TR/html4/strict.dtd"><p>x</p>')

    assert document.doctype.public_id == "-//W3C//DTD HTML 4.01//EN"
    assert document.doctype.system_id == "http://www.w3.org/TR/html4/strict.dtd"
    assert document.to_html().startswith("<!DOCTYPE html><html>")


@pytest.mark.parametrize("content, expected", [
    ("html", ("html", "", "")),
    ('html SYSTEM "about:legacy-compat"', ("html", "", "about:legacy-compat")),
    ('html PUBLIC "pub"', ("html", "pub", "")),
    ("", ("", "", "")),
])
def test_parse_doctype(content, expected):
    assert _parse_doctype(content) == expected


def test_template_children_move_to_contents():
    document = parse_html("<!DOCTYPE html><template><p>inside</p></template>")
    template = document.select_first("template")

    assert not template.has_child_nodes()
    assert template.template_contents.first_child.local_name == "p"
    assert document.select("p") == []
    assert "<template><p>inside</p></template>" in document.to_html()


def test_foreign_content_namespaces():
    document = parse_html('<!DOCTYPE html><svg viewBox="0 0 1 1"><a xlink:href="#x"></a></svg>')
    svg = document.select_first("svg")
    link = svg.first_child

    assert svg.namespace_uri == SVG_NS
    assert link.namespace_uri == SVG_NS
    assert svg.attributes.get_ns(ExpandedName(NULL_NS, "viewBox")).value == "0 0 1 1"

    href = link.attributes.get_ns(ExpandedName(XLINK_NS, "href"))
    assert href == Attribute("#x")
    assert href.prefix == "xlink"
    assert '<a xlink:href="#x"></a>' in document.to_html()


def test_processing_instruction_from_html_parser_soup():
    soup = BeautifulSoup('<?xml-stylesheet href="a.css"?><p>x</p>', "html.parser")

    document = HTMLParser().from_soup(soup)
    pi = document.first_child

    assert isinstance(pi, ProcessingInstruction)
    assert pi.target == "xml-stylesheet"
    assert pi.data == 'href="a.css"'
    assert document.to_html() == '<?xml-stylesheet href="a.css"><p>x</p>'


def test_parse_fragment():
    fragment = parse_fragment('<p class="a">one</p><span>two</span>')

    assert isinstance(fragment, DocumentFragment)
    assert [child.local_name for child in fragment.element_children()] == ["p", "span"]
    assert fragment.to_html() == '<p class="a">one</p><span>two</span>'


def test_parse_bytes():
    document = parse_html('<!DOCTYPE html><meta charset="utf-8"><p>é</p>'.encode("utf-8"))

    assert document.select_first("p").text_contents() == "é"


def test_parser_features_from_config(tmp_path):
    config = Config(str(tmp_path / "config.json"))
    config.set("parser.features", "html.parser")

    document = HTMLParser(config).parse("<?php echo 1; ?><p>x</p>")

    assert isinstance(document.first_child, ProcessingInstruction)
    assert document.first_child.target == "php"


def test_deeply_nested_markup_converts():
    depth = 3000
    document = parse_html("<!DOCTYPE html>" + "<div>" * depth + "x")

    divs = document.select("div")
    assert len(divs) == depth
    assert divs[-1].text_contents() == "x"
    assert sum(1 for _ in divs[-1].ancestors()) == depth + 2
    assert document.to_html().endswith("<div>x" + "</div>" * depth + "</body></html>")
