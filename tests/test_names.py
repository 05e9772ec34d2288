from html5_tree.dom import HTML_NS, NULL_NS, SVG_NS, XLINK_NS, CaseSensitivity, ExpandedName, QualName


def test_expanded_names_order_by_namespace_then_local():
    names = [
        ExpandedName(SVG_NS, "a"),
        ExpandedName(NULL_NS, "z"),
        ExpandedName(HTML_NS, "b"),
        ExpandedName(NULL_NS, "a"),
    ]

    assert sorted(names) == [
        ExpandedName(NULL_NS, "a"),
        ExpandedName(NULL_NS, "z"),
        ExpandedName(HTML_NS, "b"),
        ExpandedName(SVG_NS, "a"),
    ]


def test_expanded_name_is_hashable_key():
    lookup = {ExpandedName(XLINK_NS, "href"): 1}

    assert lookup[ExpandedName(XLINK_NS, "href")] == 1
    assert ExpandedName(NULL_NS, "href") not in lookup


def test_qual_name_string_and_expansion():
    name = QualName("xlink", XLINK_NS, "href")

    assert str(name) == "xlink:href"
    assert name.expanded() == ExpandedName(XLINK_NS, "href")
    assert str(QualName.html("div")) == "div"
    assert QualName.html("div").ns == HTML_NS


def test_case_sensitivity_policies():
    assert CaseSensitivity.CASE_SENSITIVE.eq("abc", "abc")
    assert not CaseSensitivity.CASE_SENSITIVE.eq("abc", "ABC")
    assert CaseSensitivity.ASCII_CASE_INSENSITIVE.eq("abc", "ABC")
    assert not CaseSensitivity.ASCII_CASE_INSENSITIVE.eq("ß", "SS")
    assert not CaseSensitivity.ASCII_CASE_INSENSITIVE.eq("ä", "Ä")
