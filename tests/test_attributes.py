import pytest

from html5_tree.dom import (NULL_NS, SVG_NS, XLINK_NS, Attribute, Attributes, BloomClasses,
                            CaseSensitivity, ExpandedName, QualName, SingleClass)

SENSITIVE = CaseSensitivity.CASE_SENSITIVE
INSENSITIVE = CaseSensitivity.ASCII_CASE_INSENSITIVE


def test_class_list_example():
    attrs = Attributes([(ExpandedName(NULL_NS, "class"), Attribute("a b c"))])

    assert isinstance(attrs.class_cache, BloomClasses)
    assert attrs.has_class("b", SENSITIVE)
    assert not attrs.has_class("d", SENSITIVE)
    assert attrs.has_class("B", INSENSITIVE)


def test_no_class_attribute_has_no_cache():
    attrs = Attributes({"id": "main"})

    assert attrs.class_cache is None
    assert not attrs.has_class("main")
    assert not attrs.has_class("", INSENSITIVE)


@pytest.mark.parametrize("value", ["note", "  note\t", "\nnote\x0c"])
def test_single_class_compares_trimmed_value(value):
    attrs = Attributes({"class": value})

    assert isinstance(attrs.class_cache, SingleClass)
    assert attrs.class_cache.token == "note"
    assert attrs.has_class("note")
    assert not attrs.has_class("not")
    assert not attrs.has_class("Note")
    assert attrs.has_class("NOTE", INSENSITIVE)


def test_multiple_classes_have_no_false_negatives():
    tokens = [f"class-{i}" for i in range(40)]
    attrs = Attributes({"class": "  ".join(tokens)})

    for token in tokens:
        assert attrs.has_class(token)
    for i in range(40, 200):
        assert not attrs.has_class(f"class-{i}")


def test_case_insensitive_match_bypasses_filter():
    attrs = Attributes({"class": "Header Main"})

    assert not attrs.has_class("header")
    assert attrs.has_class("header", INSENSITIVE)
    assert attrs.has_class("MAIN", INSENSITIVE)


def test_case_insensitive_match_folds_ascii_only():
    attrs = Attributes({"class": "École other"})

    assert not attrs.has_class("école", INSENSITIVE)
    assert attrs.has_class("ÉCOLE", INSENSITIVE)


def test_empty_tokens_are_ignored():
    attrs = Attributes({"class": "a \t\n b"})

    assert not attrs.has_class("")
    assert not attrs.has_class("", INSENSITIVE)


@pytest.mark.parametrize("value", ["", "   ", " \t\n\x0c"])
def test_blank_class_value_matches_nothing(value):
    attrs = Attributes({"class": value})

    assert "class" in attrs
    assert attrs.class_cache is None
    assert not attrs.has_class("")
    assert not attrs.has_class("", INSENSITIVE)
    assert not attrs.has_class("x")

    attrs.insert("class", "x")
    assert attrs.has_class("x")

    attrs.insert("class", value)
    assert attrs.class_cache is None
    assert not attrs.has_class("x")


def test_insert_class_refreshes_cache():
    attrs = Attributes({"class": "a"})

    previous = attrs.insert("class", "b c")

    assert previous == Attribute("a")
    assert isinstance(attrs.class_cache, BloomClasses)
    assert not attrs.has_class("a")
    assert attrs.has_class("c")


def test_get_mut_refreshes_cache():
    attrs = Attributes({"class": "old"})

    ref = attrs.get_mut("class")
    ref.value = "new other"

    assert attrs.get("class") == "new other"
    assert not attrs.has_class("old")
    assert attrs.has_class("new")
    assert attrs.has_class("other")


def test_get_mut_reference_fails_after_removal():
    attrs = Attributes({"class": "a", "id": "x"})
    ref = attrs.get_mut("class")

    attrs.remove("class")

    with pytest.raises(KeyError):
        ref.value = "b"
    with pytest.raises(KeyError):
        ref.value
    assert "class" not in attrs
    assert attrs.class_cache is None
    assert not attrs.has_class("b")


def test_get_mut_missing_attribute():
    assert Attributes().get_mut("class") is None


def test_entry_api_refreshes_cache():
    attrs = Attributes()

    entry = attrs.entry("class")
    assert not entry.occupied
    assert entry.key == ExpandedName(NULL_NS, "class")

    ref = entry.or_insert("first")
    assert attrs.has_class("first")

    ref.value = "second"
    assert not attrs.has_class("first")
    assert attrs.has_class("second")

    assert attrs.entry("class").or_insert("ignored").value == "second"

    attrs.entry("class").insert("third fourth")
    assert attrs.has_class("fourth")

    removed = attrs.entry("class").remove()
    assert removed == Attribute("third fourth")
    assert attrs.class_cache is None
    assert not attrs.has_class("third")


def test_entry_or_insert_with_calls_factory_only_when_vacant():
    attrs = Attributes({"title": "kept"})
    calls = []

    def factory():
        calls.append(1)
        return "made"

    assert attrs.entry("title").or_insert_with(factory).value == "kept"
    assert attrs.entry("lang").or_insert_with(factory).value == "made"
    assert len(calls) == 1


def test_remove_class_clears_cache():
    attrs = Attributes({"class": "a b"})

    removed = attrs.remove("class")

    assert removed.value == "a b"
    assert attrs.class_cache is None
    assert not attrs.has_class("a")
    assert not attrs.has_class("b", INSENSITIVE)


def test_remove_missing_attribute_returns_none():
    attrs = Attributes({"id": "x"})

    assert attrs.remove("class") is None
    assert len(attrs) == 1


def test_remove_preserves_order():
    attrs = Attributes({"a": "1", "b": "2", "c": "3", "d": "4"})

    attrs.remove("b")

    assert [name.local for name in attrs] == ["a", "c", "d"]


def test_insert_keeps_position_of_existing_key():
    attrs = Attributes({"a": "1", "b": "2"})

    assert attrs.insert("a", "changed") == Attribute("1")
    assert attrs.insert("c", "3") is None

    assert [(name.local, value) for name, value in attrs.qualified_items()] == [
        ("a", "changed"), ("b", "2"), ("c", "3")]


def test_namespaced_class_does_not_build_cache():
    attrs = Attributes()

    attrs.insert_ns(ExpandedName(SVG_NS, "class"), "icon")

    assert attrs.class_cache is None
    assert not attrs.has_class("icon")
    assert attrs.get("class") is None


def test_insert_ns_class_in_null_namespace_refreshes_cache():
    attrs = Attributes()

    attrs.insert_ns(ExpandedName(NULL_NS, "class"), "x y")
    assert attrs.has_class("y")

    attrs.remove_ns(ExpandedName(NULL_NS, "class"))
    assert not attrs.has_class("y")


def test_clear_drops_cache():
    attrs = Attributes({"class": "a", "id": "b"})

    attrs.clear()

    assert len(attrs) == 0
    assert attrs.class_cache is None
    assert not attrs


def test_qualified_items_carry_prefix():
    attrs = Attributes({"width": "10"})
    attrs.insert_ns(ExpandedName(XLINK_NS, "href"), "#icon", prefix="xlink")

    assert list(attrs.qualified_items()) == [
        (QualName(None, NULL_NS, "width"), "10"),
        (QualName("xlink", XLINK_NS, "href"), "#icon"),
    ]


def test_mapping_protocol():
    attrs = Attributes()

    attrs["class"] = "one two"
    assert "class" in attrs
    assert attrs["class"] == "one two"
    assert attrs.has_class("two")

    del attrs["class"]
    assert "class" not in attrs
    assert not attrs.has_class("two")

    with pytest.raises(KeyError):
        del attrs["class"]
    with pytest.raises(KeyError):
        attrs["missing"]


def test_get_returns_default_for_missing():
    attrs = Attributes({"id": "x"})

    assert attrs.get("id") == "x"
    assert attrs.get("lang") is None
    assert attrs.get("lang", "en") == "en"
    assert attrs.contains("id")
    assert not attrs.contains("lang")


def test_equality_compares_map_content():
    a = Attributes({"id": "x", "class": "p q"})
    b = Attributes({"class": "p q", "id": "x"})
    c = Attributes({"id": "x", "class": "p"})

    assert a == b
    assert a != c


def test_equality_ignores_prefix():
    name = ExpandedName(XLINK_NS, "href")
    a = Attributes([(name, Attribute("#a", "xlink"))])
    b = Attributes([(name, Attribute("#a", "xl"))])

    assert a == b


def test_copy_is_independent():
    original = Attributes({"class": "a"})
    copied = original.copy()

    copied.insert("class", "b")

    assert original.has_class("a")
    assert not original.has_class("b")
    assert copied.has_class("b")


def test_attribute_is_immutable():
    attribute = Attribute("value", "xlink")

    with pytest.raises(AttributeError):
        attribute.value = "other"

    changed = attribute.with_value("other")
    assert changed.value == "other"
    assert changed.prefix == "xlink"
    assert attribute.value == "value"
