"""Tests for docmark.serialization: JSON round-trip."""

import json

import pytest

from docmark import parse
from docmark.nodes import Attribute, Link, Nested, Raw, TextAttr, TextBlock
from docmark.serialization import from_dict, from_json, to_dict, to_json

SOURCE = """Summary with *bold*, `raw` and link:lrs_x[*x*].

:v: value

= Section {v}

[argument, len]
[info]
{
* item
**
----
code
----
}

|===
|a\\|b|c

text row
|===
"""


class TestToDict:
    def test_text_block_shape(self) -> None:
        block = TextBlock(inner=Raw(content="hi"), attribute=TextAttr.BOLD)
        assert to_dict(block) == {
            "_type": "TextBlock",
            "attribute": "bold",
            "inner": {"_type": "Raw", "content": "hi"},
        }

    def test_tuples_become_lists(self) -> None:
        nested = Nested(children=(TextBlock(inner=Raw(content="a")),))
        assert to_dict(nested)["children"] == [
            {"_type": "TextBlock", "attribute": None, "inner": {"_type": "Raw", "content": "a"}}
        ]

    def test_optional_link_text(self) -> None:
        assert to_dict(Link(target="t")) == {"_type": "Link", "target": "t", "text": None}

    def test_attribute(self) -> None:
        assert to_dict(Attribute(name="argument", args=" n")) == {
            "_type": "Attribute",
            "name": "argument",
            "args": " n",
        }


class TestRoundTrip:
    def test_full_document(self) -> None:
        doc = parse(SOURCE)
        assert from_json(to_json(doc)) == doc

    def test_from_dict_restores_tuples(self) -> None:
        doc = parse("* a\n* b")
        restored = from_dict(to_dict(doc))
        assert isinstance(restored.parts, tuple)  # type: ignore[union-attr]
        assert restored == doc

    def test_text_attr_restored_as_enum(self) -> None:
        restored = from_dict(to_dict(TextBlock(inner=Raw(content="x"), attribute=TextAttr.RAW)))
        assert restored.attribute is TextAttr.RAW  # type: ignore[union-attr]

    def test_json_is_deterministic(self) -> None:
        doc = parse(SOURCE)
        assert to_json(doc) == to_json(parse(SOURCE))
        data = json.loads(to_json(doc))
        assert list(data) == sorted(data)

    def test_indent(self) -> None:
        assert "\n" in to_json(parse("x"), indent=2)


class TestErrors:
    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="Missing '_type'"):
            from_dict({"content": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type"):
            from_dict({"_type": "Heading"})

    def test_unknown_text_attribute(self) -> None:
        with pytest.raises(ValueError):
            from_dict({"_type": "TextBlock", "attribute": "italic", "inner": {"_type": "Raw", "content": ""}})

    def test_json_must_be_document(self) -> None:
        with pytest.raises(ValueError, match="Expected Document"):
            from_json(json.dumps({"_type": "Raw", "content": "x"}))
