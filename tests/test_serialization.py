"""Tests for tinta.serialization — token stream JSON round-trip."""

import json

import pytest

from tinta.serialization import from_dict, from_json, to_dict, to_json
from tinta.tokenizer import tokenize
from tinta.tokens import Token


class TestToDict:
    def test_flat_token(self) -> None:
        assert to_dict(Token("number", "1")) == {
            "_type": "Token",
            "type": "number",
            "content": "1",
            "alias": [],
        }

    def test_alias_list(self) -> None:
        assert to_dict(Token("range", "..", ("operator",)))["alias"] == ["operator"]

    def test_nested_content(self) -> None:
        token = Token("tag", ["<", Token("name", "b"), ">"])
        data = to_dict(token)
        assert data["content"][0] == "<"
        assert data["content"][1]["type"] == "name"
        assert data["content"][2] == ">"


class TestFromDict:
    def test_roundtrip_nested(self) -> None:
        token = Token("tag", ["<", Token("name", "b", ("x",)), ">"])
        restored = from_dict(to_dict(token))
        assert restored == token
        assert restored.length == 3

    def test_alias_optional(self) -> None:
        assert from_dict({"_type": "Token", "type": "t", "content": "x"}).alias == ()

    def test_missing_discriminator(self) -> None:
        with pytest.raises(ValueError, match="Missing '_type'"):
            from_dict({"type": "t", "content": "x"})

    def test_unknown_discriminator(self) -> None:
        with pytest.raises(ValueError, match="Unknown token type"):
            from_dict({"_type": "Node", "type": "t", "content": "x"})

    def test_missing_field(self) -> None:
        with pytest.raises(ValueError, match="missing field 'content'"):
            from_dict({"_type": "Token", "type": "t"})

    def test_bad_stream_item(self) -> None:
        with pytest.raises(ValueError, match="Unexpected stream item"):
            from_dict({"_type": "Token", "type": "t", "content": [1]})


class TestJson:
    def test_roundtrip_builtin_language(self) -> None:
        tokens = tokenize('let s = $"v{x}"; // done', "qsharp")
        assert from_json(to_json(tokens)) == tokens

    def test_strings_stay_strings(self) -> None:
        assert json.loads(to_json(["a", Token("t", "b")]))[0] == "a"

    def test_deterministic(self) -> None:
        tokens = tokenize("if (a) return 0x1F;", "clike")
        assert to_json(tokens) == to_json(tokens)

    def test_sorted_keys(self) -> None:
        out = to_json([Token("t", "x")])
        assert out == '[{"_type": "Token", "alias": [], "content": "x", "type": "t"}]'

    def test_indent(self) -> None:
        assert "\n" in to_json([Token("t", "x")], indent=2)

    def test_empty_stream(self) -> None:
        assert to_json([]) == "[]"
        assert from_json("[]") == []

    def test_not_an_array(self) -> None:
        with pytest.raises(ValueError, match="Expected a JSON array"):
            from_json('{"_type": "Token"}')
