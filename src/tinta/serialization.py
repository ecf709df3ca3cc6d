"""Token stream serialization — JSON round-trip for Tinta tokens.

Converts token streams to/from JSON-compatible data. Useful for:
- Caching highlighted output keyed by source hash
- Shipping token streams to non-Python consumers
- Debugging and golden-file tests

String leaves stay plain JSON strings. Tokens become objects with a
``_type`` discriminator:

    {"_type": "Token", "type": "number", "content": "12", "alias": []}

All output is deterministic (sorted keys).

Thread Safety:
    All functions are pure — safe to call from any thread.

"""

import json
from typing import Any

from tinta.tokens import Token, TokenStream


def to_dict(token: Token) -> dict[str, Any]:
    """Convert a Token to a JSON-compatible dict.

    Nested content streams are converted recursively.

    Args:
        token: Token to convert

    Returns:
        Dict with ``_type``, ``type``, ``content`` and ``alias``

    """
    content = token.content
    return {
        "_type": "Token",
        "type": token.type,
        "content": content if isinstance(content, str) else _serialize_stream(content),
        "alias": list(token.alias),
    }


def _serialize_stream(stream: TokenStream) -> list[Any]:
    return [item if isinstance(item, str) else to_dict(item) for item in stream]


def from_dict(data: dict[str, Any]) -> Token:
    """Reconstruct a Token from a dict produced by to_dict.

    Raises:
        ValueError: If ``_type`` is missing or not ``"Token"``, or a
            required field is missing

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized token"
        raise ValueError(msg)
    if type_name != "Token":
        msg = f"Unknown token type: {type_name!r}"
        raise ValueError(msg)

    try:
        token_type = data["type"]
        raw = data["content"]
    except KeyError as exc:
        msg = f"Serialized token is missing field {exc.args[0]!r}"
        raise ValueError(msg) from exc

    content = raw if isinstance(raw, str) else _deserialize_stream(raw)
    return Token(token_type, content, tuple(data.get("alias", ())))


def _deserialize_stream(items: list[Any]) -> TokenStream:
    stream: TokenStream = []
    for item in items:
        if isinstance(item, str):
            stream.append(item)
        elif isinstance(item, dict):
            stream.append(from_dict(item))
        else:
            msg = f"Unexpected stream item: {item!r}"
            raise ValueError(msg)
    return stream


def to_json(tokens: TokenStream, *, indent: int | None = None) -> str:
    """Serialize a token stream to a JSON string.

    Args:
        tokens: Stream to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string (a JSON array).

    """
    return json.dumps(_serialize_stream(tokens), sort_keys=True, indent=indent)


def from_json(data: str) -> TokenStream:
    """Deserialize a token stream from a JSON string.

    Raises:
        ValueError: If the JSON is not an array of strings and tokens.

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected a JSON array, got {type(raw).__name__}"
        raise ValueError(msg)
    return _deserialize_stream(raw)


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
