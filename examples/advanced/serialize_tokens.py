"""Cache a token stream to disk — JSON round-trip."""

from tinta import tokenize
from tinta.serialization import from_json, to_json

tokens = tokenize('let s = $"total: {n + 1}";', "qsharp")

json_str = to_json(tokens)
restored = from_json(json_str)

print("Original == restored:", tokens == restored)
print("JSON length:", len(json_str), "chars")
