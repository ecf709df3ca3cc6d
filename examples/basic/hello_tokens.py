"""Tokenize and highlight a line of code with a built-in language."""

from tinta import highlight, simplify, tokenize

tokens = tokenize("if (ready) return 0x1F;", "clike")
print(simplify(tokens))
print(highlight("if (ready) return 0x1F;", "clike"))
