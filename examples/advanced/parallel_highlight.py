"""Highlight 1000 snippets in parallel with one shared Highlighter."""

from concurrent.futures import ThreadPoolExecutor

from tinta import Highlighter

highlighter = Highlighter()
snippets = [f"let x{i} = {i} + 1; // item {i}" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(lambda code: highlighter.highlight(code, "qsharp"), snippets))

print(f"Highlighted {len(results)} snippets in parallel")
print("First:", results[0])
