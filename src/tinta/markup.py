"""Linear stringifier: token stream to flat HTML markup.

String leaves are HTML-escaped; each Token becomes one element whose
classes carry the token type and aliases:

    >>> stringify([Token("keyword", "if"), " x"], "clike")
    '<span class="token keyword">if</span> x'

Removing the tags and unescaping entities gives back the original text
(see strip_markup), so markup never adds or drops characters of the input.

Thread Safety:
Pure functions. Config comes from a ContextVar; hooks run on the calling
thread.

"""

from __future__ import annotations

import html
import re
from typing import TYPE_CHECKING

from tinta.config import get_highlight_config
from tinta.hooks import WRAP, WrapEnv
from tinta.tokens import Token

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tinta.config import HighlightConfig
    from tinta.hooks import HookRegistry

_TAG_RE = re.compile(r"<[^>]*>")


def encode(text: str) -> str:
    """Escape text for element content (``&``, ``<``, ``>``)."""
    return html.escape(text, quote=False)


def stringify(
    tokens: str | Token | Iterable[str | Token],
    language: str = "",
    *,
    hooks: HookRegistry | None = None,
) -> str:
    """Render a token stream (or a single token or string) as markup.

    Args:
        tokens: Token stream, Token, or plain string
        language: Language name passed to ``wrap`` hooks
        hooks: Registry whose ``wrap`` callbacks may edit each element

    Returns:
        Markup string
    """
    config = get_highlight_config()
    parts: list[str] = []
    _render(tokens, language, hooks, config, parts)
    return "".join(parts)


def _render(
    node: str | Token | Iterable[str | Token],
    language: str,
    hooks: HookRegistry | None,
    config: HighlightConfig,
    parts: list[str],
) -> None:
    if isinstance(node, str):
        parts.append(encode(node))
        return
    if not isinstance(node, Token):
        for item in node:
            _render(item, language, hooks, config, parts)
        return

    inner: list[str] = []
    _render(node.content, language, hooks, config, inner)

    classes = [config.token_class] if config.token_class else []
    classes.append(node.type)
    classes.extend(node.alias)
    env = WrapEnv(
        type=node.type,
        content="".join(inner),
        tag=config.tag,
        classes=classes,
        language=language,
    )
    if hooks is not None:
        hooks.run(WRAP, env)

    class_attr = " ".join(config.class_prefix + name for name in env.classes)
    attributes = "".join(
        f' {name}="{html.escape(value)}"' for name, value in env.attributes.items()
    )
    parts.append(f'<{env.tag} class="{html.escape(class_attr)}"{attributes}>')
    parts.append(env.content)
    parts.append(f"</{env.tag}>")


def strip_markup(markup: str) -> str:
    """Remove tags and decode entities, recovering the tokenized text.

    Example:
        >>> strip_markup('<span class="token number">1</span> &lt; 2')
        '1 < 2'
    """
    return html.unescape(_TAG_RE.sub("", markup))


__all__ = ["encode", "stringify", "strip_markup"]
