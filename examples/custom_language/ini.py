"""Register a small language and derive a second one from it."""

from tinta import Highlighter, LanguageRegistry, Rule

registry = LanguageRegistry()
registry.register("ini", {
    "comment": Rule(r"(?m)^[ \t]*[;#].*", greedy=True),
    "section": Rule(r"(?m)^[ \t]*\[[^\]\n]*\]", inside={"punctuation": r"[\[\]]"}),
    "key": Rule(r"(?m)(^[ \t]*)[^\s=;#][^=\n]*?(?=[ \t]*=)", lookbehind=True, alias="attr-name"),
    "value": Rule(r"(=[ \t]*)[^\n]+", lookbehind=True, alias="attr-value"),
    "punctuation": r"=",
})
registry.register(
    "ini-env",
    lambda ctx: ctx.insert_before(ctx.get("ini"), "value", {
        "variable": r"\$\{[A-Z_]+\}",
    }),
    aliases=["env"],
    require=["ini"],
)

source = "; settings\n[server]\nhost = ${HOST}\nport = 8080\n"
print(Highlighter(registry=registry).highlight(source, "env"))
