"""Edit markup with hooks: tab expansion and a title on every token."""

from tinta import BEFORE_TOKENIZE, WRAP, Highlighter, HookRegistry

hooks = HookRegistry()


@hooks.on(BEFORE_TOKENIZE)
def expand_tabs(env):
    env.code = env.code.expandtabs(4)


@hooks.on(WRAP)
def add_title(env):
    env.attributes["title"] = " ".join(env.classes[1:])


highlighter = Highlighter(hooks=hooks)
print(highlighter("for i in 0..3 {\n\tMessage($\"{i}\");\n}", "qsharp"))
