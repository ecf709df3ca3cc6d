"""Tests for the hook registry and the highlight lifecycle."""

import pytest

from tinta.errors import GrammarError
from tinta.grammar import Grammar
from tinta.highlighter import Highlighter
from tinta.hooks import (
    AFTER_STRINGIFY,
    AFTER_TOKENIZE,
    BEFORE_STRINGIFY,
    BEFORE_TOKENIZE,
    WRAP,
    HighlightEnv,
    HookRegistry,
)
from tinta.tokens import Token


class TestHookRegistry:
    def test_add_and_run_in_order(self) -> None:
        hooks = HookRegistry()
        calls: list[str] = []
        hooks.add("x", lambda env: calls.append("first"))
        hooks.add("x", lambda env: calls.append("second"))

        hooks.run("x", None)

        assert calls == ["first", "second"]

    def test_add_returns_self(self) -> None:
        hooks = HookRegistry()
        assert hooks.add("x", print).add("y", print) is hooks
        assert len(hooks) == 2

    def test_decorator_returns_function(self) -> None:
        hooks = HookRegistry()

        @hooks.on("x")
        def callback(env: object) -> None:
            pass

        assert callable(callback)
        assert hooks.callbacks("x") == (callback,)

    def test_run_unknown_name_is_noop(self) -> None:
        HookRegistry().run("missing", object())

    def test_non_callable_rejected(self) -> None:
        with pytest.raises(TypeError, match="must be callable"):
            HookRegistry().add("x", "not a function")  # type: ignore[arg-type]

    def test_remove(self) -> None:
        hooks = HookRegistry()
        hooks.add("x", print)
        assert hooks.remove("x", print)
        assert "x" not in hooks
        assert not hooks.remove("x", print)

    def test_clear(self) -> None:
        hooks = HookRegistry().add("x", print).add("y", print)
        hooks.clear("x")
        assert "x" not in hooks
        assert "y" in hooks
        hooks.clear()
        assert len(hooks) == 0

    def test_callback_added_during_run_waits_for_next_run(self) -> None:
        hooks = HookRegistry()
        calls: list[str] = []

        def late(env: object) -> None:
            calls.append("late")

        def adder(env: object) -> None:
            calls.append("adder")
            hooks.add("x", late)

        hooks.add("x", adder)
        hooks.run("x", None)
        assert calls == ["adder"]

    def test_callback_errors_propagate(self) -> None:
        hooks = HookRegistry()

        def boom(env: object) -> None:
            raise RuntimeError("boom")

        hooks.add("x", boom)
        with pytest.raises(RuntimeError, match="boom"):
            hooks.run("x", None)

    def test_registries_are_independent(self) -> None:
        first = HookRegistry().add(WRAP, print)
        second = HookRegistry()
        assert len(first) == 1
        assert len(second) == 0


class TestLifecycle:
    """Highlighter fires the hooks in order and shares one env."""

    def test_order_of_hooks(self) -> None:
        hooks = HookRegistry()
        calls: list[str] = []
        for name in (BEFORE_TOKENIZE, AFTER_TOKENIZE, BEFORE_STRINGIFY, AFTER_STRINGIFY, WRAP):
            hooks.add(name, lambda env, name=name: calls.append(name))

        Highlighter(hooks=hooks).highlight("1", "clike")

        assert calls == [BEFORE_TOKENIZE, AFTER_TOKENIZE, BEFORE_STRINGIFY, WRAP, AFTER_STRINGIFY]

    def test_env_shared_across_cycle(self) -> None:
        hooks = HookRegistry()
        envs: list[HighlightEnv] = []
        for name in (BEFORE_TOKENIZE, AFTER_TOKENIZE, BEFORE_STRINGIFY, AFTER_STRINGIFY):
            hooks.add(name, envs.append)

        Highlighter(hooks=hooks).highlight("1", "clike")

        assert len(envs) == 4
        assert all(env is envs[0] for env in envs)
        assert envs[0].language == "clike"
        assert envs[0].output == '<span class="token number">1</span>'

    def test_before_tokenize_rewrites_code(self) -> None:
        hooks = HookRegistry()

        def expand_tabs(env: HighlightEnv) -> None:
            env.code = env.code.replace("\t", "  ")

        hooks.add(BEFORE_TOKENIZE, expand_tabs)
        html = Highlighter(hooks=hooks).highlight("\t1", "clike")
        assert html == '  <span class="token number">1</span>'

    def test_before_tokenize_swaps_grammar(self) -> None:
        hooks = HookRegistry()
        hooks.add(BEFORE_TOKENIZE, lambda env: setattr(env, "grammar", Grammar({"x": "x"})))
        html = Highlighter(hooks=hooks).highlight("x1", "clike")
        assert html == '<span class="token x">x</span>1'

    def test_after_tokenize_rewrites_tokens(self) -> None:
        hooks = HookRegistry()

        def retype(env: HighlightEnv) -> None:
            env.tokens = [
                Token("digit", item.content) if isinstance(item, Token) else item
                for item in env.tokens
            ]

        hooks.add(AFTER_TOKENIZE, retype)
        tokens = Highlighter(hooks=hooks).tokenize("1", "clike")
        assert tokens == [Token("digit", "1")]

    def test_after_stringify_rewrites_output(self) -> None:
        hooks = HookRegistry()
        hooks.add(AFTER_STRINGIFY, lambda env: setattr(env, "output", env.output.upper()))
        assert Highlighter(hooks=hooks).highlight("a", "clike") == "A"

    def test_grammar_cleared_by_hook(self) -> None:
        hooks = HookRegistry()
        hooks.add(BEFORE_TOKENIZE, lambda env: setattr(env, "grammar", None))
        with pytest.raises(GrammarError, match="No grammar"):
            Highlighter(hooks=hooks).highlight("x", "clike")

    def test_wrap_hook_receives_language(self) -> None:
        hooks = HookRegistry()
        languages: list[str] = []
        hooks.add(WRAP, lambda env: languages.append(env.language))
        Highlighter(hooks=hooks).highlight("1", "qs")
        assert languages == ["qs"]
