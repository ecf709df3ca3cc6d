"""Tests for Tinta utility modules."""

import logging


class TestGetLogger:
    """Tests for get_logger function."""

    def test_prefixes_module_names(self) -> None:
        from tinta.utils.logger import get_logger

        assert get_logger("grammars").name == "tinta.grammars"

    def test_keeps_existing_namespace(self) -> None:
        from tinta.utils.logger import get_logger

        assert get_logger("tinta").name == "tinta"
        assert get_logger("tinta.registry").name == "tinta.registry"

    def test_returns_stdlib_logger(self) -> None:
        from tinta.utils import get_logger

        assert isinstance(get_logger("x"), logging.Logger)

    def test_registration_is_logged(self, caplog) -> None:  # type: ignore[no-untyped-def]
        from tinta import LanguageRegistry

        with caplog.at_level(logging.DEBUG, logger="tinta.registry"):
            LanguageRegistry().register("digits", {"number": r"\d+"})

        assert any("digits" in record.getMessage() for record in caplog.records)
