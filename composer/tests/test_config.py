"""Tests for environment-driven settings."""

from composer.config import Settings, _int_env
from composer.kernel.types import GenerateOptions


def test_int_env_parses(monkeypatch):
    monkeypatch.setenv("COMPOSER_TEST_INT", "7")
    assert _int_env("COMPOSER_TEST_INT", 2) == 7


def test_int_env_falls_back(monkeypatch):
    monkeypatch.setenv("COMPOSER_TEST_INT", "seven")
    assert _int_env("COMPOSER_TEST_INT", 2) == 2
    monkeypatch.delenv("COMPOSER_TEST_INT")
    assert _int_env("COMPOSER_TEST_INT", 2) == 2


def test_generate_options_from_settings():
    s = Settings()
    s.COMPOSER_DIALECT = "jsx"
    s.COMPOSER_COMPONENT_NAME = "Landing"
    s.COMPOSER_INDENT_WIDTH = 4
    s.COMPOSER_IMPORT_MODULE = "~/ui"
    assert s.generate_options() == GenerateOptions(
        dialect="jsx",
        component_name="Landing",
        indent_width=4,
        include_imports=True,
        import_module="~/ui",
    )


def test_overrides_win_and_none_is_ignored():
    s = Settings()
    s.COMPOSER_DIALECT = "jsx"
    options = s.generate_options(dialect="tsx", component_name=None, include_imports=False)
    assert options.dialect == "tsx"
    assert options.component_name == s.COMPOSER_COMPONENT_NAME
    assert options.include_imports is False


def test_invalid_values_fall_back():
    s = Settings()
    s.COMPOSER_DIALECT = "svelte"
    s.COMPOSER_INDENT_WIDTH = 0
    options = s.generate_options()
    assert options.dialect == "tsx"
    assert options.indent_width == 2


def test_history_limit():
    s = Settings()
    s.COMPOSER_HISTORY_LIMIT = 0
    assert s.history_limit is None
    s.COMPOSER_HISTORY_LIMIT = 50
    assert s.history_limit == 50
