"""
Composer configuration — all environment variables in one place.

Read from environment at import time. Every setting has a working default.
"""

from __future__ import annotations

import os


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


class Settings:
    """Application settings from environment variables."""

    # Code generation
    COMPOSER_DIALECT: str = os.environ.get("COMPOSER_DIALECT", "tsx")
    COMPOSER_COMPONENT_NAME: str = os.environ.get("COMPOSER_COMPONENT_NAME", "GeneratedComponent")
    COMPOSER_INDENT_WIDTH: int = _int_env("COMPOSER_INDENT_WIDTH", 2)
    COMPOSER_IMPORT_MODULE: str = os.environ.get("COMPOSER_IMPORT_MODULE", "@/components/ui")

    # History (0 = unbounded)
    COMPOSER_HISTORY_LIMIT: int = _int_env("COMPOSER_HISTORY_LIMIT", 0)

    # Logging
    COMPOSER_LOG_LEVEL: str = os.environ.get("COMPOSER_LOG_LEVEL", "WARNING").upper()

    @property
    def history_limit(self) -> int | None:
        return self.COMPOSER_HISTORY_LIMIT if self.COMPOSER_HISTORY_LIMIT > 0 else None

    def generate_options(self, **overrides):
        """GenerateOptions seeded from the environment, with per-call overrides."""
        from composer.kernel.types import DIALECTS, GenerateOptions

        dialect = self.COMPOSER_DIALECT if self.COMPOSER_DIALECT in DIALECTS else "tsx"
        values = {
            "dialect": dialect,
            "component_name": self.COMPOSER_COMPONENT_NAME,
            "indent_width": self.COMPOSER_INDENT_WIDTH if self.COMPOSER_INDENT_WIDTH > 0 else 2,
            "import_module": self.COMPOSER_IMPORT_MODULE,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return GenerateOptions(**values)


# Singleton instance
settings = Settings()
