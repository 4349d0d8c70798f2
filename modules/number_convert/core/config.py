from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from modules.number_convert.core.bases import NumericBase
from modules.number_convert.core.emit import FormatRule


BASE_DIR = Path(__file__).resolve().parents[3]
ENV_PREFIX = "SPARKY_NUMBER_CONVERT_"


def _load_env(env_path: Path | None = None) -> None:
    """Merge a repository ``.env`` into the process environment.

    Variables already present in ``os.environ`` win. ``SKIP_DOTENV`` turns the
    file lookup off entirely.
    """
    if (os.getenv("SKIP_DOTENV") or "").lower() in {"1", "true", "yes"}:
        return
    path = env_path or BASE_DIR / ".env"
    if not path.exists():
        return
    for key, value in dotenv_values(path).items():
        if key in os.environ or value is None:
            continue
        os.environ[key] = str(value)


class NumberConvertSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=None,
        extra="ignore",
    )

    # Convert to Binary
    show_bin_prefix: bool = Field(default=True)
    copy_bin_prefix: bool = Field(default=True)

    # Convert to Octal
    show_oct_prefix: bool = Field(default=True)
    copy_oct_prefix: bool = Field(default=True)

    # Convert to Hex
    show_hex_prefix: bool = Field(default=True)
    copy_hex_prefix: bool = Field(default=True)

    def format_rules(self) -> Dict[NumericBase, FormatRule]:
        return {
            NumericBase.BINARY: FormatRule(
                copy_prefix=self.copy_bin_prefix, show_prefix=self.show_bin_prefix
            ),
            NumericBase.OCTAL: FormatRule(
                copy_prefix=self.copy_oct_prefix, show_prefix=self.show_oct_prefix
            ),
            # decimal has no prefix, the toggles are never consulted
            NumericBase.DECIMAL: FormatRule(copy_prefix=False, show_prefix=False),
            NumericBase.HEXADECIMAL: FormatRule(
                copy_prefix=self.copy_hex_prefix, show_prefix=self.show_hex_prefix
            ),
        }


@lru_cache()
def get_settings() -> NumberConvertSettings:
    _load_env()
    return NumberConvertSettings()
