"""Completion settings, optionally read from a pyproject-style TOML file."""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cellcomplete.exceptions import SettingsError


class CompletionSettings(BaseModel):
    """Names and widths the engine needs but does not own.

    root_namespace is the synthetic container offered as a namespace and
    meaning "no prefix" at the head of a chain. core_namespace is imported
    into every environment; special_forms_namespace supplies the
    lowest-precedence bare-identifier candidates.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    root_namespace: str = "Elixir"
    core_namespace: str = "Kernel"
    special_forms_namespace: str = "Kernel.SpecialForms"
    spec_width: int = Field(default=30, ge=10)
    value_width: int = Field(default=30, ge=10)

    @classmethod
    def from_toml(cls, path: Path) -> CompletionSettings:
        """Read the [tool.cellcomplete] table of a TOML file.

        A missing table yields the defaults.
        """
        try:
            data = tomllib.loads(Path(path).read_text())
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise SettingsError(f"Cannot read settings from {path}: {e}", cause=e)
        table = data.get("tool", {}).get("cellcomplete", {})
        try:
            return cls.model_validate(table)
        except ValidationError as e:
            raise SettingsError(f"Invalid [tool.cellcomplete] in {path}", cause=e)


DEFAULT_SETTINGS = CompletionSettings()
