"""User settings persisted as JSON under the code-snippets home directory."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Annotated, get_type_hints

from pydantic import Field, TypeAdapter, ValidationError

from code_snippets.models import DEFAULT_SKIP_DIRS, ScanConfig

logger = logging.getLogger(__name__)

_HOME_ENV = "CODE_SNIPPETS_HOME"
_CONFIG_NAME = "config.json"


def config_dir() -> Path:
    override = os.environ.get(_HOME_ENV)
    return Path(override) if override else Path.home() / ".code-snippets"


def config_file() -> Path:
    return config_dir() / _CONFIG_NAME


@dataclass
class AppSettings:
    default_language: str = "java"
    skip_dirs: list[str] = field(default_factory=lambda: list(DEFAULT_SKIP_DIRS))
    max_file_size: Annotated[int, Field(ge=0)] = 2 * 1024 * 1024
    color: bool = True

    def scan_config(self, source_dir: Path, project_name: str | None = None) -> ScanConfig:
        return ScanConfig(
            source_dir=source_dir,
            project_name=project_name,
            skip_dirs=list(self.skip_dirs),
            max_file_size=self.max_file_size,
        )


# Strict validator per field, so one bad value only resets that field
_FIELD_ADAPTERS: dict[str, TypeAdapter] = {
    name: TypeAdapter(hint)
    for name, hint in get_type_hints(AppSettings, include_extras=True).items()
}


def load_settings() -> AppSettings:
    """Load persisted settings.

    A missing or unreadable file gives the defaults. A value of the wrong
    type falls back to that field's default. Unknown keys are ignored.
    """
    path = config_file()
    if not path.exists():
        return AppSettings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return AppSettings()
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: expected an object", path)
        return AppSettings()

    values = {}
    for f in fields(AppSettings):
        if f.name not in data:
            continue
        try:
            values[f.name] = _FIELD_ADAPTERS[f.name].validate_python(data[f.name], strict=True)
        except ValidationError:
            logger.warning(
                "Ignoring invalid setting %s=%r in %s, using the default",
                f.name, data[f.name], path,
            )
    return AppSettings(**values)


def save_settings(settings: AppSettings) -> Path:
    """Write settings to disk and return the file path."""
    path = config_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(settings), indent=2), encoding="utf-8")
    return path
