"""Configuration helpers for the contact import/export tools."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from .ingestion.exporters import DEFAULT_PREFIX, ExportProfile
from .ingestion.parsing import DELIMITERS

LOGGER = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load configuration data from a JSON or YAML file."""

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file '{file_path}' was not found")

    if file_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )

    text = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Invalid JSON in '{file_path}': {exc}") from exc
    else:
        import yaml

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in '{file_path}': {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must contain a mapping at the top level")
    return data


@dataclass(frozen=True)
class EngineSettings:
    """Defaults applied by the CLI when options are not given explicitly."""

    export_directory: Path = Path(".")
    default_profile: ExportProfile = ExportProfile.STANDARD
    delimiter: str = ","
    filename_prefix: str = DEFAULT_PREFIX
    log_level: str = "INFO"


def settings_from_mapping(data: Dict[str, Any]) -> EngineSettings:
    known = {f.name for f in fields(EngineSettings)}
    for key in data:
        if key not in known:
            LOGGER.debug("Ignoring unknown configuration key %s", key)

    values: Dict[str, Any] = {}
    if "export_directory" in data:
        values["export_directory"] = Path(str(data["export_directory"]))
    if "default_profile" in data:
        try:
            values["default_profile"] = ExportProfile.parse(data["default_profile"])
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
    if "delimiter" in data:
        delimiter = data["delimiter"]
        if delimiter == "\\t":
            delimiter = "\t"
        if delimiter not in DELIMITERS:
            raise ConfigurationError(f"Unsupported delimiter {delimiter!r}. Use one of {list(DELIMITERS)}")
        values["delimiter"] = delimiter
    if "filename_prefix" in data:
        prefix = str(data["filename_prefix"]).strip()
        if not prefix:
            raise ConfigurationError("filename_prefix must not be blank")
        values["filename_prefix"] = prefix
    if "log_level" in data:
        values["log_level"] = str(data["log_level"]).upper()
    return EngineSettings(**values)


def load_settings(path: Optional[str | Path] = None) -> EngineSettings:
    """Return settings from ``path``, or the defaults when no file is given."""

    if path is None:
        return EngineSettings()
    return settings_from_mapping(load_configuration(path))


__all__ = ["ConfigurationError", "EngineSettings", "load_configuration", "load_settings", "settings_from_mapping"]
