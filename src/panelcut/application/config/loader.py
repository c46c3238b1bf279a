"""Settings, seed data and part file loading with comprehensive error handling.

This module loads the JSON documents the application works from: runtime
settings, the default price list / sample catalog seed, and part
configuration files handed to the CLI. File system errors, JSON parsing
errors and Pydantic validation errors are all reported as ``ConfigError``
with clear, actionable messages.
"""

import json
import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from panelcut.application.config.schema import PanelcutSettings, SeedData
from panelcut.application.dtos import PartInput
from panelcut.domain.rate_table import RateTable

ModelT = TypeVar("ModelT", bound=BaseModel)

DATA_PACKAGE = "panelcut.application.config.data"
DEFAULT_SEED_FILE = "default_seed.json"
ENV_PREFIX = "PANELCUT_"


class ConfigError(Exception):
    """Exception raised for configuration-related errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the file (if applicable)
        details: Additional error details (line/column for JSON, validation errors, etc.)
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("edges", 0, "side"))
        'edges[0].side'
        >>> _format_json_path(("rates", 3, "value"))
        'rates[3].value'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    """Flatten a Pydantic ValidationError into path/message/value dicts."""
    details: list[dict[str, Any]] = []
    for err in error.errors():
        details.append(
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(
    details: list[dict[str, Any]], what: str = "Configuration"
) -> str:
    lines = [f"{what} validation failed:"]
    for detail in details:
        path = detail["path"]
        message = detail["message"]
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {path}: {message} (got: {value!r})")
        else:
            lines.append(f"  - {path}: {message}")
    return "\n".join(lines)


def _read_json(path: Path, what: str) -> Any:
    if not path.exists():
        raise ConfigError(
            message=f"{what} file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading {what.lower()} file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading {what.lower()} file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    return _parse_json(content, what, path)


def _parse_json(content: str, what: str, path: Path | None = None) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        where = f": {path}" if path is not None else ""
        raise ConfigError(
            message=(
                f"Invalid JSON in {what.lower()} file{where} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def _validate(
    model: type[ModelT], data: Any, what: str, path: Path | None = None
) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(details, what),
            error_type="validation",
            path=path,
            details=details,
        )


def settings_from_env(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Collect ``PANELCUT_*`` variables as settings overrides.

    ``PANELCUT_DATABASE_URL=sqlite://`` becomes ``{"database_url": "sqlite://"}``.
    Values stay strings; pydantic coerces them during validation.
    """
    environ = os.environ if environ is None else environ
    overrides: dict[str, str] = {}
    for name, value in environ.items():
        if name.startswith(ENV_PREFIX) and value.strip():
            overrides[name[len(ENV_PREFIX) :].lower()] = value.strip()
    return overrides


def load_settings(
    path: Path | None = None, environ: Mapping[str, str] | None = None
) -> PanelcutSettings:
    """Load runtime settings from an optional JSON file plus the environment.

    Environment variables take precedence over the file, which takes
    precedence over the built-in defaults.

    Args:
        path: Optional path to a JSON settings file.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        Validated PanelcutSettings.

    Raises:
        ConfigError: If the file cannot be read or the merged settings are
            invalid. ``error_type`` tells which.
    """
    data: dict[str, Any] = {}
    if path is not None:
        raw = _read_json(path, "Settings")
        if not isinstance(raw, dict):
            raise ConfigError(
                message=f"Settings file must contain a JSON object: {path}",
                error_type="validation",
                path=path,
            )
        data.update(raw)
    data.update(settings_from_env(environ))
    return _validate(PanelcutSettings, data, "Settings", path)


def load_settings_from_dict(data: dict[str, Any]) -> PanelcutSettings:
    """Validate settings supplied programmatically (tests, embedding apps)."""
    return _validate(PanelcutSettings, data, "Settings")


def load_seed_data(path: Path | None = None) -> SeedData:
    """Load the price list and sample catalog seed.

    Args:
        path: Seed file to load. Defaults to the packaged default seed.

    Raises:
        ConfigError: If the seed cannot be read or is invalid.
    """
    if path is not None:
        return _validate(SeedData, _read_json(path, "Seed"), "Seed", path)

    content = resources.files(DATA_PACKAGE).joinpath(DEFAULT_SEED_FILE).read_text(
        encoding="utf-8"
    )
    return _validate(SeedData, _parse_json(content, "Seed"), "Seed")


def load_default_rates() -> RateTable:
    """Rate table built from the packaged default seed.

    This is the only place default rate values are read from. Services use
    the persisted price list; the defaults only reach it through seeding.
    """
    seed = load_seed_data()
    return RateTable.from_mapping({rate.key: rate.value for rate in seed.rates})


def load_part(path: Path) -> PartInput:
    """Load a part configuration from a JSON file."""
    return _validate(PartInput, _read_json(path, "Part"), "Part", path)


def load_part_from_dict(data: dict[str, Any]) -> PartInput:
    return _validate(PartInput, data, "Part")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the CLI and the API server.

    Library code only creates module loggers; this is called once by the
    entry points.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("panelcut").setLevel(numeric)
