"""Loading of nesting configuration files.

Every failure, from a missing file to a piece with a negative height, is
reported as a ConfigError. Validation details carry the JSON path of the
offending value and a location that names the piece it belongs to, so a
problem in the second piece reads ``Piece #2 "Sleeve" height`` rather than
``pieces[1].height``.
"""

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from fabricnest.application.config.schema import MAX_PIECE_TYPES, NestingConfiguration

Location = tuple[str | int, ...]


class ConfigError(Exception):
    """A nesting configuration could not be loaded or validated.

    Attributes:
        message: Human-readable summary.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse or validation.
        path: Configuration file, when the error came from one.
        details: Line/column for JSON errors; path, location, message,
            value and error_type for every validation problem.
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


def json_path(loc: Location) -> str:
    """Render a validation location as a JSON path, e.g. ``pieces[1].height``."""
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif path:
            path += f".{segment}"
        else:
            path = str(segment)
    return path


def _piece_name(data: Any, index: int) -> str:
    name = f"Piece #{index + 1}"
    pieces = data.get("pieces") if isinstance(data, Mapping) else None
    if not isinstance(pieces, list) or index >= len(pieces):
        return name
    piece = pieces[index]
    if not isinstance(piece, Mapping):
        return name
    if piece.get("label"):
        return f'{name} "{piece["label"]}"'
    if piece.get("id"):
        return f"{name} ({piece['id']})"
    return name


def describe_location(loc: Location, data: Any = None) -> str:
    """Name the configuration element a validation location points at.

    Locations inside the piece list are named after the piece, using its
    label or id from ``data`` when available.

    Examples:
        >>> describe_location(("fabric", "width_cm"))
        'fabric.width_cm'
        >>> describe_location(("pieces", 1, "height"), {"pieces": [{}, {"label": "Sleeve"}]})
        'Piece #2 "Sleeve" height'
    """
    if len(loc) >= 2 and loc[0] == "pieces" and isinstance(loc[1], int):
        name = _piece_name(data, loc[1])
        field = json_path(loc[2:])
        return f"{name} {field}" if field else name
    return json_path(loc) or "(root)"


def _message(error: Mapping[str, Any], loc: Location) -> str:
    if error["type"] == "too_long" and loc == ("pieces",):
        return f"At most {MAX_PIECE_TYPES} piece types are allowed"
    return str(error["msg"]).removeprefix("Value error, ")


def validation_details(
    errors: Iterable[Mapping[str, Any]], data: Any = None
) -> list[dict[str, Any]]:
    """Convert Pydantic error dictionaries to configuration error details.

    Args:
        errors: Output of ``ValidationError.errors()``.
        data: The raw input that failed validation, used to name pieces.
    """
    details: list[dict[str, Any]] = []
    for error in errors:
        loc = tuple(error["loc"])
        details.append(
            {
                "path": json_path(loc),
                "location": describe_location(loc, data),
                "message": _message(error, loc),
                "value": error.get("input"),
                "error_type": error["type"],
            }
        )
    return details


def _summarize(details: list[dict[str, Any]]) -> str:
    lines = [f"Configuration has {len(details)} problem(s):"]
    for detail in details:
        line = f"  - {detail['location']}: {detail['message']}"
        value = detail["value"]
        if value is not None and not isinstance(value, (dict, list)):
            line += f", got {value!r}"
        lines.append(line)
    return "\n".join(lines)


def _validate(data: Any, path: Path | None = None) -> NestingConfiguration:
    try:
        return NestingConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = validation_details(e.errors(), data)
        raise ConfigError(
            _summarize(details), error_type="validation", path=path, details=details
        ) from None


def load_config(path: Path) -> NestingConfiguration:
    """Load and validate a nesting configuration from a JSON file.

    Raises:
        ConfigError: If the file cannot be read, is not JSON, or does not
            describe a valid configuration.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(
            f"Config file not found: {path}", error_type="file_not_found", path=path
        ) from None
    except PermissionError:
        raise ConfigError(
            f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        ) from None
    except UnicodeDecodeError:
        raise ConfigError(
            f"Config file is not UTF-8 text: {path}",
            error_type="file_read_error",
            path=path,
        ) from None
    except OSError as e:
        raise ConfigError(
            f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from None

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in config file: {path} "
            f"(line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from None

    return _validate(data, path)


def load_config_from_dict(data: dict[str, Any]) -> NestingConfiguration:
    """Validate a configuration given as a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(data)
