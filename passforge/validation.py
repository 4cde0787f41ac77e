"""Input validators.

Every validator is a pure function returning a plain dict with a ``valid``
flag plus either ``error`` (single-rule checks) or ``errors`` (aggregated
checks).  None of them raise; callers decide what to do with the result.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from passforge import checks, constants
from passforge.config import GenerationConfig

if TYPE_CHECKING:
    from passforge.generator import GenerationOptions

_FORBIDDEN = set(constants.FORBIDDEN_NAME_CHARS)


def _strip_forbidden(text: str) -> str:
    return "".join(c for c in text if c not in _FORBIDDEN)


# ── Generation options ─────────────────────────────────────────────────────


def validate_generation_options(
    options: GenerationOptions | None,
    config: GenerationConfig | None = None,
) -> dict:
    """Check the length bounds and that at least one category is selected.

    Returns a dict with keys:
        valid  -- bool
        errors -- list[str], every violated rule
        checks -- dict[str, bool]
    """
    config = config or GenerationConfig()

    if options is None:
        return {"valid": False, "errors": ["Generation options are required"], "checks": {}}

    errors: list[str] = []

    valid_length = config.min_length <= options.length <= config.max_length
    if not valid_length:
        errors.append(
            f"Password length must be between {config.min_length} "
            f"and {config.max_length} characters"
        )

    has_types = bool(options.categories)
    if not has_types:
        errors.append("Select at least one character type")

    return {
        "valid": not errors,
        "errors": errors,
        "checks": {
            "valid_length": valid_length,
            "has_character_types": has_types,
            "include_uppercase": options.include_uppercase,
            "include_lowercase": options.include_lowercase,
            "include_numbers": options.include_numbers,
            "include_symbols": options.include_symbols,
        },
    }


# ── Names and notes ────────────────────────────────────────────────────────


def _validate_name(name: Any, label: str, min_len: int, max_len: int) -> dict:
    if not isinstance(name, str) or not name.strip():
        return {"valid": False, "error": f"{label} is required"}

    trimmed = name.strip()
    if len(trimmed) < min_len:
        return {"valid": False, "error": f"{label} must be at least {min_len} characters"}
    if len(trimmed) > max_len:
        return {"valid": False, "error": f"{label} must be at most {max_len} characters"}
    if any(c in _FORBIDDEN for c in trimmed):
        return {
            "valid": False,
            "error": f"{label} cannot contain any of {constants.FORBIDDEN_NAME_CHARS}",
        }
    return {"valid": True, "error": None}


def validate_password_name(name: Any) -> dict:
    return _validate_name(
        name,
        "Password name",
        constants.PASSWORD_NAME_MIN_LENGTH,
        constants.PASSWORD_NAME_MAX_LENGTH,
    )


def validate_category_name(name: Any) -> dict:
    return _validate_name(
        name,
        "Category name",
        constants.CATEGORY_NAME_MIN_LENGTH,
        constants.CATEGORY_NAME_MAX_LENGTH,
    )


def validate_notes(notes: Any) -> dict:
    """Notes are optional; when given they must fit the notes limit."""
    if notes is None or notes == "":
        return {"valid": True, "error": None}
    if not isinstance(notes, str):
        return {"valid": False, "error": "Notes must be text"}
    if len(notes.strip()) > constants.NOTES_MAX_LENGTH:
        return {
            "valid": False,
            "error": f"Notes must be at most {constants.NOTES_MAX_LENGTH} characters",
        }
    return {"valid": True, "error": None}


# ── Passwords ──────────────────────────────────────────────────────────────


def validate_password(
    password: Any,
    options: Mapping[str, bool] | None = None,
    config: GenerationConfig | None = None,
) -> dict:
    """Validate a password against the length bounds and content rules.

    *options* may set ``require_uppercase``, ``require_lowercase``,
    ``require_numbers`` and ``require_symbols``.

    Returns a dict with keys:
        valid  -- bool
        errors -- list[str]
        checks -- dict[str, bool]  (length, has_*, not_common, no_pattern,
                  no_repeats)
    """
    options = options or {}
    config = config or GenerationConfig()

    if not password:
        return {"valid": False, "errors": ["Password is required"], "checks": {}}
    if not isinstance(password, str):
        return {"valid": False, "errors": ["Invalid password format"], "checks": {}}

    errors: list[str] = []

    if len(password) < config.min_length:
        errors.append(f"Password must be at least {config.min_length} characters")
    if len(password) > config.max_length:
        errors.append(f"Password must be at most {config.max_length} characters")

    classes = checks.character_classes(password)
    requirements = [
        ("require_uppercase", "uppercase", "an uppercase letter"),
        ("require_lowercase", "lowercase", "a lowercase letter"),
        ("require_numbers", "numbers", "a number"),
        ("require_symbols", "symbols", "a symbol"),
    ]
    for key, cls, what in requirements:
        if options.get(key) and not classes[cls]:
            errors.append(f"Password must contain at least {what}")

    common = checks.is_common(password)
    sequence = checks.has_sequence(password)
    repeats = checks.has_repeats(password)

    if common:
        errors.append("Password is too common")
    if sequence:
        errors.append("Password contains sequential characters (123, abc, ...)")
    if repeats:
        errors.append("Password contains too many repeated characters")

    return {
        "valid": not errors,
        "errors": errors,
        "checks": {
            "length": config.min_length <= len(password) <= config.max_length,
            "has_lowercase": classes["lowercase"],
            "has_uppercase": classes["uppercase"],
            "has_numbers": classes["numbers"],
            "has_symbols": classes["symbols"],
            "not_common": not common,
            "no_pattern": not sequence,
            "no_repeats": not repeats,
        },
    }


# ── Bulk data ──────────────────────────────────────────────────────────────


def validate_import_data(data: Any) -> dict:
    """Shape-check an import payload.

    Never fails hard: invalid or missing fields are replaced by empty
    defaults in ``data`` and reported in ``errors``.
    """
    errors: list[str] = []

    if not isinstance(data, Mapping):
        return {
            "valid": False,
            "errors": ["Invalid data format"],
            "data": {"passwords": [], "categories": [], "settings": {}, "history": []},
        }

    if data.get("passwords") is not None and not isinstance(data["passwords"], list):
        errors.append("passwords must be a list")
    if data.get("categories") is not None and not isinstance(data["categories"], list):
        errors.append("categories must be a list")
    if data.get("settings") is not None and not isinstance(data["settings"], Mapping):
        errors.append("settings must be an object")

    def _list(key: str) -> list:
        value = data.get(key)
        return value if isinstance(value, list) else []

    settings = data.get("settings")
    return {
        "valid": not errors,
        "errors": errors,
        "data": {
            "passwords": _list("passwords"),
            "categories": _list("categories"),
            "settings": dict(settings) if isinstance(settings, Mapping) else {},
            "history": _list("history"),
        },
    }


def validate_settings(settings: Any) -> dict:
    """Whitelist-validate a settings object.

    Recognised, valid fields are copied to ``sanitized``; invalid ones are
    reported in ``errors``; anything else is dropped.
    """
    if not isinstance(settings, Mapping):
        return {"valid": False, "errors": ["Settings must be an object"], "sanitized": {}}

    errors: list[str] = []
    sanitized: dict[str, Any] = {}

    if "theme" in settings:
        if settings["theme"] in constants.THEMES:
            sanitized["theme"] = settings["theme"]
        else:
            errors.append(f"Invalid theme: {settings['theme']!r}")

    for name in constants.BOOLEAN_SETTINGS:
        if name not in settings:
            continue
        if isinstance(settings[name], bool):
            sanitized[name] = settings[name]
        else:
            errors.append(f"{name} must be a boolean")

    return {"valid": not errors, "errors": errors, "sanitized": sanitized}


# ── Free text ──────────────────────────────────────────────────────────────


def validate_search_query(query: Any) -> dict:
    if not isinstance(query, str) or not query.strip():
        return {"valid": True, "sanitized": ""}

    trimmed = query.strip()
    if len(trimmed) > constants.SEARCH_QUERY_MAX_LENGTH:
        return {"valid": False, "error": "Search query is too long"}

    return {"valid": True, "sanitized": _strip_forbidden(trimmed), "original": trimmed}


def sanitize_input(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return _strip_forbidden(value.strip())[: constants.SANITIZED_INPUT_MAX_LENGTH]


def validate_number_range(
    value: Any, minimum: int, maximum: int, field_name: str = "Value"
) -> dict:
    """Parse *value* as an int and check ``minimum <= value <= maximum``."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return {"valid": False, "error": f"{field_name} must be a whole number"}

    if not minimum <= number <= maximum:
        return {"valid": False, "error": f"{field_name} must be between {minimum} and {maximum}"}
    return {"valid": True, "value": number}
