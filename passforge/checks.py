"""Content predicates shared by the strength analyzer and the validators."""

import re

from passforge.constants import COMMON_PASSWORDS

# ── Character classes ──────────────────────────────────────────────────────

_CLASS_PATTERNS = {
    "lowercase": re.compile(r"[a-z]"),
    "uppercase": re.compile(r"[A-Z]"),
    "numbers": re.compile(r"[0-9]"),
    "symbols": re.compile(r"[^a-zA-Z0-9]"),
}


def character_classes(password: str) -> dict[str, bool]:
    """Return which of the four character classes occur in *password*."""
    return {name: bool(rx.search(password)) for name, rx in _CLASS_PATTERNS.items()}


# ── Patterns ───────────────────────────────────────────────────────────────

_NUMERIC_RUNS = ["0123456789"[i : i + 3] for i in range(8)]
_ALPHA_RUNS = ["abcdefghijklmnopqrstuvwxyz"[i : i + 3] for i in range(24)]
_KEYBOARD_RUNS = ["qwerty", "asdf", "zxcv"]

_REPEAT = re.compile(r"(.)\1{2,}")


def has_sequence(password: str) -> bool:
    """True for ascending runs (``123``, ``abc``) or keyboard rows (``qwerty``)."""
    if any(run in password for run in _NUMERIC_RUNS):
        return True
    lower = password.lower()
    return any(run in lower for run in _ALPHA_RUNS + _KEYBOARD_RUNS)


def has_repeats(password: str) -> bool:
    """True when the same character occurs three or more times in a row."""
    return bool(_REPEAT.search(password))


def has_pattern(password: str) -> bool:
    """True if *password* holds any predictable run or repetition."""
    return has_sequence(password) or has_repeats(password)


# ── Common passwords ───────────────────────────────────────────────────────


def contains_common(password: str) -> bool:
    """True if any common password occurs inside *password* (case-insensitive)."""
    lower = password.lower()
    return any(common in lower for common in COMMON_PASSWORDS)


def is_common(password: str) -> bool:
    """True if *password* itself is a common password (case-insensitive)."""
    return password.lower() in COMMON_PASSWORDS
