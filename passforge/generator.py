"""Password generation.

Builds the character pool from category flags, guarantees one character
from every selected category, fills the rest from the pool and shuffles.
All randomness comes from :mod:`secrets`.
"""

from __future__ import annotations

import logging
import re
import secrets
from dataclasses import dataclass, replace

from passforge import constants
from passforge.config import GenerationConfig
from passforge.errors import (
    MalformedPatternError,
    NoCharacterTypesError,
    RangeError,
    ValidationError,
)
from passforge.validation import validate_generation_options

logger = logging.getLogger(__name__)

_PATTERN = re.compile(r"(\d+[ulns])+", re.IGNORECASE)
_PATTERN_TOKEN = re.compile(r"(\d+)([ulns])", re.IGNORECASE)
_PATTERN_SETS = {
    "u": constants.UPPERCASE,
    "l": constants.LOWERCASE,
    "n": constants.NUMBERS,
    "s": constants.SYMBOLS,
}

_VOWELS = "aeiou"
_CONSONANTS = "bcdfghjklmnpqrstvwxyz"


@dataclass(frozen=True)
class GenerationOptions:
    """What to generate: a length and the character categories to draw from."""

    length: int = constants.DEFAULT_LENGTH
    include_uppercase: bool = True
    include_lowercase: bool = True
    include_numbers: bool = True
    include_symbols: bool = True

    @property
    def flags(self) -> dict[str, bool]:
        return {
            "uppercase": self.include_uppercase,
            "lowercase": self.include_lowercase,
            "numbers": self.include_numbers,
            "symbols": self.include_symbols,
        }

    @property
    def categories(self) -> list[str]:
        """Selected categories in generation order."""
        return required_categories(self.flags)


# ── Character pool ─────────────────────────────────────────────────────────


def required_categories(flags: dict[str, bool]) -> list[str]:
    return [name for name in constants.CHAR_SETS if flags.get(name)]


def build_pool(flags: dict[str, bool]) -> str:
    """Concatenate the alphabets of every selected category.

    Order is fixed (uppercase, lowercase, numbers, symbols).  Returns an
    empty string when nothing is selected.
    """
    return "".join(constants.CHAR_SETS[name] for name in required_categories(flags))


def pool_size(flags: dict[str, bool]) -> int:
    """Size of the selected pool, never less than 1."""
    return max(len(build_pool(flags)), 1)


# ── Random primitives ──────────────────────────────────────────────────────


def _shuffle(chars: list[str]) -> list[str]:
    # Fisher-Yates shuffle with cryptographic randomness
    for i in range(len(chars) - 1, 0, -1):
        j = secrets.randbelow(i + 1)
        chars[i], chars[j] = chars[j], chars[i]
    return chars


def _draw(alphabet: str, count: int) -> list[str]:
    return [secrets.choice(alphabet) for _ in range(count)]


# ── Generation ─────────────────────────────────────────────────────────────


def generate(
    options: GenerationOptions | None = None,
    config: GenerationConfig | None = None,
) -> str:
    """Generate a password satisfying *options*.

    Every selected category is represented at least once.  If more
    categories are selected than *options.length* allows (only possible with
    a ``min_length`` below 4), the shuffled result is truncated to the
    requested length.

    Raises:
        NoCharacterTypesError: no category selected.
        ValidationError: any other violated option rule.
    """
    options = options or GenerationOptions()
    result = validate_generation_options(options, config)
    if not result["valid"]:
        if not result["checks"]["has_character_types"]:
            raise NoCharacterTypesError(result["errors"])
        raise ValidationError(result["errors"])

    pool = build_pool(options.flags)
    if not pool:
        raise NoCharacterTypesError("Select at least one character type")

    required = options.categories
    chars = [secrets.choice(constants.CHAR_SETS[name]) for name in required]

    remaining = max(0, options.length - len(required))
    chars.extend(_draw(pool, remaining))

    password = "".join(_shuffle(chars)[: options.length])
    logger.debug(
        "Generated %d-character password from a %d-character pool", len(password), len(pool)
    )
    return password


def generate_multiple(
    count: int = 3,
    options: GenerationOptions | None = None,
    config: GenerationConfig | None = None,
) -> list[str]:
    """Generate *count* independent passwords (duplicates are possible)."""
    return [generate(options, config) for _ in range(count)]


def generate_with_custom_set(length: int, alphabet: str) -> str:
    """Draw *length* characters uniformly from *alphabet*."""
    if not alphabet:
        raise ValidationError("A non-empty character set is required")
    if length < 1:
        raise RangeError("Length must be at least 1")
    return "".join(_draw(alphabet, length))


def generate_pattern(pattern: str, config: GenerationConfig | None = None) -> str:
    """Generate from a pattern such as ``"2u3l2n1s"``.

    Each token is a count followed by a category letter (u=uppercase,
    l=lowercase, n=numbers, s=symbols).  The drawn characters are shuffled.
    """
    config = config or GenerationConfig()
    if not isinstance(pattern, str) or not _PATTERN.fullmatch(pattern):
        raise MalformedPatternError(
            f"Invalid pattern {pattern!r}, expected something like '2u3l2n1s'"
        )

    tokens = [(int(count), kind.lower()) for count, kind in _PATTERN_TOKEN.findall(pattern)]
    total = sum(count for count, _ in tokens)
    if total > config.max_length:
        raise RangeError(
            f"Pattern yields {total} characters, the maximum is {config.max_length}"
        )

    chars: list[str] = []
    for count, kind in tokens:
        chars.extend(_draw(_PATTERN_SETS[kind], count))
    return "".join(_shuffle(chars))


def generate_pin(length: int = 4) -> str:
    """Generate a numeric PIN of 4 to 12 digits."""
    if not constants.PIN_MIN_LENGTH <= length <= constants.PIN_MAX_LENGTH:
        raise RangeError(
            f"PIN length must be between {constants.PIN_MIN_LENGTH} "
            f"and {constants.PIN_MAX_LENGTH}"
        )
    return "".join(_draw(constants.NUMBERS, length))


def generate_memorable(length: int = 12, config: GenerationConfig | None = None) -> str:
    """Generate a pronounceable password of alternating vowels and consonants.

    A digit or symbol is occasionally slipped in after a letter.
    """
    config = config or GenerationConfig()
    if not config.min_length <= length <= config.max_length:
        raise RangeError(
            f"Length must be between {config.min_length} and {config.max_length}"
        )

    chars: list[str] = []
    use_vowel = secrets.randbelow(2) == 0
    while len(chars) < length:
        chars.append(secrets.choice(_VOWELS if use_vowel else _CONSONANTS))
        use_vowel = not use_vowel
        # 10% chance of an extra digit or one of the first four symbols
        if len(chars) < length - 1 and secrets.randbelow(10) == 0:
            if secrets.randbelow(2):
                chars.append(secrets.choice(constants.NUMBERS))
            else:
                chars.append(secrets.choice(constants.SYMBOLS[:4]))
    return "".join(chars[:length])


def generate_with_separators(
    options: GenerationOptions | None = None,
    separator: str = "-",
    config: GenerationConfig | None = None,
) -> str:
    """Generate a password and split it into groups of four."""
    password = generate(options, config)
    groups = [password[i : i + 4] for i in range(0, len(password), 4)]
    return separator.join(groups)


def get_suggestions(
    options: GenerationOptions | None = None,
    config: GenerationConfig | None = None,
) -> list[dict]:
    """Return standard, strong and memorable suggestions for *options*."""
    options = options or GenerationOptions()
    config = config or GenerationConfig()
    strong = replace(options, length=config.strong_length)
    return [
        {
            "name": "Standard",
            "password": generate(options, config),
            "description": "Balanced password",
        },
        {
            "name": "Strong",
            "password": generate(strong, config),
            "description": "Longer and stronger",
        },
        {
            "name": "Memorable",
            "password": generate_memorable(options.length, config),
            "description": "Easier to remember",
        },
    ]
