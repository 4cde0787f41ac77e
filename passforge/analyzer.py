"""Password strength analysis.

Scores a password from 0 to 100, estimates its entropy, places it in one of
five tiers and projects how long an offline attacker would need to crack it.
Analysis is a pure function of the password: no randomness, no state.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from passforge import checks
from passforge.config import AnalysisConfig
from passforge.constants import ENTROPY_CLASS_SIZES


class StrengthTier(enum.Enum):
    VERY_WEAK = "Very Weak"
    WEAK = "Weak"
    MEDIUM = "Medium"
    STRONG = "Strong"
    VERY_STRONG = "Very Strong"

    @property
    def label(self) -> str:
        return self.value


_TIERS = list(StrengthTier)
_COLORS = ["#dc3545", "#fd7e14", "#ffc107", "#28a745", "#20c997"]
_RISK_LEVELS = ["High", "Medium-High", "Medium", "Low", "Very Low"]

# (upper bound in seconds, divisor, unit)
_TIME_BUCKETS = [
    (60, 1, "second"),
    (3_600, 60, "minute"),
    (86_400, 3_600, "hour"),
    (2_592_000, 86_400, "day"),
    (31_536_000, 2_592_000, "month"),
    (3_153_600_000, 31_536_000, "year"),
]

_SECURITY_SUGGESTIONS = [
    "Change your passwords regularly",
    "Use a different password for every account",
    "Enable two-factor authentication",
    "Use a password manager",
]


@dataclass
class StrengthChecks:
    length: int = 0
    variety_count: int = 0
    uniqueness_percent: int = 0
    has_lowercase: bool = False
    has_uppercase: bool = False
    has_numbers: bool = False
    has_symbols: bool = False
    is_common: bool = False
    has_pattern: bool = False


@dataclass
class StrengthAnalysis:
    score: int
    tier: StrengthTier
    entropy_bits: float
    crack_time: str
    checks: StrengthChecks = field(default_factory=StrengthChecks)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["tier"] = self.tier.label
        return data


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ── Entropy ────────────────────────────────────────────────────────────────


def char_set_size(password: str) -> int:
    """Sum of the class sizes of every class present in *password* (min 1)."""
    classes = checks.character_classes(password)
    return max(sum(ENTROPY_CLASS_SIZES[name] for name, present in classes.items() if present), 1)


def calculate_entropy(password: str) -> float:
    """Entropy in bits: ``log2(char_set_size ** length)``."""
    if not password:
        return 0.0
    return len(password) * math.log2(char_set_size(password))


# ── Tiers ──────────────────────────────────────────────────────────────────


def _tier_index(score: float, config: AnalysisConfig | None) -> int:
    config = config or AnalysisConfig()
    for index, threshold in enumerate(config.thresholds):
        if score < threshold:
            return index
    return len(config.thresholds)


def strength_tier(score: float, config: AnalysisConfig | None = None) -> StrengthTier:
    return _TIERS[_tier_index(score, config)]


def get_strength_color(score: float, config: AnalysisConfig | None = None) -> str:
    return _COLORS[_tier_index(score, config)]


def get_risk_level(score: float, config: AnalysisConfig | None = None) -> str:
    return _RISK_LEVELS[_tier_index(score, config)]


# ── Crack time ─────────────────────────────────────────────────────────────


def estimate_crack_time(bits: float, config: AnalysisConfig | None = None) -> str:
    """Bucket ``2**bits / guesses_per_second`` into a human-readable string."""
    config = config or AnalysisConfig()
    exponent = bits - math.log2(config.guesses_per_second)
    # Past the last bucket; also keeps 2 ** exponent from overflowing
    if exponent >= math.log2(_TIME_BUCKETS[-1][0]):
        return "billions of years"

    seconds = 2.0 ** exponent
    if seconds < 1:
        return "instant"
    for limit, divisor, unit in _TIME_BUCKETS:
        if seconds < limit:
            amount = _round_half_up(seconds / divisor)
            return f"{amount} {unit}{'s' if amount != 1 else ''}"
    return "billions of years"


# ── Recommendations ────────────────────────────────────────────────────────


def get_recommendations(result: StrengthChecks) -> list[str]:
    """Suggest improvements, one per failed check, in display order."""
    recommendations: list[str] = []

    if result.length < 8:
        recommendations.append("Use at least 8 characters")
    if result.length < 12:
        recommendations.append("Longer passwords are more secure")
    if result.variety_count < 3:
        recommendations.append("Mix uppercase, lowercase, numbers and symbols")
    if result.uniqueness_percent < 80:
        recommendations.append("Avoid repeating characters")
    if result.has_pattern:
        recommendations.append("Avoid sequences such as 123 or abc")
    if result.is_common:
        recommendations.append("Avoid common passwords (123456, password, ...)")
    if not result.has_uppercase:
        recommendations.append("Add at least one uppercase letter")
    if not result.has_lowercase:
        recommendations.append("Add at least one lowercase letter")
    if not result.has_numbers:
        recommendations.append("Add at least one number")
    if not result.has_symbols:
        recommendations.append("Add at least one symbol")

    return recommendations


# ── Analysis ───────────────────────────────────────────────────────────────


def analyze(password: str | None, config: AnalysisConfig | None = None) -> StrengthAnalysis:
    """Score *password* and return a full :class:`StrengthAnalysis`.

    Never raises: ``None`` and the empty string give a zero score.

    Score contributions:
        length      -- ``min(2 * length, 25)`` from 8 characters up
        variety     -- 6 per character class present
        uniqueness  -- up to 20, proportional to distinct/length
        penalties   -- -15 for a common password inside, -15 for a pattern
        bonuses     -- +10 for 12+ chars with 3+ classes,
                       +15 more for 16+ chars with all 4 classes
    """
    config = config or AnalysisConfig()
    if not password:
        return StrengthAnalysis(
            score=0,
            tier=strength_tier(0, config),
            entropy_bits=0.0,
            crack_time=estimate_crack_time(0, config),
        )

    length = len(password)
    classes = checks.character_classes(password)
    variety = sum(classes.values())
    uniqueness = len(set(password)) / length
    is_common = checks.contains_common(password)
    has_pattern = checks.has_pattern(password)

    score = 0.0
    if length >= 8:
        score += min(length * 2, 25)
    score += variety * 6
    score += min(uniqueness * 20, 20)
    if is_common:
        score -= 15
    if has_pattern:
        score -= 15
    if length >= 12 and variety >= 3:
        score += 10
    if length >= 16 and variety >= 4:
        score += 15

    final = _round_half_up(max(0.0, min(100.0, score)))
    bits = calculate_entropy(password)

    result = StrengthChecks(
        length=length,
        variety_count=variety,
        uniqueness_percent=_round_half_up(uniqueness * 100),
        has_lowercase=classes["lowercase"],
        has_uppercase=classes["uppercase"],
        has_numbers=classes["numbers"],
        has_symbols=classes["symbols"],
        is_common=is_common,
        has_pattern=has_pattern,
    )

    return StrengthAnalysis(
        score=final,
        tier=strength_tier(final, config),
        entropy_bits=round(bits, 1),
        crack_time=estimate_crack_time(bits, config),
        checks=result,
        recommendations=get_recommendations(result),
    )


def analyze_realtime(password: str | None, config: AnalysisConfig | None = None) -> dict | None:
    """Compact result for live meters; ``None`` for empty input."""
    if not password:
        return None
    config = config or AnalysisConfig()
    analysis = analyze(password, config)
    return {
        "score": analysis.score,
        "tier": analysis.tier.label,
        "is_weak": analysis.score < config.weak_threshold,
        "is_strong": analysis.score >= config.strong_threshold,
        "color": get_strength_color(analysis.score, config),
        "width": f"{analysis.score}%",
    }


def mask_password(password: str) -> str:
    return password[:3] + "***"


def check_compromised(password: str) -> dict:
    """Look *password* up in the local common-password list.

    Stand-in for a breach-database query; nothing leaves the process.
    """
    compromised = checks.is_common(password or "")
    return {
        "compromised": compromised,
        "count": None if compromised else 0,
        "message": (
            "This password is widely used and unsafe"
            if compromised
            else "This password does not appear in the common-password list"
        ),
    }


def analyze_batch(passwords: Iterable[str], config: AnalysisConfig | None = None) -> list[dict]:
    """Analyse each password, tagging results with their input index."""
    return [
        {"index": index, "password": mask_password(password or ""), **analyze(password, config).to_dict()}
        for index, password in enumerate(passwords)
    ]


def generate_report(password: str, config: AnalysisConfig | None = None) -> dict:
    """Full security report with the password masked."""
    analysis = analyze(password, config)
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        **analysis.to_dict(),
        "password": mask_password(password or ""),
        "compromised": check_compromised(password)["compromised"],
        "risk_level": get_risk_level(analysis.score, config),
        "suggestions": list(_SECURITY_SUGGESTIONS),
    }


def get_security_tips() -> list[dict]:
    return [
        {
            "title": "Use long passwords",
            "description": "The longer the password the better; 12+ characters is recommended.",
        },
        {
            "title": "Mix character types",
            "description": "Combine uppercase, lowercase, numbers and symbols.",
        },
        {
            "title": "Use unique passwords",
            "description": "Never reuse a password across accounts.",
        },
        {
            "title": "Avoid common passwords",
            "description": "Passwords like 123456 or password are guessed first.",
        },
        {
            "title": "Avoid patterns",
            "description": "Sequences such as 123, abc or qwerty are easy to guess.",
        },
        {
            "title": "Use a password manager",
            "description": "Let a manager remember strong passwords for you.",
        },
        {
            "title": "Enable two-factor authentication",
            "description": "Turn on 2FA wherever it is offered.",
        },
    ]
