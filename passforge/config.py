"""passforge configuration.

Dataclass sections with defaults, optionally loaded from a TOML file::

    [generation]
    default_length = 16

    [analysis]
    guesses_per_second = 1e10

    [vault]
    path = "~/.passforge/vault.json"

    [logging]
    level = "INFO"

There is no process-wide instance: build a :class:`PassforgeConfig` and hand
the relevant section to the functions that need it.
"""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from passforge import constants

_DEFAULT_CONFIG_PATH = Path("~/.passforge/config.toml")


@dataclass(slots=True)
class GenerationConfig:
    """Length limits used by the generator and the options validator."""

    min_length: int = constants.MIN_LENGTH
    max_length: int = constants.MAX_LENGTH
    default_length: int = constants.DEFAULT_LENGTH
    strong_length: int = constants.STRONG_LENGTH

    def __post_init__(self) -> None:
        if not 1 <= self.min_length <= self.max_length:
            raise ValueError(
                f"Invalid length bounds: {self.min_length}-{self.max_length}"
            )


@dataclass(slots=True)
class AnalysisConfig:
    """Tier thresholds and the attacker model for crack-time estimates.

    Thresholds are inclusive lower bounds of Weak, Medium, Strong and
    Very Strong respectively.
    """

    weak_threshold: int = constants.WEAK_THRESHOLD
    medium_threshold: int = constants.MEDIUM_THRESHOLD
    strong_threshold: int = constants.STRONG_THRESHOLD
    very_strong_threshold: int = constants.VERY_STRONG_THRESHOLD
    guesses_per_second: float = constants.GUESSES_PER_SECOND

    def __post_init__(self) -> None:
        bounds = self.thresholds
        if not (0 < bounds[0] < bounds[1] < bounds[2] < bounds[3] <= 100):
            raise ValueError(f"Strength thresholds must be increasing: {bounds}")
        if self.guesses_per_second <= 0:
            raise ValueError("guesses_per_second must be positive")

    @property
    def thresholds(self) -> tuple[int, int, int, int]:
        return (
            self.weak_threshold,
            self.medium_threshold,
            self.strong_threshold,
            self.very_strong_threshold,
        )


@dataclass(slots=True)
class VaultConfig:
    """Where saved entries live and how much history is kept."""

    path: str = "~/.passforge/vault.json"
    max_history_items: int = 100

    @property
    def resolved_path(self) -> Path:
        return Path(self.path).expanduser()


@dataclass(slots=True)
class PassforgeConfig:
    """All configuration sections.

    Usage:
        >>> config = PassforgeConfig.load("passforge.toml")
        >>> config.generation.default_length
        12
    """

    generation: GenerationConfig = field(default_factory=GenerationConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    vault: VaultConfig = field(default_factory=VaultConfig)
    log_level: str = "WARNING"

    @classmethod
    def load(cls, path: str | Path | None = None) -> PassforgeConfig:
        """Load configuration from a TOML file.

        Missing keys fall back to defaults and unknown keys are ignored.
        A missing default file yields a default config, but an explicitly
        given *path* must exist.

        Raises:
            FileNotFoundError: *path* was given and does not exist.
            ValueError: a section holds inconsistent values.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH
        config_path = config_path.expanduser()

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            generation=_build_section(GenerationConfig, raw.get("generation", {})),
            analysis=_build_section(AnalysisConfig, raw.get("analysis", {})),
            vault=_build_section(VaultConfig, raw.get("vault", {})),
            log_level=str(raw.get("logging", {}).get("level", "WARNING")).upper(),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _build_section(cls: type, data: dict[str, Any]) -> Any:
    """Instantiate *cls* from the keys of *data* it declares."""
    known = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in data.items() if k in known})
