"""passforge -- password generation and strength analysis.

Core functions for building character pools, generating passwords,
scoring their strength and validating user input before it is saved.
"""

__version__ = "2.0.0"

from passforge.analyzer import (
    StrengthAnalysis,
    StrengthTier,
    analyze,
    analyze_batch,
    check_compromised,
    get_risk_level,
    get_strength_color,
)
from passforge.config import PassforgeConfig
from passforge.errors import (
    MalformedPatternError,
    NoCharacterTypesError,
    RangeError,
    ValidationError,
)
from passforge.generator import (
    GenerationOptions,
    build_pool,
    generate,
    generate_multiple,
    generate_pattern,
    generate_pin,
    generate_with_custom_set,
    pool_size,
)
from passforge.validation import (
    validate_category_name,
    validate_generation_options,
    validate_import_data,
    validate_notes,
    validate_password,
    validate_password_name,
    validate_settings,
)
from passforge.vault import SavedPasswordEntry, Vault

__all__ = [
    "GenerationOptions",
    "MalformedPatternError",
    "NoCharacterTypesError",
    "PassforgeConfig",
    "RangeError",
    "SavedPasswordEntry",
    "StrengthAnalysis",
    "StrengthTier",
    "ValidationError",
    "Vault",
    "analyze",
    "analyze_batch",
    "build_pool",
    "check_compromised",
    "generate",
    "generate_multiple",
    "generate_pattern",
    "generate_pin",
    "generate_with_custom_set",
    "get_risk_level",
    "get_strength_color",
    "pool_size",
    "validate_category_name",
    "validate_generation_options",
    "validate_import_data",
    "validate_notes",
    "validate_password",
    "validate_password_name",
    "validate_settings",
]
