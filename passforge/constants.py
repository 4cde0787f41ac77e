"""Fixed alphabets, limits and word lists shared across passforge."""

# ── Character sets ─────────────────────────────────────────────────────────

UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
NUMBERS = "0123456789"
SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

# Fixed generation order: uppercase -> lowercase -> numbers -> symbols
CHAR_SETS = {
    "uppercase": UPPERCASE,
    "lowercase": LOWERCASE,
    "numbers": NUMBERS,
    "symbols": SYMBOLS,
}

# Class sizes assumed by the entropy estimate (symbols approximated as 32)
ENTROPY_CLASS_SIZES = {
    "lowercase": 26,
    "uppercase": 26,
    "numbers": 10,
    "symbols": 32,
}

# ── Length limits ──────────────────────────────────────────────────────────

MIN_LENGTH = 4
MAX_LENGTH = 64
DEFAULT_LENGTH = 12
STRONG_LENGTH = 16

PIN_MIN_LENGTH = 4
PIN_MAX_LENGTH = 12

# ── Strength analysis ──────────────────────────────────────────────────────

WEAK_THRESHOLD = 20
MEDIUM_THRESHOLD = 40
STRONG_THRESHOLD = 60
VERY_STRONG_THRESHOLD = 80

GUESSES_PER_SECOND = 1e12

COMMON_PASSWORDS = (
    "123456", "password", "123456789", "qwerty", "abc123",
    "password123", "admin", "letmein", "welcome", "monkey",
    "12345678", "password1", "12345", "qwerty123", "1q2w3e4r",
    "1234567890", "password12", "admin123", "root", "user",
)

# ── Validation bounds ──────────────────────────────────────────────────────

PASSWORD_NAME_MIN_LENGTH = 2
PASSWORD_NAME_MAX_LENGTH = 50
CATEGORY_NAME_MIN_LENGTH = 2
CATEGORY_NAME_MAX_LENGTH = 30
NOTES_MAX_LENGTH = 200
SEARCH_QUERY_MAX_LENGTH = 100
SANITIZED_INPUT_MAX_LENGTH = 1000

# Characters rejected in names and stripped by the sanitizers
FORBIDDEN_NAME_CHARS = "<>\"'&"

THEMES = ("light", "dark")
BOOLEAN_SETTINGS = ("auto_copy", "show_strength", "save_history")

# ── Vault defaults ─────────────────────────────────────────────────────────

DEFAULT_CATEGORIES = (
    {"id": "personal", "name": "Personal", "count": 0},
    {"id": "work", "name": "Work", "count": 0},
    {"id": "social", "name": "Social Media", "count": 0},
    {"id": "finance", "name": "Finance", "count": 0},
)

DEFAULT_SETTINGS = {
    "theme": "light",
    "auto_copy": False,
    "show_strength": True,
    "save_history": True,
}
