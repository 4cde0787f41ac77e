"""JSON-file storage for saved passwords, categories, settings and history.

The whole vault is one JSON document, rewritten after every change::

    {"passwords": [...], "categories": [...], "settings": {...}, "history": [...]}

Passwords are stored as given; the file is not encrypted.
"""

from __future__ import annotations

import copy
import json
import logging
import uuid
from dataclasses import asdict, dataclass, fields
from datetime import datetime, timezone
from typing import Any

from passforge import __version__, constants
from passforge.analyzer import analyze, mask_password
from passforge.config import GenerationConfig, VaultConfig
from passforge.errors import ValidationError
from passforge.validation import (
    validate_category_name,
    validate_import_data,
    validate_notes,
    validate_password,
    validate_password_name,
    validate_search_query,
    validate_settings,
)

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class SavedPasswordEntry:
    id: str
    name: str
    password: str
    category: str | None = None
    notes: str | None = None
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SavedPasswordEntry:
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class Vault:
    """Saved entries backed by a JSON file.

    Usage::

        vault = Vault(VaultConfig(path="vault.json"))
        entry = vault.save_password("Mail", "s3cr3t!Pass", category="personal")
        vault.delete_password(entry.id)
    """

    def __init__(
        self,
        config: VaultConfig | None = None,
        generation: GenerationConfig | None = None,
    ) -> None:
        self.config = config or VaultConfig()
        self.generation = generation or GenerationConfig()
        self.path = self.config.resolved_path
        self._data = self._load()

    # ── Persistence ────────────────────────────────────────────────────

    def _empty(self) -> dict[str, Any]:
        return {
            "passwords": [],
            "categories": copy.deepcopy(list(constants.DEFAULT_CATEGORIES)),
            "settings": dict(constants.DEFAULT_SETTINGS),
            "history": [],
        }

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return self._empty()

        with open(self.path, encoding="utf-8") as f:
            raw = json.load(f)

        result = validate_import_data(raw)
        if not result["valid"]:
            raise ValidationError(result["errors"])

        data, errors = self._normalise(result["data"])
        for error in errors:
            logger.warning("Skipping stored entry: %s", error)
        return data

    def _normalise(self, data: dict[str, Any]) -> tuple[dict[str, Any], list[str]]:
        """Keep the well-formed parts of *data*; return them with per-entry errors."""
        passwords, errors = [], []
        for index, raw in enumerate(data["passwords"]):
            entry_errors = self._entry_errors(index, raw)
            if entry_errors:
                errors.extend(entry_errors)
            else:
                passwords.append(raw)

        categories = [
            c for c in data["categories"]
            if isinstance(c, dict) and isinstance(c.get("id"), str)
        ]
        settings = validate_settings(data["settings"])["sanitized"]
        return {
            "passwords": passwords,
            "categories": categories or self._empty()["categories"],
            "settings": {**constants.DEFAULT_SETTINGS, **settings},
            "history": [h for h in data["history"] if isinstance(h, dict)],
        }, errors

    def _entry_errors(self, index: int, raw: Any) -> list[str]:
        if not isinstance(raw, dict):
            return [f"Entry {index} is not an object"]
        missing = [key for key in ("id", "name", "password") if not isinstance(raw.get(key), str)]
        if missing:
            return [f"Entry {index} is missing {', '.join(missing)}"]
        if not isinstance(raw.get("category"), (str, type(None))):
            return [f"Entry {index} has an invalid category"]
        try:
            self._check_entry({key: raw.get(key) for key in ("name", "password", "notes")})
        except ValidationError as exc:
            return [f"Entry {index}: {error}" for error in exc.errors]
        return []

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2, ensure_ascii=False)
        tmp.replace(self.path)

    # ── Passwords ──────────────────────────────────────────────────────

    def _check_entry(self, values: dict[str, Any]) -> None:
        """Validate whichever of name, password and notes *values* holds."""
        errors = []
        if "name" in values:
            result = validate_password_name(values["name"])
            if not result["valid"]:
                errors.append(result["error"])
        if "password" in values:
            # Content warnings (patterns, common words) do not block saving
            result = validate_password(values["password"], config=self.generation)
            if not result["checks"].get("length"):
                errors.extend(result["errors"][:1])
        if "notes" in values:
            result = validate_notes(values["notes"])
            if not result["valid"]:
                errors.append(result["error"])
        if errors:
            raise ValidationError(errors)

    def save_password(
        self,
        name: str,
        password: str,
        category: str | None = None,
        notes: str | None = None,
    ) -> SavedPasswordEntry:
        """Validate and store a new entry.

        Raises:
            ValidationError: the name, password length or notes are invalid.
        """
        self._check_entry({"name": name, "password": password, "notes": notes})

        stamp = _now()
        entry = SavedPasswordEntry(
            id=uuid.uuid4().hex,
            name=name.strip(),
            password=password,
            category=category,
            notes=notes.strip() if notes else None,
            created_at=stamp,
            updated_at=stamp,
        )
        self._data["passwords"].append(entry.to_dict())
        self._bump_category(category, 1)
        if self.get_settings().get("save_history", True):
            self._record_history(password)
        self._write()

        logger.info("Saved password entry %s", entry.id)
        return entry

    def get_password(self, entry_id: str) -> SavedPasswordEntry:
        return SavedPasswordEntry.from_dict(self._find(entry_id))

    def list_passwords(
        self, category: str | None = None, query: str | None = None
    ) -> list[SavedPasswordEntry]:
        """Entries filtered by category and by a name/notes search query."""
        needle = validate_search_query(query).get("sanitized", "").lower()
        entries = []
        for raw in self._data["passwords"]:
            if category and raw.get("category") != category:
                continue
            haystack = f"{raw.get('name', '')} {raw.get('notes') or ''}".lower()
            if needle and needle not in haystack:
                continue
            entries.append(SavedPasswordEntry.from_dict(raw))
        return entries

    def update_password(self, entry_id: str, **updates: Any) -> SavedPasswordEntry:
        """Update *name*, *password*, *category* or *notes* of an entry."""
        raw = self._find(entry_id)
        self._check_entry(updates)

        if "category" in updates and updates["category"] != raw.get("category"):
            self._bump_category(raw.get("category"), -1)
            self._bump_category(updates["category"], 1)

        for key in ("name", "password", "category", "notes"):
            if key in updates:
                raw[key] = updates[key].strip() if key == "name" else updates[key]
        raw["updated_at"] = _now()
        self._write()

        logger.info("Updated password entry %s", entry_id)
        return SavedPasswordEntry.from_dict(raw)

    def delete_password(self, entry_id: str) -> None:
        raw = self._find(entry_id)
        self._data["passwords"].remove(raw)
        self._bump_category(raw.get("category"), -1)
        self._write()
        logger.info("Deleted password entry %s", entry_id)

    def _find(self, entry_id: str) -> dict[str, Any]:
        for raw in self._data["passwords"]:
            if raw.get("id") == entry_id:
                return raw
        raise KeyError(f"No saved password with id {entry_id!r}")

    # ── Categories ─────────────────────────────────────────────────────

    @property
    def categories(self) -> list[dict[str, Any]]:
        return copy.deepcopy(self._data["categories"])

    def add_category(self, name: str) -> dict[str, Any]:
        result = validate_category_name(name)
        if not result["valid"]:
            raise ValidationError(result["error"])

        category = {"id": uuid.uuid4().hex, "name": name.strip(), "count": 0}
        self._data["categories"].append(category)
        self._write()
        return dict(category)

    def delete_category(self, category_id: str) -> None:
        """Remove a category that no saved entry uses."""
        if any(p.get("category") == category_id for p in self._data["passwords"]):
            raise ValidationError("Category still has saved passwords; move or delete them first")

        before = len(self._data["categories"])
        self._data["categories"] = [
            c for c in self._data["categories"] if c.get("id") != category_id
        ]
        if len(self._data["categories"]) == before:
            raise KeyError(f"No category with id {category_id!r}")
        self._write()

    def _bump_category(self, category_id: str | None, delta: int) -> None:
        if not category_id:
            return
        for category in self._data["categories"]:
            if category.get("id") == category_id:
                category["count"] = max(0, category.get("count", 0) + delta)

    # ── Settings ───────────────────────────────────────────────────────

    def get_settings(self) -> dict[str, Any]:
        return dict(self._data["settings"])

    def save_settings(self, settings: dict[str, Any]) -> dict[str, Any]:
        """Merge validated *settings* into the stored ones."""
        result = validate_settings(settings)
        if not result["valid"]:
            raise ValidationError(result["errors"])
        self._data["settings"].update(result["sanitized"])
        self._write()
        return self.get_settings()

    # ── History ────────────────────────────────────────────────────────

    def _record_history(self, password: str) -> None:
        self._data["history"].insert(0, {
            "password": mask_password(password),
            "timestamp": _now(),
            "length": len(password),
            "strength": analyze(password).tier.label,
        })
        del self._data["history"][self.config.max_history_items:]

    @property
    def history(self) -> list[dict[str, Any]]:
        return copy.deepcopy(self._data["history"])

    # ── Export / import ────────────────────────────────────────────────

    def export_data(self) -> dict[str, Any]:
        data = copy.deepcopy(self._data)
        data["export_date"] = _now()
        data["version"] = __version__
        return data

    def import_data(self, data: Any) -> None:
        """Replace the vault contents with *data*.

        Nothing is written unless every password entry is well formed.

        Raises:
            ValidationError: *data* does not have the export shape, or an
                entry lacks a valid id, name or password.
        """
        result = validate_import_data(data)
        if not result["valid"]:
            raise ValidationError(result["errors"])

        normalised, errors = self._normalise(result["data"])
        if errors:
            raise ValidationError(errors)
        self._data = normalised
        self._write()
        logger.info("Imported %d password entries", len(self._data["passwords"]))

    def clear(self) -> None:
        self._data = self._empty()
        self._write()
