"""
CV Document Structure

Defines the canonical structured representation of a CV and of chat messages.
The Document is the value shared between the form editor, the chat assistant,
the renderer and the score calculator.

Wire format is camelCase JSON (personalInfo.fullName, theme.primaryColor, ...);
Python attributes are snake_case. Models are frozen: every mutation produces a
complete replacement Document.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, get_args

from omegaconf import OmegaConf
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

DEFAULT_PRIMARY_COLOR = "#4f46e5"
DEFAULT_FONT_FAMILY = "Inter"


class _CVModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


class PersonalInfo(_CVModel):
    """Identity and contact block. Every field is optional text, empty by default."""

    full_name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    # URL or inline data URI
    photo: str = ""
    summary: str = ""


class Experience(_CVModel):
    """
    One work experience entry.

    Attributes:
        id: Opaque identifier, stable for the life of the entry, used only for
            update/delete addressing
    """

    id: str
    company: str = ""
    position: str = ""
    period: str = ""
    description: str = ""


class Education(_CVModel):
    """One education entry. Same id discipline as Experience."""

    id: str
    school: str = ""
    degree: str = ""
    year: str = ""


class Theme(_CVModel):
    primary_color: str = DEFAULT_PRIMARY_COLOR
    font_family: str = DEFAULT_FONT_FAMILY

    @field_validator("primary_color")
    @classmethod
    def _check_hex_color(cls, value: str) -> str:
        if not HEX_COLOR_PATTERN.match(value):
            raise ValueError(f"primaryColor must be a hex color like #4f46e5, got {value!r}")
        return value

    @field_validator("font_family")
    @classmethod
    def _check_font_family(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("fontFamily must not be empty")
        return value


class Document(_CVModel):
    """
    Complete CV state.

    A Document is always whole: every section is present, string fields default
    to "" and lists to []. Record ids are non-empty and unique within their list.

    Factory methods:
        from_dict(data) - Lenient load for trusted sources (files, form state)
        from_reply(data) - Strict load for untrusted model output
    """

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    skills: List[str] = Field(default_factory=list)
    experiences: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    theme: Theme = Field(default_factory=Theme)

    @model_validator(mode="after")
    def _check_record_ids(self) -> "Document":
        for section in ("experiences", "education"):
            seen = set()
            for record in getattr(self, section):
                if not record.id.strip():
                    raise ValueError(f"{section} entry has an empty id")
                if record.id in seen:
                    raise ValueError(f"Duplicate id {record.id!r} in {section}")
                seen.add(record.id)
        return self

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        """Build a Document from a camelCase dict, filling absent fields with defaults."""
        return cls.model_validate(data)

    @classmethod
    def from_reply(cls, data: Any) -> "Document":
        """
        Build a Document from untrusted data without coercion or defaults.

        Types must match exactly (no "2018" <- 2018), and every key of every
        nested object must be present under its camelCase name. Omitted fields
        are rejected rather than defaulted, since a silently dropped field would
        erase user content.

        Raises:
            ValueError: If data is not an object or keys are missing
            pydantic.ValidationError: If types, ids or colors are invalid
        """
        if not isinstance(data, dict):
            raise ValueError(f"Document must be a JSON object, got {type(data).__name__}")

        document = cls.model_validate(data, strict=True)

        missing = _missing_keys(cls, data)
        if missing:
            raise ValueError(f"Incomplete document, missing: {', '.join(missing)}")

        return document

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """camelCase dict, the shape exchanged with the model and stored on disk."""
        return self.model_dump(by_alias=True)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def experience_ids(self) -> List[str]:
        return [exp.id for exp in self.experiences]

    def education_ids(self) -> List[str]:
        return [edu.id for edu in self.education]


class Message(_CVModel):
    """One conversation turn. Immutable once created."""

    id: str
    role: Literal["user", "assistant"]
    content: str


# =============================================================================
# HELPERS
# =============================================================================


def _nested_model(annotation: Any) -> Optional[type]:
    """Return the BaseModel class carried by an annotation (directly or as list item)."""
    for candidate in (annotation, *get_args(annotation)):
        if isinstance(candidate, type) and issubclass(candidate, BaseModel):
            return candidate
    return None


def _missing_keys(model_cls: type, data: Dict[str, Any], path: str = "") -> List[str]:
    """List dotted paths of fields whose camelCase key is absent from data."""
    missing = []
    for name, info in model_cls.model_fields.items():
        key = info.alias or name
        where = f"{path}.{key}" if path else key
        if key not in data:
            missing.append(where)
            continue

        nested = _nested_model(info.annotation)
        if nested is None:
            continue

        value = data[key]
        if isinstance(value, dict):
            missing.extend(_missing_keys(nested, value, where))
        elif isinstance(value, list):
            for index, item in enumerate(value):
                if isinstance(item, dict):
                    missing.extend(_missing_keys(nested, item, f"{where}[{index}]"))
    return missing


def changed_fields(before: Document, after: Document) -> List[str]:
    """
    Compare two Documents and list the paths that differ.

    Paths use the camelCase wire names, e.g. "theme.primaryColor" or
    "experiences[1].description". A list whose length changed is reported as
    the list itself.
    """
    return _diff(before.to_dict(), after.to_dict(), "")


def _diff(old: Any, new: Any, path: str) -> List[str]:
    if isinstance(old, dict) and isinstance(new, dict):
        changes = []
        for key in sorted(set(old) | set(new), key=lambda k: (k not in old, k)):
            where = f"{path}.{key}" if path else key
            changes.extend(_diff(old.get(key), new.get(key), where))
        return changes

    if isinstance(old, list) and isinstance(new, list) and len(old) == len(new):
        if all(isinstance(item, dict) for item in old + new):
            changes = []
            for index, (old_item, new_item) in enumerate(zip(old, new)):
                changes.extend(_diff(old_item, new_item, f"{path}[{index}]"))
            return changes

    return [] if old == new else [path]


# =============================================================================
# FILE I/O
# =============================================================================


def load_document(path: Path) -> Document:
    """
    Load a Document from a .json, .yaml or .yml file.

    YAML values are taken literally: text such as "${budget}" is CV content,
    not an OmegaConf interpolation.

    Raises:
        FileNotFoundError: If path does not exist
        ValueError: If the extension is not supported
        pydantic.ValidationError: If the content is not a valid Document
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
    elif suffix in (".yaml", ".yml"):
        data = OmegaConf.to_container(OmegaConf.load(path), resolve=False)
    else:
        raise ValueError(f"Unsupported document format: {path.suffix} (use .json or .yaml)")

    return Document.from_dict(data)


def save_document(document: Document, path: Path) -> Path:
    """Write a Document as JSON or YAML depending on the file extension."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    suffix = path.suffix.lower()
    if suffix == ".json":
        path.write_text(document.to_json() + "\n", encoding="utf-8")
    elif suffix in (".yaml", ".yml"):
        OmegaConf.save(OmegaConf.create(document.to_dict()), path, resolve=False)
    else:
        raise ValueError(f"Unsupported document format: {path.suffix} (use .json or .yaml)")

    return path
