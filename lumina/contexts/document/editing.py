"""
Form-style editing of a Document.

Every helper takes the current Document and returns a new complete Document;
nothing is modified in place. Field names may be given either as Python
attribute names (full_name) or as wire names (fullName).
"""

import base64
import mimetypes
import re
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel

from lumina.contexts.document.ids import IdGenerator
from lumina.contexts.document.model import Document, Education, Experience, Theme


def _resolve_field(model_cls: type, name: str) -> str:
    """Map an attribute or camelCase name to the attribute name; `id` is never editable."""
    for attr, info in model_cls.model_fields.items():
        if name in (attr, info.alias):
            if attr == "id":
                raise KeyError(f"{model_cls.__name__}.id cannot be edited")
            return attr
    raise KeyError(f"Unknown {model_cls.__name__} field: {name}")


def _with(model: BaseModel, **changes) -> BaseModel:
    """Validated copy of a model with some attributes changed."""
    return type(model).model_validate({**dict(model), **changes})


# =============================================================================
# PERSONAL INFO
# =============================================================================


def update_personal_info(document: Document, field: str, value: str) -> Document:
    attr = _resolve_field(type(document.personal_info), field)
    personal_info = _with(document.personal_info, **{attr: value})
    return _with(document, personal_info=personal_info)


# =============================================================================
# EXPERIENCES
# =============================================================================


def add_experience(document: Document, ids: IdGenerator) -> Tuple[Document, str]:
    """
    Insert a blank experience at the top of the list.

    Returns:
        Tuple of (new document, id of the new entry)
    """
    new_id = ids.new_id(taken=document.experience_ids())
    experiences = [Experience(id=new_id), *document.experiences]
    return _with(document, experiences=experiences), new_id


def update_experience(document: Document, experience_id: str, field: str, value: str) -> Document:
    attr = _resolve_field(Experience, field)
    if experience_id not in document.experience_ids():
        raise KeyError(f"No experience with id {experience_id!r}")

    experiences = [
        _with(exp, **{attr: value}) if exp.id == experience_id else exp
        for exp in document.experiences
    ]
    return _with(document, experiences=experiences)


def remove_experience(document: Document, experience_id: str) -> Document:
    if experience_id not in document.experience_ids():
        raise KeyError(f"No experience with id {experience_id!r}")
    experiences = [exp for exp in document.experiences if exp.id != experience_id]
    return _with(document, experiences=experiences)


# =============================================================================
# EDUCATION
# =============================================================================


def add_education(document: Document, ids: IdGenerator) -> Tuple[Document, str]:
    """
    Append a blank education entry.

    Returns:
        Tuple of (new document, id of the new entry)
    """
    new_id = ids.new_id(taken=document.education_ids())
    education = [*document.education, Education(id=new_id)]
    return _with(document, education=education), new_id


def update_education(document: Document, education_id: str, field: str, value: str) -> Document:
    attr = _resolve_field(Education, field)
    if education_id not in document.education_ids():
        raise KeyError(f"No education entry with id {education_id!r}")

    education = [
        _with(edu, **{attr: value}) if edu.id == education_id else edu
        for edu in document.education
    ]
    return _with(document, education=education)


def remove_education(document: Document, education_id: str) -> Document:
    if education_id not in document.education_ids():
        raise KeyError(f"No education entry with id {education_id!r}")
    education = [edu for edu in document.education if edu.id != education_id]
    return _with(document, education=education)


# =============================================================================
# SKILLS & THEME
# =============================================================================


def set_skills_from_text(document: Document, text: str) -> Document:
    """Replace skills with the comma-separated entries of text (trimmed, blanks dropped)."""
    skills = [skill.strip() for skill in text.split(",") if skill.strip()]
    return _with(document, skills=skills)


def set_theme(
    document: Document,
    primary_color: Optional[str] = None,
    font_family: Optional[str] = None,
) -> Document:
    """
    Change theme color and/or font.

    Raises:
        pydantic.ValidationError: If the color is not a hex color or the font is blank
    """
    changes = {}
    if primary_color is not None:
        changes["primary_color"] = primary_color
    if font_family is not None:
        changes["font_family"] = font_family
    theme: Theme = _with(document.theme, **changes)
    return _with(document, theme=theme)


# =============================================================================
# PHOTO
# =============================================================================


def encode_photo(data: bytes, mime_type: str) -> str:
    """
    Encode image bytes as an inline data URI.

    Raises:
        ValueError: If data is empty or mime_type is not an image type
    """
    if not data:
        raise ValueError("Photo data is empty")
    if not mime_type or not mime_type.startswith("image/"):
        raise ValueError(f"Photo must be an image, got mime type {mime_type!r}")
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def photo_from_file(path: Path) -> str:
    """Read an image file and return it as a data URI (mime type guessed from the extension)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Photo file not found: {path}")
    mime_type, _ = mimetypes.guess_type(path.name)
    return encode_photo(path.read_bytes(), mime_type or "")


def attach_photo(document: Document, photo: str) -> Document:
    """Set personalInfo.photo to a URL or data URI."""
    return update_personal_info(document, "photo", photo)


# =============================================================================
# EXPORT NAMING
# =============================================================================


def export_filename(document: Document, extension: str) -> str:
    """
    File name for an exported CV, e.g. "CV_Alexandre_Dupont.pdf".

    Falls back to "CV.<ext>" when the document has no name.
    """
    extension = extension.lstrip(".")
    name = re.sub(r"\s+", "_", document.personal_info.full_name.strip())
    return f"CV_{name}.{extension}" if name else f"CV.{extension}"
