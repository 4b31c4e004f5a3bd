"""Unit tests for the Document schema, strict reply loading and diffing."""

import copy

import pytest
from pydantic import ValidationError

from lumina.contexts.document.model import (
    Document,
    Experience,
    Message,
    changed_fields,
    load_document,
    save_document,
)


@pytest.mark.unit
def test_empty_document_is_complete():
    """A default Document has every section with empty values."""
    document = Document()

    assert document.personal_info.full_name == ""
    assert document.personal_info.photo == ""
    assert document.skills == []
    assert document.experiences == []
    assert document.education == []
    assert document.theme.primary_color == "#4f46e5"
    assert document.theme.font_family == "Inter"


@pytest.mark.unit
def test_sample_document_loads(sample_document):
    assert sample_document.personal_info.full_name == "Alexandre Dupont"
    assert len(sample_document.experiences) == 2
    assert sample_document.education[0].year == "2018"
    assert sample_document.theme.primary_color == "#4f46e5"


@pytest.mark.unit
def test_to_dict_uses_camel_case(sample_document):
    data = sample_document.to_dict()

    assert set(data) == {"personalInfo", "skills", "experiences", "education", "theme"}
    assert "fullName" in data["personalInfo"]
    assert data["theme"] == {"primaryColor": "#4f46e5", "fontFamily": "Inter"}


@pytest.mark.unit
def test_from_dict_roundtrip(sample_document):
    assert Document.from_dict(sample_document.to_dict()) == sample_document


@pytest.mark.unit
def test_from_dict_fills_missing_fields():
    document = Document.from_dict({"personalInfo": {"fullName": "Ada"}})

    assert document.personal_info.full_name == "Ada"
    assert document.personal_info.email == ""
    assert document.skills == []


@pytest.mark.unit
def test_document_is_frozen(sample_document):
    with pytest.raises(ValidationError):
        sample_document.theme.primary_color = "#000000"


@pytest.mark.unit
def test_duplicate_experience_ids_rejected():
    with pytest.raises(ValidationError, match="Duplicate id"):
        Document(experiences=[Experience(id="a"), Experience(id="a")])


@pytest.mark.unit
def test_empty_record_id_rejected():
    with pytest.raises(ValidationError, match="empty id"):
        Document.from_dict({"education": [{"id": " ", "school": "X"}]})


@pytest.mark.unit
def test_same_id_allowed_across_lists(sample_document):
    """Ids only need to be unique within their own list."""
    assert sample_document.experiences[0].id == sample_document.education[0].id == "1"


@pytest.mark.unit
@pytest.mark.parametrize("color", ["#fff", "#0a1a3f", "#0A1A3F80"])
def test_valid_hex_colors(color):
    document = Document.from_dict({"theme": {"primaryColor": color, "fontFamily": "Inter"}})
    assert document.theme.primary_color == color


@pytest.mark.unit
@pytest.mark.parametrize("color", ["blue", "0a1a3f", "#12345", "#ggg", ""])
def test_invalid_hex_colors(color):
    with pytest.raises(ValidationError, match="hex color"):
        Document.from_dict({"theme": {"primaryColor": color, "fontFamily": "Inter"}})


@pytest.mark.unit
def test_unknown_keys_rejected():
    with pytest.raises(ValidationError):
        Document.from_dict({"hobbies": ["chess"]})


class TestFromReply:
    """Strict loading of untrusted model output."""

    @pytest.mark.unit
    def test_accepts_complete_document(self, sample_data, sample_document):
        assert Document.from_reply(sample_data) == sample_document

    @pytest.mark.unit
    def test_rejects_non_object(self):
        with pytest.raises(ValueError, match="JSON object"):
            Document.from_reply(["not", "a", "document"])

    @pytest.mark.unit
    def test_rejects_missing_top_level_section(self, sample_data):
        del sample_data["skills"]
        with pytest.raises(ValueError, match="missing: skills"):
            Document.from_reply(sample_data)

    @pytest.mark.unit
    def test_rejects_missing_nested_field(self, sample_data):
        del sample_data["experiences"][1]["description"]
        with pytest.raises(ValueError, match=r"experiences\[1\]\.description"):
            Document.from_reply(sample_data)

    @pytest.mark.unit
    def test_rejects_type_coercion(self, sample_data):
        """A number where a string belongs is rejected, not converted."""
        sample_data["education"][0]["year"] = 2018
        with pytest.raises(ValidationError):
            Document.from_reply(sample_data)

    @pytest.mark.unit
    def test_rejects_snake_case_keys(self, sample_data):
        info = sample_data["personalInfo"]
        info["full_name"] = info.pop("fullName")
        with pytest.raises(ValueError, match="personalInfo.fullName"):
            Document.from_reply(sample_data)

    @pytest.mark.unit
    def test_rejects_skills_as_string(self, sample_data):
        sample_data["skills"] = "Figma, React"
        with pytest.raises(ValidationError):
            Document.from_reply(sample_data)


class TestChangedFields:

    @pytest.mark.unit
    def test_identical_documents(self, sample_document):
        assert changed_fields(sample_document, sample_document) == []

    @pytest.mark.unit
    def test_nested_scalar_change(self, sample_document, sample_data):
        sample_data["theme"]["primaryColor"] = "#0a1a3f"
        sample_data["experiences"][1]["description"] = "Nouvelle description"
        after = Document.from_dict(sample_data)

        assert changed_fields(sample_document, after) == [
            "experiences[1].description",
            "theme.primaryColor",
        ]

    @pytest.mark.unit
    def test_list_length_change_reports_list(self, sample_document, sample_data):
        sample_data["skills"].append("Python")
        after = Document.from_dict(sample_data)

        assert changed_fields(sample_document, after) == ["skills"]


class TestFileIO:

    @pytest.mark.unit
    def test_json_roundtrip(self, sample_document, tmp_path):
        path = save_document(sample_document, tmp_path / "cv.json")
        assert load_document(path) == sample_document

    @pytest.mark.unit
    def test_yaml_roundtrip(self, sample_document, tmp_path):
        path = save_document(sample_document, tmp_path / "nested" / "cv.yaml")
        assert load_document(path) == sample_document

    @pytest.mark.unit
    @pytest.mark.parametrize("suffix", [".yaml", ".json"])
    def test_interpolation_syntax_kept_literally(self, tmp_path, suffix):
        document = Document.from_dict(
            {
                "personalInfo": {"summary": "Budget managed: ${budget} per quarter"},
                "experiences": [{"id": "a", "description": "Ran ${oc.env:HOME} migrations"}],
            }
        )

        loaded = load_document(save_document(document, tmp_path / f"cv{suffix}"))

        assert loaded == document
        assert loaded.personal_info.summary == "Budget managed: ${budget} per quarter"

    @pytest.mark.unit
    def test_unsupported_extension(self, sample_document, tmp_path):
        with pytest.raises(ValueError, match="Unsupported"):
            save_document(sample_document, tmp_path / "cv.txt")

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_document(tmp_path / "absent.json")


@pytest.mark.unit
def test_message_roles():
    message = Message(id="m1", role="user", content="Bonjour")
    assert message.role == "user"

    with pytest.raises(ValidationError):
        Message(id="m2", role="system", content="nope")


@pytest.mark.unit
def test_reply_data_is_not_mutated(sample_data):
    original = copy.deepcopy(sample_data)
    Document.from_reply(sample_data)
    assert sample_data == original
