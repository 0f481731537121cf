"""
Tests for core.models.document

Test Coverage:
- is_valid_image_id(): Length and reserved prefix rules
- PortfolioDocument: title, to_dict()/from_dict()
"""
import pytest

from portfolio_toolkit.core.models import ImageReference, PortfolioDocument
from portfolio_toolkit.core.models.document import (
    RESERVED_IMAGE_ID_PREFIXES,
    VALID_IMAGE_ID_LENGTH,
    is_valid_image_id,
)


class TestIsValidImageId:
    """Tests for the bitmap validity predicate."""

    def test_when_24_chars_then_valid(self, valid_image_id):
        assert len(valid_image_id) == VALID_IMAGE_ID_LENGTH
        assert is_valid_image_id(valid_image_id)

    @pytest.mark.parametrize("image_id", ["", None, "abc", "x" * 23, "x" * 25])
    def test_when_wrong_length_then_invalid(self, image_id):
        assert not is_valid_image_id(image_id)

    @pytest.mark.parametrize("prefix", RESERVED_IMAGE_ID_PREFIXES)
    def test_when_reserved_prefix_then_invalid_even_at_24_chars(self, prefix):
        image_id = (prefix + "0" * VALID_IMAGE_ID_LENGTH)[:VALID_IMAGE_ID_LENGTH]
        assert len(image_id) == VALID_IMAGE_ID_LENGTH
        assert not is_valid_image_id(image_id)

    def test_image_reference_exposes_predicate(self, valid_image_id):
        assert ImageReference(valid_image_id).is_resolvable
        assert not ImageReference("missing-1").is_resolvable


class TestPortfolioDocument:
    """Tests for PortfolioDocument properties."""

    def test_title_includes_design_pattern_label(self):
        doc = PortfolioDocument(student_name="Ada", design_pattern_label="General")
        assert doc.title == "Ada - General Portfolio"

    def test_title_without_label(self):
        assert PortfolioDocument(student_name="Ada").title == "Ada Portfolio"

    def test_images_list_is_stored_as_tuple(self, valid_image_id):
        doc = PortfolioDocument(student_name="Ada", images=[ImageReference(valid_image_id)])
        assert isinstance(doc.images, tuple)


class TestDocumentSerialization:
    """Tests for to_dict()/from_dict()."""

    def test_to_dict_uses_camel_case_keys(self, sample_document):
        data = sample_document.to_dict()

        assert data["studentName"] == "Ada Lovelace"
        assert data["designPattern"] == "General"
        assert data["compiledContent"] == sample_document.compiled_body
        assert len(data["generatedImages"]) == 2
        assert "studentRemarks" not in data

    def test_from_dict_accepts_snake_case_keys(self):
        doc = PortfolioDocument.from_dict({
            "student_name": "Grace",
            "compiled_body": "## A\nbody",
            "instructor_remarks": "Well done",
        })

        assert doc.student_name == "Grace"
        assert doc.compiled_body == "## A\nbody"
        assert doc.instructor_remarks == "Well done"
        assert doc.images == ()

    def test_from_dict_when_student_name_missing_then_raises(self):
        with pytest.raises(KeyError):
            PortfolioDocument.from_dict({"compiledContent": "x"})

    @pytest.mark.parametrize("raw", ["nope", 3, [{"description": "no id"}], [None]])
    def test_from_dict_when_images_malformed_then_no_images(self, raw):
        doc = PortfolioDocument.from_dict({"studentName": "Ada", "generatedImages": raw})
        assert doc.images == ()

    def test_from_dict_restores_document(self, sample_document):
        restored = PortfolioDocument.from_dict(sample_document.to_dict())
        assert restored == sample_document

    def test_from_dict_coerces_non_string_remarks(self):
        doc = PortfolioDocument.from_dict({
            "studentName": "Ada",
            "compiledContent": "## A\nx",
            "studentRemarks": 42,
            "instructorRemarks": None,
        })

        assert doc.student_remarks == "42"
        assert doc.instructor_remarks is None
