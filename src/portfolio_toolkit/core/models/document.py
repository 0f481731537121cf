"""
Module: document

Purpose:
    Provides the PortfolioDocument and ImageReference dataclasses - the
    immutable input handed to the layout engine by the content compiler.
    A document carries the compiled markdown-like body, the optional
    remark blocks and the ordered list of image references that
    `[IMAGE]` tokens resolve into.

Key Functions:
    - is_valid_image_id(): Validity predicate gating every bitmap draw
    - PortfolioDocument.to_dict() / PortfolioDocument.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - typing (std)

Used By:
    - core.utils.serialization
    - builder.images: Prefetch and resolution
    - builder.output.assembler: Document assembly
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

# Ids of this exact length are store-issued object ids
VALID_IMAGE_ID_LENGTH = 24

# Prefixes the compiler uses to mark images it could not produce
RESERVED_IMAGE_ID_PREFIXES = ("fallback-", "missing-", "failed-")


def is_valid_image_id(image_id: Optional[str]) -> bool:
    """
    Check whether an image id can be resolved to a bitmap.

    An id is usable only if it is exactly 24 characters long and does
    not start with one of the reserved failure prefixes. Anything else
    must render as a placeholder.

    Args:
        image_id: Opaque image identifier (may be None)

    Returns:
        True if a bitmap draw may be attempted for this id

    Example:
        >>> is_valid_image_id("65f0c2a9e4b0a1b2c3d4e5f6")
        True
        >>> is_valid_image_id("fallback-0001")
        False
    """
    if not image_id or len(image_id) != VALID_IMAGE_ID_LENGTH:
        return False
    return not image_id.startswith(RESERVED_IMAGE_ID_PREFIXES)


@dataclass(frozen=True, slots=True)
class ImageReference:
    """
    Reference to an image produced for the portfolio.

    Attributes:
        id: Opaque identifier resolved by an ImageProvider
        description: Free-text caption, also used for fuzzy matching
    """

    id: str
    description: str = ""

    @property
    def is_resolvable(self) -> bool:
        """True if the id passes the validity predicate."""
        return is_valid_image_id(self.id)

    def to_dict(self) -> dict:
        return {"id": self.id, "description": self.description}

    @classmethod
    def from_dict(cls, data: dict) -> ImageReference:
        return cls(id=str(data["id"]), description=str(data.get("description") or ""))


@dataclass(frozen=True)
class PortfolioDocument:
    """
    Compiled portfolio ready for layout (immutable).

    Attributes:
        student_name: Student shown as the page header title
        design_pattern_label: Portfolio flavour shown in the subtitle
        compiled_body: Raw body with `#`/`##` markers and image tokens
        student_remarks: Optional free-text remarks from the student
        instructor_remarks: Optional free-text remarks from the instructor
        images: Ordered image references, indexed by `[IMAGE]` tokens

    Example:
        >>> doc = PortfolioDocument(
        ...     student_name="Ada",
        ...     design_pattern_label="General",
        ...     compiled_body="## Math\\nGreat progress this term.",
        ... )
        >>> doc.title
        'Ada - General Portfolio'
    """

    student_name: str
    design_pattern_label: str = ""
    compiled_body: str = ""
    student_remarks: Optional[str] = None
    instructor_remarks: Optional[str] = None
    images: tuple[ImageReference, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence from callers, store a tuple
        if not isinstance(self.images, tuple):
            object.__setattr__(self, "images", tuple(self.images))

    @property
    def title(self) -> str:
        """Document title used for PDF metadata."""
        if self.design_pattern_label:
            return f"{self.student_name} - {self.design_pattern_label} Portfolio"
        return f"{self.student_name} Portfolio"

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize using the compiler's camelCase field names.

        Returns:
            Dict suitable for JSON serialization
        """
        d: dict[str, Any] = {
            "studentName": self.student_name,
            "designPattern": self.design_pattern_label,
            "compiledContent": self.compiled_body,
            "generatedImages": [image.to_dict() for image in self.images],
        }
        if self.student_remarks is not None:
            d["studentRemarks"] = self.student_remarks
        if self.instructor_remarks is not None:
            d["instructorRemarks"] = self.instructor_remarks
        return d

    @classmethod
    def from_dict(cls, data: dict) -> PortfolioDocument:
        """
        Deserialize from a compiler payload.

        Both the compiler's camelCase keys and snake_case keys are accepted.
        A missing or malformed image list degrades to no images.

        Args:
            data: Dict representation

        Returns:
            PortfolioDocument instance

        Raises:
            KeyError: If the student name is missing
        """
        student_name = _first_present(data, "studentName", "student_name")
        if student_name is None:
            raise KeyError("studentName")

        return cls(
            student_name=str(student_name),
            design_pattern_label=str(
                _first_present(data, "designPattern", "design_pattern_label") or ""
            ),
            compiled_body=str(
                _first_present(data, "compiledContent", "compiled_body") or ""
            ),
            student_remarks=_optional_str(
                _first_present(data, "studentRemarks", "student_remarks")
            ),
            instructor_remarks=_optional_str(
                _first_present(data, "instructorRemarks", "instructor_remarks")
            ),
            images=_parse_images(_first_present(data, "generatedImages", "images")),
        )


def _first_present(data: dict, *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _parse_images(raw: Any) -> tuple[ImageReference, ...]:
    """Parse the image list, returning no images if it is malformed."""
    if not isinstance(raw, list):
        return ()
    try:
        return tuple(ImageReference.from_dict(item) for item in raw)
    except (KeyError, TypeError, AttributeError):
        return ()
