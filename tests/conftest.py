import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import portfolio_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from portfolio_toolkit.core.models import ImageReference, PortfolioDocument


# Common test fixtures
@pytest.fixture
def valid_image_id():
    """Return a 24-character store id."""
    return "65f0c2a9e4b0a1b2c3d4e5f6"


@pytest.fixture
def sample_bitmap():
    """Create a simple landscape test bitmap (2:1)."""
    return Image.new("RGB", (200, 100), color="steelblue")


@pytest.fixture
def sample_image(tmp_path: Path, sample_bitmap):
    """Write the sample bitmap to disk."""
    img_path = tmp_path / "sample.png"
    sample_bitmap.save(img_path)
    return img_path


@pytest.fixture
def sample_document(valid_image_id):
    """Two sections, one image token each."""
    return PortfolioDocument(
        student_name="Ada Lovelace",
        design_pattern_label="General",
        compiled_body=(
            "# Ada's Portfolio\n"
            "## Math\n"
            "Great progress with fractions.\n"
            "[IMAGE: fractions worksheet]\n"
            "## Art\n"
            "Painted a landscape.\n"
            "[IMAGE]\n"
        ),
        images=(
            ImageReference(valid_image_id, "fractions worksheet"),
            ImageReference("fallback-000000000000001", "landscape painting"),
        ),
    )
