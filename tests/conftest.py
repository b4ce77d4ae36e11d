"""Shared test fixtures."""
import fitz
import pytest

from bill_split.config import Settings
from bill_split.demo import DEMO_BILL_DATA, DEMO_BILL_TEXT, demo_bill as build_demo_bill


@pytest.fixture
def settings(tmp_path):
    """Test settings with the history file under a temporary directory."""
    return Settings(history_path=str(tmp_path / "history.json"))


@pytest.fixture
def demo_bill():
    return build_demo_bill()


@pytest.fixture
def demo_bill_data():
    return DEMO_BILL_DATA


@pytest.fixture
def demo_text():
    return DEMO_BILL_TEXT


@pytest.fixture
def make_pdf():
    """Build an in-memory PDF with one line of text per entry in *lines*."""

    def _make(lines: list[str]) -> bytes:
        doc = fitz.open()
        page = doc.new_page()
        y = 72
        for line in lines:
            page.insert_text((72, y), line)
            y += 16
        data = doc.tobytes()
        doc.close()
        return data

    return _make
