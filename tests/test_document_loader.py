import os
import pytest
from unittest.mock import patch

from data_acquisition.document_loader import DocumentLoader, DocumentReadError

# --- Test Data and Fixtures ---

ARCHITECTURE_TEXT = "This chapter covers nodes, topics, services, and actions."

@pytest.fixture
def docs_root(tmp_path):
    """A small documentation tree with one chapter per supported extension."""
    root = tmp_path / "docs"
    chapter_dir = root / "ros2-robotics"
    chapter_dir.mkdir(parents=True)
    (chapter_dir / "intro-to-ros2-architecture.md").write_text(ARCHITECTURE_TEXT, encoding="utf-8")
    (chapter_dir / "humanoid-structure-urdf.mdx").write_text("URDF links and joints", encoding="utf-8")
    (chapter_dir / "empty-chapter.md").write_text("", encoding="utf-8")
    return root

@pytest.fixture
def loader(docs_root):
    return DocumentLoader(str(docs_root))

# --- Tests ---

def test_load_existing_chapter(loader, docs_root):
    document = loader.load("ros2-robotics/intro-to-ros2-architecture")

    assert document.exists is True
    assert document.raw_text == ARCHITECTURE_TEXT
    assert document.length == len(ARCHITECTURE_TEXT)
    assert document.path == os.path.join(str(docs_root), "ros2-robotics", "intro-to-ros2-architecture.md")

def test_extension_fallback(loader):
    """Ids without a suffix try .md first, then .mdx."""
    document = loader.load("ros2-robotics/humanoid-structure-urdf")

    assert document.exists is True
    assert document.path.endswith("humanoid-structure-urdf.mdx")

def test_md_is_preferred_over_mdx(docs_root):
    (docs_root / "ros2-robotics" / "intro-to-ros2-architecture.mdx").write_text("other", encoding="utf-8")
    document = DocumentLoader(str(docs_root)).load("ros2-robotics/intro-to-ros2-architecture")

    assert document.raw_text == ARCHITECTURE_TEXT

def test_explicit_suffix_is_used_as_is(loader):
    document = loader.load("ros2-robotics/humanoid-structure-urdf.mdx")
    assert document.exists is True

    missing = loader.load("ros2-robotics/humanoid-structure-urdf.md")
    assert missing.exists is False

def test_missing_chapter_is_not_an_error(loader):
    document = loader.load("ros2-robotics/bridging-ai-agents-rclpy")

    assert document.exists is False
    assert document.raw_text == ""
    assert document.path is None
    assert document.is_empty is True

def test_empty_chapter_exists(loader):
    document = loader.load("ros2-robotics/empty-chapter")

    assert document.exists is True
    assert document.is_empty is True

def test_garbled_bytes_are_read_as_text(docs_root):
    (docs_root / "garbled.md").write_bytes(b"node \xff\xfe topic")
    document = DocumentLoader(str(docs_root)).load("garbled")

    assert document.exists is True
    assert "node" in document.raw_text
    assert "topic" in document.raw_text

def test_directory_in_place_of_chapter_is_fatal(docs_root):
    (docs_root / "broken.md").mkdir()

    with pytest.raises(DocumentReadError, match="Could not read"):
        DocumentLoader(str(docs_root)).load("broken")

def test_unreadable_chapter_is_fatal(loader):
    with patch("builtins.open", side_effect=PermissionError("Permission denied")):
        with pytest.raises(DocumentReadError, match="Permission denied"):
            loader.load("ros2-robotics/intro-to-ros2-architecture")

def test_id_outside_docs_root_is_rejected(loader):
    with pytest.raises(DocumentReadError, match="outside"):
        loader.load("../secrets")

def test_each_load_reads_fresh(loader, docs_root):
    """Documents are not cached between calls."""
    chapter = docs_root / "ros2-robotics" / "intro-to-ros2-architecture.md"
    first = loader.load("ros2-robotics/intro-to-ros2-architecture")
    chapter.write_text("rewritten", encoding="utf-8")
    second = loader.load("ros2-robotics/intro-to-ros2-architecture")

    assert first.raw_text == ARCHITECTURE_TEXT
    assert second.raw_text == "rewritten"

def test_dotted_id_still_gets_an_extension(docs_root):
    """A dot inside the id is part of the name, not a file suffix."""
    (docs_root / "python3.10-setup.md").write_text("virtual environments", encoding="utf-8")
    loader = DocumentLoader(str(docs_root))

    document = loader.load("python3.10-setup")

    assert document.exists is True
    assert document.path.endswith("python3.10-setup.md")
