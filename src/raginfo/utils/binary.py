"""Binary content detection for text extraction."""

from pathlib import Path
from typing import Optional

# Formats that need a dedicated parser; raw bytes are never treated as text
BINARY_EXTENSIONS = {
    # Documents
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".odt", ".ods",
    # Images
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".tiff",
    # Archives
    ".zip", ".tar", ".gz", ".rar", ".7z", ".bz2", ".xz",
    # Media
    ".mp3", ".mp4", ".avi", ".mov", ".wav", ".flac", ".mkv", ".webm",
    # Other
    ".exe", ".dll", ".so", ".bin", ".db", ".sqlite", ".pyc",
}

_TEXT_BYTES = set(range(32, 127)) | {9, 10, 13}


def is_binary_extension(path: str | Path) -> bool:
    """Check if file extension indicates binary content."""
    return Path(path).suffix.lower() in BINARY_EXTENSIONS


def is_binary_content(content: bytes, sample_size: int = 8192) -> bool:
    """Guess whether content is binary from a sample of its bytes.

    A null byte, or more than 30% bytes outside printable ASCII and common
    whitespace, marks content as binary. Valid UTF-8 is always text.
    """
    if not content:
        return False

    sample = content[:sample_size]
    if b"\x00" in sample:
        return True

    try:
        content.decode("utf-8")
        return False
    except UnicodeDecodeError:
        pass

    non_text = sum(1 for byte in sample if byte not in _TEXT_BYTES)
    return (non_text / len(sample)) > 0.30


def extract_text(name: str, content: bytes) -> Optional[str]:
    """Return content decoded as text, or None if it is binary."""
    if is_binary_extension(name) or is_binary_content(content):
        return None
    return content.decode("utf-8", errors="replace")
