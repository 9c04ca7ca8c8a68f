"""
File reading utilities with encoding and binary detection.
"""

import codecs
from pathlib import Path
from typing import Tuple

BINARY_SAMPLE_SIZE = 8192
ASCII_THRESHOLD = 0.85

BINARY_EXTENSIONS = {
    ".exe", ".dll", ".so", ".dylib", ".a", ".o", ".obj", ".bin",
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".tiff",
    ".mp3", ".mp4", ".avi", ".mkv", ".mov", ".wav", ".flac", ".webm",
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
    ".zip", ".tar", ".gz", ".bz2", ".xz", ".7z", ".rar",
    ".wasm", ".pyc", ".pyo", ".class", ".jar",
    ".ttf", ".otf", ".woff", ".woff2", ".eot",
    ".db", ".sqlite", ".sqlite3",
}

ENCODINGS = ["utf-8", "cp1252"]
FALLBACK_ENCODING = "latin-1"  # Decodes any byte sequence


def has_binary_extension(file_path: Path) -> bool:
    """Check if the file extension indicates binary content."""
    return file_path.suffix.lower() in BINARY_EXTENSIONS


def is_binary_content(data: bytes) -> bool:
    """
    Detect binary content from the start of a file.

    A null byte, or fewer than 85% ASCII bytes in the first 8 KiB, marks
    the content as binary. Empty content is text.
    """
    sample = data[:BINARY_SAMPLE_SIZE]
    if not sample:
        return False

    if b"\x00" in sample:
        return True

    ascii_count = sum(1 for byte in sample if byte < 128)
    return ascii_count / len(sample) < ASCII_THRESHOLD


def decode_with_fallback(data: bytes) -> Tuple[str, str]:
    """
    Decode bytes trying each supported encoding in turn.

    A UTF-8 byte order mark selects utf-8-sig. Bytes that are neither
    UTF-8 nor cp1252 fall back to latin-1, which never fails.

    Returns:
        Tuple of (content, encoding)
    """
    encodings = ENCODINGS
    if data.startswith(codecs.BOM_UTF8):
        encodings = ["utf-8-sig"] + ENCODINGS

    for encoding in encodings:
        try:
            return data.decode(encoding), encoding
        except UnicodeDecodeError:
            continue
    return data.decode(FALLBACK_ENCODING), FALLBACK_ENCODING
