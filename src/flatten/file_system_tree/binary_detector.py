"""Binary file detection utilities."""

from pathlib import Path

from flatten.types import PathType

# Extensions that are binary with high confidence
BINARY_EXTENSIONS = frozenset(
    {
        # Executables and objects
        ".exe", ".dll", ".so", ".dylib", ".o", ".a", ".class", ".pyc", ".bin", ".wasm",
        # Images
        ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff", ".psd", ".ico", ".webp",
        # Video and audio
        ".mp4", ".mkv", ".avi", ".mov", ".wmv", ".mp3", ".aac", ".wav", ".flac", ".ogg",
        # Archives
        ".zip", ".rar", ".7z", ".tar", ".gz", ".bz2", ".xz", ".iso", ".jar",
        # Documents and databases
        ".pdf", ".sqlite", ".sqlite3", ".db",
    }
)  # fmt: skip

# Extensions that are text with high confidence
TEXT_EXTENSIONS = frozenset(
    {
        # Source code
        ".py", ".go", ".rs", ".c", ".h", ".cpp", ".hpp", ".java", ".kt", ".cs", ".rb",
        ".php", ".sh", ".js", ".jsx", ".ts", ".tsx", ".swift", ".scala",
        # Documents and configuration
        ".txt", ".md", ".rst", ".csv", ".tsv", ".log", ".ini", ".cfg", ".conf",
        ".yaml", ".yml", ".toml", ".json", ".mod", ".sum",
        # Markup
        ".html", ".htm", ".css", ".xml", ".svg",
    }
)  # fmt: skip

SNIFF_SIZE = 8192


def looks_binary(chunk: bytes) -> bool:
    """Classify a leading chunk of file content as binary or text.

    Null bytes mean binary. Otherwise more than 1% control characters (other than tab,
    newline and carriage return) means binary.

    Args:
        chunk: The first bytes of a file.

    Returns:
        True if the content looks binary.

    Example:
        >>> looks_binary(b"hello\\nworld\\n")
        False
        >>> looks_binary(b"PK\\x03\\x04\\x00\\x00")
        True
        >>> looks_binary(b"")
        False
    """
    if not chunk:
        return False
    if b"\0" in chunk:
        return True

    control_chars = sum(1 for byte in chunk if byte < 32 and byte not in (9, 10, 13))
    return control_chars / len(chunk) > 0.01


def is_binary_file(file_path: PathType, chunk_size: int = SNIFF_SIZE) -> bool:
    """Detect if a file is binary using extension hints and content analysis.

    Known extensions are classified without touching the file; anything else is
    sniffed with looks_binary() over its first chunk_size bytes.

    Args:
        file_path: Path to the file to analyze.
        chunk_size: Number of bytes to read for content analysis.

    Returns:
        True if the file appears to be binary, False if it appears to be text.

    Raises:
        OSError: If the file cannot be read.

    Example:
        >>> is_binary_file("image.png")
        True
        >>> is_binary_file("README.md")
        False
    """
    extension = Path(file_path).suffix.lower()
    if extension in BINARY_EXTENSIONS:
        return True
    if extension in TEXT_EXTENSIONS:
        return False

    with open(file_path, "rb") as file:
        return looks_binary(file.read(chunk_size))
