"""Binary file detection utilities."""

from pathlib import Path

from llmview.types import PathType

# Extensions that are binary with high confidence. Media, spreadsheet and archive
# formats are also covered by dedicated render rules, which run first.
BINARY_EXTENSIONS = frozenset(
    {
        # Executables and object code
        ".exe",
        ".dll",
        ".so",
        ".dylib",
        ".o",
        ".a",
        ".class",
        ".jar",
        ".pyc",
        ".wasm",
        ".bin",
        # Images and fonts
        ".bmp",
        ".tiff",
        ".psd",
        ".woff",
        ".woff2",
        ".ttf",
        ".otf",
        # Audio and video
        ".mp3",
        ".wav",
        ".flac",
        ".ogg",
        ".mkv",
        ".avi",
        ".mov",
        ".webm",
        # Archives
        ".rar",
        ".7z",
        ".tar",
        ".gz",
        ".bz2",
        ".xz",
        ".iso",
        # Databases
        ".sqlite",
        ".sqlite3",
        ".db",
    }
)

# Extensions that are text with high confidence; content is not sniffed.
TEXT_EXTENSIONS = frozenset(
    {
        ".py",
        ".js",
        ".jsx",
        ".ts",
        ".tsx",
        ".json",
        ".html",
        ".css",
        ".scss",
        ".xml",
        ".svg",
        ".c",
        ".h",
        ".cpp",
        ".hpp",
        ".java",
        ".kt",
        ".go",
        ".rs",
        ".rb",
        ".php",
        ".sh",
        ".sql",
        ".md",
        ".txt",
        ".csv",
        ".tsv",
        ".yaml",
        ".yml",
        ".toml",
        ".ini",
        ".cfg",
    }
)

# Share of control characters (other than tab, newline, carriage return and form
# feed) above which a decodable sample is still treated as binary.
CONTROL_CHARACTER_RATIO = 0.01


def looks_binary(sample: bytes) -> bool:
    """Classify a leading sample of a file's bytes.

    Example:
        >>> looks_binary(b"from flask import Flask\\n")
        False
        >>> looks_binary(b"\\x00\\x01\\x02")
        True
        >>> looks_binary(b"")
        False
    """
    if not sample:
        return False
    if b"\0" in sample:
        return True

    control_chars = sum(1 for byte in sample if byte < 32 and byte not in (9, 10, 12, 13))
    return control_chars / len(sample) > CONTROL_CHARACTER_RATIO


def is_binary_file(file_path: PathType, chunk_size: int = 8192) -> bool:
    """Detect if a file is binary using extension hints and content analysis.

    Known extensions are classified without reading the file. Anything else is
    decided by looks_binary() on the first ``chunk_size`` bytes.

    Raises:
        OSError: If the file cannot be read.

    Example:
        >>> is_binary_file("image.so")  # doctest: +SKIP
        True
    """
    path_obj = Path(file_path)
    extension = path_obj.suffix.lower()

    if extension in BINARY_EXTENSIONS:
        return True
    if extension in TEXT_EXTENSIONS:
        return False

    with open(path_obj, "rb") as file:
        return looks_binary(file.read(chunk_size))
