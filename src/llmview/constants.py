"""Defaults shared by the scanner, the renderers and the command line."""

# Always excluded at root scope, before any user ignore file is consulted.
BASE_IGNORE_PATTERNS = (
    ".git",
    ".DS_Store",
    "__pycache__/",
    "node_modules/",
)

IGNORE_FILE_NAME = ".gitignore"

# Upper bound on concurrently issued filesystem operations.
MAX_OPEN_FILES = 64

MAX_FILE_SIZE = "250KiB"
CSV_PREVIEW_LINES = 10
CHARS_PER_TOKEN_ESTIMATE = 4

LINE_NUMBER_WIDTH = 6

LANG_MAP = {
    ".sh": "bash",
    ".bash": "bash",
    ".zsh": "bash",
    ".py": "py",
    ".js": "js",
    ".jsx": "jsx",
    ".ts": "ts",
    ".tsx": "tsx",
    ".md": "md",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".rs": "rust",
    ".rb": "ruby",
    ".kt": "kotlin",
    ".h": "c",
    ".hpp": "cpp",
    ".cc": "cpp",
    ".cs": "csharp",
    ".ps1": "powershell",
    ".dockerfile": "dockerfile",
}
