"""Canonical language tags for fenced code blocks."""

from typing import Optional

PLAIN_TEXT = "plain text"

# Languages accepted by the document API for code blocks
CANONICAL_LANGUAGES = frozenset(
    {
        "abap",
        "arduino",
        "bash",
        "basic",
        "c",
        "clojure",
        "coffeescript",
        "cpp",
        "csharp",
        "css",
        "dart",
        "diff",
        "docker",
        "elixir",
        "elm",
        "erlang",
        "flow",
        "fortran",
        "fsharp",
        "gherkin",
        "glsl",
        "go",
        "graphql",
        "groovy",
        "haskell",
        "html",
        "java",
        "javascript",
        "json",
        "julia",
        "kotlin",
        "latex",
        "less",
        "lisp",
        "livescript",
        "lua",
        "makefile",
        "markdown",
        "markup",
        "matlab",
        "mermaid",
        "nix",
        "objective-c",
        "ocaml",
        "pascal",
        "perl",
        "php",
        PLAIN_TEXT,
        "powershell",
        "prolog",
        "protobuf",
        "python",
        "r",
        "reason",
        "ruby",
        "rust",
        "sass",
        "scala",
        "scheme",
        "scss",
        "shell",
        "sql",
        "swift",
        "typescript",
        "vb.net",
        "verilog",
        "vhdl",
        "visual basic",
        "webassembly",
        "xml",
        "yaml",
    }
)

LANGUAGE_ALIASES: dict[str, str] = {
    "js": "javascript",
    "ts": "typescript",
    "py": "python",
    "rb": "ruby",
    "sh": "bash",
    "yml": "yaml",
    "md": "markdown",
    "c++": "cpp",
    "cs": "csharp",
    "c#": "csharp",
    "golang": "go",
    "kt": "kotlin",
    "rs": "rust",
    "ps1": "powershell",
    "dockerfile": "docker",
    "htm": "html",
    "tex": "latex",
    "objc": "objective-c",
    "text": PLAIN_TEXT,
    "txt": PLAIN_TEXT,
}


def normalize_language(tag: Optional[str], aliases: Optional[dict[str, str]] = None) -> str:
    """
    Map a fence language token to a canonical language tag.

    Args:
        tag: Raw token from the opening fence line
        aliases: Extra aliases, consulted before the built-in table

    Returns:
        A member of CANONICAL_LANGUAGES, PLAIN_TEXT when unknown
    """
    if not tag:
        return PLAIN_TEXT

    normalized = tag.strip().lower()
    if aliases and normalized in aliases:
        mapped = aliases[normalized].strip().lower()
    else:
        mapped = LANGUAGE_ALIASES.get(normalized, normalized)

    return mapped if mapped in CANONICAL_LANGUAGES else PLAIN_TEXT
