"""Code fence language names accepted by Notion."""

from __future__ import annotations

import re

PLAIN_TEXT = "plain text"

NOTION_LANGUAGES: frozenset[str] = frozenset({
    "abap", "arduino", "bash", "basic", "c", "clojure", "coffeescript",
    "c++", "c#", "css", "dart", "diff", "docker", "elixir", "elm",
    "erlang", "flow", "fortran", "f#", "gherkin", "glsl", "go", "graphql",
    "groovy", "haskell", "html", "java", "javascript", "json", "julia",
    "kotlin", "latex", "less", "lisp", "livescript", "lua", "makefile",
    "markdown", "markup", "matlab", "mermaid", "nix", "objective-c",
    "ocaml", "pascal", "perl", "php", "plain text", "powershell",
    "prolog", "protobuf", "python", "r", "reason", "ruby", "rust",
    "sass", "scala", "scheme", "scss", "shell", "sql", "swift",
    "typescript", "vb.net", "verilog", "vhdl", "visual basic",
    "webassembly", "xml", "yaml", "java/c/c++/c#",
})

LANGUAGE_ALIASES: dict[str, str] = {
    "py": "python",
    "js": "javascript",
    "ts": "typescript",
    "sh": "shell",
    "zsh": "shell",
    "console": "shell",
    "rb": "ruby",
    "rs": "rust",
    "yml": "yaml",
    "md": "markdown",
    "cs": "c#",
    "csharp": "c#",
    "cpp": "c++",
    "objc": "objective-c",
    "dockerfile": "docker",
    "make": "makefile",
    "tex": "latex",
    "htm": "html",
    "jsx": "javascript",
    "tsx": "typescript",
    "jsonc": "json",
    "vb": "visual basic",
    "fs": "f#",
    "fsharp": "f#",
    "golang": "go",
    "hs": "haskell",
    "kt": "kotlin",
    "pl": "perl",
    "ps1": "powershell",
    "wasm": "webassembly",
    "text": PLAIN_TEXT,
    "txt": PLAIN_TEXT,
    "plaintext": PLAIN_TEXT,
}


def normalize_language(info: str | None) -> str:
    """Map a code fence info string to a Notion language name.

    Only the first word of *info* counts.  Unknown or missing languages
    map to ``"plain text"``.

    >>> normalize_language("go")
    'go'
    >>> normalize_language("Python3 title=x.py")
    'python'
    >>> normalize_language("")
    'plain text'
    """
    words = (info or "").strip().lower().split()
    if not words:
        return PLAIN_TEXT
    lang = words[0]
    for candidate in (lang, re.sub(r"\d+$", "", lang)):
        if candidate in NOTION_LANGUAGES:
            return candidate
        if candidate in LANGUAGE_ALIASES:
            return LANGUAGE_ALIASES[candidate]
    return PLAIN_TEXT
