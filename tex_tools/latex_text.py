from __future__ import annotations

import re

_ENVIRONMENT = re.compile(r"\\begin\{([^}]+)\}.*?\\end\{\1\}", re.DOTALL)
_FORMATTING_CMD = re.compile(r"\\(?:textbf|textit|emph|underline|texttt|textsc)\{([^}]*)\}")
_CMD_WITH_ARG = re.compile(r"\\[a-zA-Z]+\*?(?:\[[^\]]*\])?\{[^}]*\}")
_BARE_CMD = re.compile(r"\\[a-zA-Z]+\*?")
_SPECIAL_CHARS = re.compile(r"[\\$%_{}~&#@^]")
_WHITESPACE = re.compile(r"\s+")


def strip_comment_lines(text: str) -> str:
    """Drop full-line ``%`` comments; every other line is kept as-is."""
    lines = (text or "").splitlines(keepends=True)
    return "".join(line for line in lines if not line.lstrip().startswith("%"))


def plain_text(text: str) -> str:
    """
    Readable, markup-free rendering of a LaTeX fragment for display.

    Environments, commands with arguments and math delimiters are removed;
    the argument of simple formatting commands (``\\emph{...}`` and friends)
    is kept. Whitespace is collapsed. The result is lossy and is not used
    for alignment.
    """
    result = _ENVIRONMENT.sub("", text or "")
    result = _FORMATTING_CMD.sub(r"\1", result)
    result = _CMD_WITH_ARG.sub("", result)
    result = _BARE_CMD.sub("", result)
    result = _SPECIAL_CHARS.sub("", result)
    return _WHITESPACE.sub(" ", result).strip()
