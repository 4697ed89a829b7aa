from __future__ import annotations

from typing import Any, Sequence

from tex_tools.latex_text import plain_text
from tex_tools.sentence_diff import DiffOp, diff_words, pair_changes
from utils.terminal_ui import Color, colorize

_PREFIX = {"unchanged": "  ", "removed": "- ", "added": "+ "}
_COLOR = {"unchanged": Color.DIM, "removed": Color.RED, "added": Color.GREEN}


def _display(text: str, plain: bool) -> str:
    return plain_text(text) if plain else " ".join(text.split())


def _word_diff_line(original: str, edited: str, color: bool) -> str:
    parts: list[str] = []
    for op in diff_words(original, edited):
        if op.tag == "equal":
            parts.append(op.original_text)
            continue
        if op.original_text:
            parts.append(colorize(f"[-{op.original_text.strip()}-]", Color.RED, color) + " ")
        if op.edited_text:
            parts.append(colorize(f"{{+{op.edited_text.strip()}+}}", Color.GREEN, color) + " ")
    return "~ " + " ".join("".join(parts).split())


def format_diff_lines(
    ops: Sequence[DiffOp],
    *,
    color: bool = False,
    plain: bool = False,
    words: bool = False,
) -> list[str]:
    if not words:
        return [
            colorize(_PREFIX[op.kind] + _display(op.text, plain), _COLOR[op.kind], color)
            for op in ops
        ]

    lines: list[str] = []
    pending: list[DiffOp] = []

    def _flush() -> None:
        for removed, added in pair_changes(pending):
            if removed is not None and added is not None:
                lines.append(_word_diff_line(removed, added, color))
            elif removed is not None:
                lines.append(colorize("- " + _display(removed, plain), Color.RED, color))
            elif added is not None:
                lines.append(colorize("+ " + _display(added, plain), Color.GREEN, color))
        pending.clear()

    for op in ops:
        if op.kind == "unchanged":
            _flush()
            lines.append(colorize("  " + _display(op.text, plain), Color.DIM, color))
        else:
            pending.append(op)
    _flush()
    return lines


def print_diff(ops: Sequence[DiffOp], **kwargs: Any) -> None:
    for line in format_diff_lines(ops, **kwargs):
        print(line)


def print_summary(summary: dict[str, Any]) -> None:
    print(
        f"Sentences: {summary['unchanged']} unchanged, "
        f"{summary['added']} added, {summary['removed']} removed"
    )


def print_diff_result(result: dict[str, Any]) -> None:
    print_summary(result["summary"])
    if result.get("json_out"):
        print(f"JSON: {result['json_out']}")


def print_rewrite_result(result: dict[str, Any]) -> None:
    if result.get("rewritten"):
        print("Section written successfully!")
    else:
        print("No API key configured; section left unchanged.")
    print(f"File: {result['file']}")
    print(f"Backup: {result['backup']}")
    print(f"Diff: {result['diff_json']}")
    print_summary(result["summary"])


def print_prompt(system: str, user: str) -> None:
    print("\n=== SYSTEM PROMPT ===")
    print(system)
    print("\n=== USER CONTENT ===")
    print(user)
    print("\n=====================\n")
