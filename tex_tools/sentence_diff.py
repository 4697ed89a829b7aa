from __future__ import annotations

import difflib
import re
from dataclasses import dataclass
from itertools import zip_longest
from typing import Any, Iterable, Literal, Sequence

from config.segmenter_config import SegmenterConfig
from tex_tools.latex_text import strip_comment_lines
from tex_tools.sentence_splitter import segment

DiffKind = Literal["unchanged", "added", "removed"]

_DIFF_KINDS: frozenset[str] = frozenset({"unchanged", "added", "removed"})


@dataclass(frozen=True, slots=True)
class DiffOp:
    kind: DiffKind
    text: str


@dataclass(frozen=True, slots=True)
class WordDiffOp:
    tag: str
    original_text: str
    edited_text: str


@dataclass(frozen=True, slots=True)
class DiffSummary:
    unchanged: int
    added: int
    removed: int

    @property
    def has_changes(self) -> bool:
        return self.added > 0 or self.removed > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "unchanged": self.unchanged,
            "added": self.added,
            "removed": self.removed,
            "has_changes": self.has_changes,
        }


# ----- LCS alignment -----

def _lcs_table(original: Sequence[str], revised: Sequence[str]) -> list[list[int]]:
    n, m = len(original), len(revised)
    table = [[0] * (m + 1) for _ in range(n + 1)]
    for i in range(1, n + 1):
        row, above = table[i], table[i - 1]
        for j in range(1, m + 1):
            if original[i - 1] == revised[j - 1]:
                row[j] = above[j - 1] + 1
            else:
                row[j] = max(above[j], row[j - 1])
    return table


def _matched_pairs(original: Sequence[str], revised: Sequence[str]) -> list[tuple[int, int]]:
    table = _lcs_table(original, revised)
    pairs: list[tuple[int, int]] = []

    # Walk back from the bottom-right corner: diagonal, then deletion, then insertion.
    i, j = len(original), len(revised)
    while i > 0 and j > 0:
        if original[i - 1] == revised[j - 1]:
            pairs.append((i - 1, j - 1))
            i -= 1
            j -= 1
        elif table[i - 1][j] >= table[i][j - 1]:
            i -= 1
        else:
            j -= 1

    pairs.reverse()
    return pairs


def align(original: Sequence[str], revised: Sequence[str]) -> list[DiffOp]:
    """
    Sentence-level edit script between two sentence sequences.

    Sentences are compared by exact string equality. Between two matched
    sentences, every removed sentence is emitted before the added sentences
    that take its place, so the ops read top-to-bottom as a merged document.
    """
    ops: list[DiffOp] = []
    i = j = 0
    for oi, rj in _matched_pairs(original, revised):
        ops.extend(DiffOp("removed", s) for s in original[i:oi])
        ops.extend(DiffOp("added", s) for s in revised[j:rj])
        ops.append(DiffOp("unchanged", original[oi]))
        i, j = oi + 1, rj + 1

    ops.extend(DiffOp("removed", s) for s in original[i:])
    ops.extend(DiffOp("added", s) for s in revised[j:])
    return ops


def diff_texts(
    original_text: str,
    revised_text: str,
    config: SegmenterConfig | None = None,
) -> list[DiffOp]:
    cfg = config or SegmenterConfig()
    if cfg.strip_comments:
        original_text = strip_comment_lines(original_text)
        revised_text = strip_comment_lines(revised_text)
    return align(segment(original_text, cfg), segment(revised_text, cfg))


# ----- Edit script helpers -----

def rebuild_original(ops: Iterable[DiffOp]) -> str:
    return "".join(op.text for op in ops if op.kind != "added")


def rebuild_revised(ops: Iterable[DiffOp]) -> str:
    return "".join(op.text for op in ops if op.kind != "removed")


def summarize(ops: Iterable[DiffOp]) -> DiffSummary:
    counts = {"unchanged": 0, "added": 0, "removed": 0}
    for op in ops:
        counts[op.kind] += 1
    return DiffSummary(**counts)


def pair_changes(ops: Sequence[DiffOp]) -> list[tuple[str | None, str | None]]:
    """Pair each changed region's removed sentences with its added ones, in order."""
    pairs: list[tuple[str | None, str | None]] = []
    removed: list[str] = []
    added: list[str] = []

    def _flush() -> None:
        pairs.extend(zip_longest(removed, added))
        removed.clear()
        added.clear()

    for op in ops:
        if op.kind == "removed":
            removed.append(op.text)
        elif op.kind == "added":
            added.append(op.text)
        else:
            _flush()
    _flush()
    return pairs


def to_records(ops: Iterable[DiffOp]) -> list[dict[str, str]]:
    return [{"type": op.kind, "text": op.text} for op in ops]


def from_records(records: Iterable[dict[str, Any]]) -> list[DiffOp]:
    ops: list[DiffOp] = []
    for idx, record in enumerate(records):
        kind = record.get("type")
        text = record.get("text")
        if kind not in _DIFF_KINDS:
            raise ValueError(f"Record {idx} has unknown type: {kind!r}")
        if not isinstance(text, str):
            raise ValueError(f"Record {idx} text must be a string")
        ops.append(DiffOp(kind=kind, text=text))
    return ops


# ----- Word-level diff -----

def _tokens_with_trailing_space(text: str) -> list[str]:
    return re.findall(r"\S+\s*", text or "")


def diff_words(original: str, edited: str) -> list[WordDiffOp]:
    original_tokens = _tokens_with_trailing_space(original)
    edited_tokens = _tokens_with_trailing_space(edited)

    matcher = difflib.SequenceMatcher(None, original_tokens, edited_tokens, autojunk=False)
    ops: list[WordDiffOp] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        ops.append(
            WordDiffOp(
                tag=tag,
                original_text="".join(original_tokens[i1:i2]),
                edited_text="".join(edited_tokens[j1:j2]),
            )
        )
    return ops
