from __future__ import annotations

import re
from typing import Iterable, List

from config.segmenter_config import DEFAULT_ABBREVIATIONS, SegmenterConfig

# Terminal punctuation, any closing quotes/brackets, then the whitespace
# that separates it from the next sentence. A match only starts at the
# beginning of a punctuation run, so long runs are scanned once.
_SENT_BOUNDARY = re.compile(r"(?<![.!?])([.!?]+)[\"')\]}]*\s+")
_LEADING_NON_LETTERS = re.compile(r"^[^A-Za-z]+")
_CLOSERS = "\"')]}"


def _word_start(text: str, end: int) -> int:
    start = end
    while start > 0 and not text[start - 1].isspace():
        start -= 1
    return start


def _word_before(text: str, end: int) -> str:
    return _LEADING_NON_LETTERS.sub("", text[_word_start(text, end):end])


def _is_initial(text: str, end: int, follow: int) -> bool:
    """
    A single capital before the period counts as a name initial only when
    a capitalised word follows and the initial opens a sentence or comes
    after another capitalised word ("J. Smith wrote", "John F. Kennedy").

    "plan A. It won." and "So did I. Then" still split, while
    "by J. Smith" splits too: the guard cannot tell a trailing label from
    an initial after a lower-case word.
    """
    if follow >= len(text) or not text[follow].isupper():
        return False

    prev_end = _word_start(text, end)
    while prev_end > 0 and text[prev_end - 1].isspace():
        prev_end -= 1
    if prev_end == 0:
        return True

    prev = text[_word_start(text, prev_end):prev_end]
    if prev.rstrip(_CLOSERS)[-1:] in (".", "!", "?"):
        return True
    return _LEADING_NON_LETTERS.sub("", prev)[:1].isupper()


def _is_abbreviation(text: str, end: int, follow: int, abbreviations: frozenset[str]) -> bool:
    word = _word_before(text, end)
    if not word:
        return False
    if len(word) == 1 and word.isupper():
        return _is_initial(text, end, follow)
    return word.lower() in abbreviations


def segment(text: str, config: SegmenterConfig | None = None) -> List[str]:
    """
    Split text into sentences without dropping a single character.

    Each sentence keeps its trailing whitespace (newlines and blank lines
    included), so ``"".join(segment(text)) == text`` whenever the text is
    not blank. Blank input gives an empty list.
    """
    if not text or not text.strip():
        return []

    abbreviations = config.abbreviations if config is not None else DEFAULT_ABBREVIATIONS

    sentences: List[str] = []
    start = 0
    for match in _SENT_BOUNDARY.finditer(text):
        if match.group(1) == "." and _is_abbreviation(text, match.start(), match.end(), abbreviations):
            continue
        sentences.append(text[start:match.end()])
        start = match.end()

    if start < len(text):
        sentences.append(text[start:])
    return sentences


def split_paragraphs(paragraphs: Iterable[str], config: SegmenterConfig | None = None) -> List[str]:
    sentences: List[str] = []
    for p in paragraphs:
        sentences.extend(segment(p, config))
    return sentences
