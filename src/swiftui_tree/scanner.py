"""
String- and comment-aware scanning primitives.

Everything here takes the text and an offset explicitly and returns indices,
so the parser can balance delimiters without ever counting a brace that sits
inside a string literal or a comment.
"""
from __future__ import annotations
from typing import List, Optional, Tuple

PAIRS = {"{": "}", "(": ")", "[": "]"}
TRIPLE_QUOTE = '"""'


def skip_literal(text: str, pos: int) -> int:
    """Return the index just past a string literal or comment starting at pos, else pos."""
    n = len(text)
    if pos >= n:
        return pos
    ch = text[pos]
    if ch == '"':
        if text.startswith(TRIPLE_QUOTE, pos):
            return _skip_triple_quoted(text, pos)
        return _skip_string(text, pos)
    if ch == "/" and pos + 1 < n:
        nxt = text[pos + 1]
        if nxt == "/":
            end = text.find("\n", pos)
            # the newline itself is structural for the sibling splitter
            return n if end == -1 else end
        if nxt == "*":
            end = text.find("*/", pos + 2)
            return n if end == -1 else end + 2
    return pos


def _skip_string(text: str, pos: int) -> int:
    i = pos + 1
    n = len(text)
    while i < n:
        c = text[i]
        if c == "\\":
            i += 2
            continue
        if c == '"':
            return i + 1
        if c == "\n":
            # unterminated single-line string stops at its line
            return i
        i += 1
    return n


def _skip_triple_quoted(text: str, pos: int) -> int:
    i = pos + 3
    n = len(text)
    while i < n:
        if text[i] == "\\":
            i += 2
            continue
        if text.startswith(TRIPLE_QUOTE, i):
            return i + 3
        i += 1
    return n


def skip_trivia(text: str, pos: int) -> int:
    """Skip whitespace and comments."""
    n = len(text)
    while pos < n:
        if text[pos].isspace():
            pos += 1
            continue
        if text.startswith("//", pos) or text.startswith("/*", pos):
            pos = skip_literal(text, pos)
            continue
        break
    return pos


def find_matching_delimiter(text: str, open_index: int) -> Optional[int]:
    """
    Index of the delimiter closing the one at open_index, or None if the text
    ends before balance is restored. Only the opener's own pair is counted.
    """
    if open_index < 0 or open_index >= len(text):
        return None
    open_char = text[open_index]
    close_char = PAIRS.get(open_char)
    if close_char is None:
        return None
    depth = 0
    i = open_index
    n = len(text)
    while i < n:
        skipped = skip_literal(text, i)
        if skipped != i:
            i = skipped
            continue
        ch = text[i]
        if ch == open_char:
            depth += 1
        elif ch == close_char:
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return None


def read_balanced(text: str, open_index: int) -> Optional[Tuple[str, int]]:
    """Inner text and closing index of the balanced span opened at open_index."""
    end = find_matching_delimiter(text, open_index)
    if end is None:
        return None
    return text[open_index + 1:end], end


def is_word_at(text: str, index: int, word: str) -> bool:
    if not text.startswith(word, index):
        return False
    before = text[index - 1] if index > 0 else ""
    after_pos = index + len(word)
    after = text[after_pos] if after_pos < len(text) else ""
    return not _is_ident_char(before) and not _is_ident_char(after)


def _is_ident_char(c: str) -> bool:
    return bool(c) and (c.isalnum() or c == "_")


def mask_literals(text: str) -> str:
    """Same-length copy of text with strings and comments blanked out (newlines kept)."""
    out: List[str] = []
    i = 0
    n = len(text)
    while i < n:
        skipped = skip_literal(text, i)
        if skipped != i:
            out.append("".join("\n" if c == "\n" else " " for c in text[i:skipped]))
            i = skipped
            continue
        out.append(text[i])
        i += 1
    return "".join(out)


def split_top_level(text: str, sep: str = ",") -> List[str]:
    """Split on sep where no (), [] or {} is open; literals are kept intact."""
    parts: List[str] = []
    depth = 0
    start = 0
    i = 0
    n = len(text)
    while i < n:
        skipped = skip_literal(text, i)
        if skipped != i:
            i = skipped
            continue
        ch = text[i]
        if ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth -= 1
        elif ch == sep and depth == 0:
            parts.append(text[start:i].strip())
            start = i + 1
        i += 1
    tail = text[start:].strip()
    if tail:
        parts.append(tail)
    return [p for p in parts if p]
