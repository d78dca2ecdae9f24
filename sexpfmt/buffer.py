"""Editor-style commands over a text buffer with a cursor.

Each command stages the new text on plain strings and touches the buffer
with a single `replace_region` call once staging has fully succeeded; any
exception leaves the buffer as it was.
"""

import logging
from dataclasses import dataclass
from typing import Union

from .config import FormatConfig, coerce_config
from .formatter import FormatError, format_form
from .indent import column_at, indent_text
from .parser import list_spans, read_forms
from .types import FormatMode

logger = logging.getLogger(__name__)

ConfigLike = Union[FormatConfig, dict, None]


@dataclass
class Buffer:
    text: str
    point: int = 0

    def replace_region(self, start: int, end: int, new_text: str) -> None:
        """Swap text[start:end] for new_text, keeping point on the same code."""
        anchor = _anchor(self.text, self.point)
        self.text = self.text[:start] + new_text + self.text[end:]
        self.point = _restore(self.text, anchor)


def _anchor(text: str, point: int) -> tuple[int, bool]:
    # Non-whitespace characters survive every transform, so counting them pins the cursor.
    count = sum(1 for ch in text[:point] if not ch.isspace())
    return count, point > 0 and not text[point - 1].isspace()


def _restore(text: str, anchor: tuple[int, bool]) -> int:
    count, sticks_left = anchor
    seen = 0
    for i, ch in enumerate(text):
        if ch.isspace():
            continue
        if seen == count and not sticks_left:
            return i
        seen += 1
        if seen == count and sticks_left:
            return i + 1
    return len(text)


def _format_region(
    text: str,
    start: int,
    end: int,
    mode: FormatMode,
    config: FormatConfig,
    recursive: bool = True,
) -> str:
    new = format_form(text[start:end], mode, config, recursive=recursive)
    if config.indent:
        new = indent_text(new, config.indent_width, column_at(text, start))
    return new


def format_text(text: str, config: ConfigLike = None, mode: FormatMode = FormatMode.MULTI_LINE) -> str:
    """Reformat every top-level list of a document; text between forms is kept."""
    config = coerce_config(config)
    staged = text
    forms = [tok for tok in read_forms(text) if tok.is_compound]
    for tok in reversed(forms):
        staged = staged[: tok.start] + _format_region(staged, tok.start, tok.end, mode, config) + staged[tok.end :]
    logger.debug("formatted %d top-level forms", len(forms))
    return staged


def _enclosing_list(text: str, point: int) -> tuple[int, int]:
    spans = [(start, end) for start, end in list_spans(text) if start <= point < end]
    if not spans:
        raise FormatError(f"no enclosing list at offset {point}")
    return max(spans)


def _top_level_form(text: str, point: int) -> tuple[int, int]:
    for tok in read_forms(text):
        if tok.is_compound and tok.start <= point <= tok.end:
            return tok.start, tok.end
    raise FormatError(f"no top-level form at offset {point}")


def _apply(
    buf: Buffer,
    span: tuple[int, int],
    mode: FormatMode,
    config: FormatConfig,
    recursive: bool = True,
) -> Buffer:
    start, end = span
    staged = _format_region(buf.text, start, end, mode, config, recursive)
    buf.replace_region(start, end, staged)
    return buf


def format_buffer(buf: Buffer, config: ConfigLike = None) -> Buffer:
    """Multi-line layout with descent on every top-level form."""
    staged = format_text(buf.text, config)
    buf.replace_region(0, len(buf.text), staged)
    return buf


def format_current_form(buf: Buffer, config: ConfigLike = None) -> Buffer:
    """Multi-line layout with descent on the top-level form around point."""
    config = coerce_config(config)
    return _apply(buf, _top_level_form(buf.text, buf.point), FormatMode.MULTI_LINE, config)


def collapse_to_one_line(buf: Buffer, config: ConfigLike = None, recursive: bool = False) -> Buffer:
    """Put the innermost list around point on one line; nested lists too when recursive."""
    config = coerce_config(config)
    return _apply(buf, _enclosing_list(buf.text, buf.point), FormatMode.ONE_LINE, config, recursive)


def expand_to_multi_line(buf: Buffer, config: ConfigLike = None) -> Buffer:
    config = coerce_config(config)
    return _apply(buf, _enclosing_list(buf.text, buf.point), FormatMode.MULTI_LINE, config)
