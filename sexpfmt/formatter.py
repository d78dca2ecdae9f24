"""Formatting of one form: layout, leading-break joining, then descent into nested lists."""

import logging
from typing import Optional

from .config import FormatConfig
from .layout import join_leading_breaks, layout
from .parser import tokenize
from .types import FormatMode

logger = logging.getLogger(__name__)


class FormatError(RuntimeError):
    pass


def format_form(
    text: str,
    mode: FormatMode,
    config: Optional[FormatConfig] = None,
    *,
    recursive: bool = True,
    newline_context: Optional[bool] = None,
) -> str:
    """Reformat one balanced expression and return the new text.

    Raises SyntaxError when text does not tokenize; nothing is returned
    half-done.
    """
    if config is None:
        config = FormatConfig()
    tokens = tokenize(text)
    if not tokens:
        return text

    result = layout(tokens, mode, newline_context, config.skip_table)
    joined = join_leading_breaks(result, config.skip_table, config.arity)
    logger.debug(
        "laid out %s form %r (%d breaks)",
        result.mode.value,
        result.head_symbol,
        len(result.breaks),
    )
    if not recursive:
        return joined
    return descend(joined, mode, result.newline_context, config)


def descend(
    text: str,
    mode: FormatMode,
    newline_context: bool,
    config: FormatConfig,
) -> str:
    """Reformat every non-empty nested list of text, rightmost first.

    Each splice only changes text to the right of the lists still to be
    visited, so their offsets from the single tokenize call stay valid.
    """
    for tok in reversed(tokenize(text)):
        if not tok.is_compound or len(tok.text) <= 2:
            continue
        inner = format_form(tok.text, mode, config, newline_context=newline_context)
        text = text[: tok.start] + inner + text[tok.end :]
    return text
