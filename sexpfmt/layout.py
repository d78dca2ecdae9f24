"""Line layout for one expression.

`layout` picks the separator between every pair of adjacent tokens (space,
newline or nothing) and records where it put plain line breaks.
`join_leading_breaks` then folds the first few of those breaks back onto the
opening line, as many as the skip table (or the arity fallback) asks for.
"""

import re
from typing import Optional

from .skip_table import SkipTable
from .types import ArityLookup, FormatMode, LayoutResult, Token, TokenKind

KEYWORD = re.compile(r":\S")
SIGNED_NUMBER_GLUE = ("1-", "1+")

_NO_SEPARATOR_AFTER = (TokenKind.PUNCTUATION, TokenKind.OPEN_PAREN, TokenKind.CLOSE_PAREN)

_DEFAULT_TABLE = SkipTable()


class _Output:
    __slots__ = ("parts", "size", "breaks")

    def __init__(self):
        self.parts: list[str] = []
        self.size = 0
        self.breaks: list[int] = []

    def write(self, text: str) -> None:
        self.parts.append(text)
        self.size += len(text)

    def separate(self, mode: FormatMode) -> None:
        if mode is FormatMode.ONE_LINE:
            self.write(" ")
            return
        self.breaks.append(self.size)
        self.write("\n")

    def getvalue(self) -> str:
        return "".join(self.parts)


def head_token(tokens: list[Token]) -> Optional[Token]:
    if len(tokens) > 2 and tokens[0].kind is TokenKind.OPEN_PAREN:
        return tokens[1]
    return None


def newline_context_for(tokens: list[Token], skip_table: SkipTable) -> bool:
    """True when the head is itself a list or a symbol the skip table knows."""
    head = head_token(tokens)
    if head is None:
        return False
    return head.is_compound or head.text in skip_table


def _glued(tokens: list[Token], i: int) -> tuple[str, int]:
    # A quote-like prefix never ends up on a different line from what it quotes.
    parts = [tokens[i].text]
    while (
        tokens[i].kind is TokenKind.PUNCTUATION
        and i + 1 < len(tokens)
        and tokens[i + 1].kind not in (TokenKind.CLOSE_PAREN, TokenKind.COMMENT)
    ):
        i += 1
        parts.append(tokens[i].text)
    return "".join(parts), i + 1


def layout(
    tokens: list[Token],
    mode: FormatMode,
    newline_context: Optional[bool] = None,
    skip_table: Optional[SkipTable] = None,
) -> LayoutResult:
    """Lay out one token stream.

    MULTI_LINE on a stream without any nested list is downgraded to ONE_LINE.
    When newline_context is None it is derived from the head token.
    """
    if not tokens:
        return LayoutResult("")
    table = _DEFAULT_TABLE if skip_table is None else skip_table
    if newline_context is None:
        newline_context = newline_context_for(tokens, table)
    if mode is FormatMode.MULTI_LINE and not any(tok.is_compound for tok in tokens):
        mode = FormatMode.ONE_LINE

    out = _Output()
    n = len(tokens)
    i = 0
    while i < n:
        cur = tokens[i]
        nxt = tokens[i + 1] if i + 1 < n else None
        after = tokens[i + 2] if i + 2 < n else None

        # --- Comments always end their line ---
        if cur.kind is TokenKind.COMMENT:
            out.write(cur.text)
            if nxt is not None:
                out.write("\n")
            i += 1
            continue

        if nxt is None:
            out.write(cur.text)
            break

        # --- `1-` / `1+` split across two touching tokens ---
        if cur.end == nxt.start and cur.text + nxt.text in SIGNED_NUMBER_GLUE:
            out.write(cur.text + nxt.text)
            if after is not None and after.kind is not TokenKind.CLOSE_PAREN:
                out.write(" ")
            i += 2
            continue

        # --- Structure ---
        if cur.kind in _NO_SEPARATOR_AFTER or nxt.kind is TokenKind.CLOSE_PAREN:
            out.write(cur.text)
            i += 1
            continue

        # --- Dotted pair ---
        if cur.text == "." and nxt.kind is not TokenKind.COMMENT:
            value, i = _glued(tokens, i + 1)
            out.write(cur.text + " " + value)
            if i < n and tokens[i].kind is not TokenKind.CLOSE_PAREN:
                out.separate(mode)
            continue

        # --- Keyword / value pairs ---
        if (
            mode is FormatMode.MULTI_LINE
            and cur.kind is TokenKind.SYMBOL
            and KEYWORD.search(cur.text)
            and nxt.kind is not TokenKind.COMMENT
        ):
            value, i = _glued(tokens, i + 1)
            out.write(cur.text + " " + value)
            if i < n:
                if tokens[i].kind is TokenKind.CLOSE_PAREN:
                    out.write(tokens[i].text)
                    i += 1
                else:
                    out.write("\n")
            continue

        out.write(cur.text)
        out.separate(mode)
        i += 1

    head = head_token(tokens)
    return LayoutResult(
        text=out.getvalue(),
        head_symbol="" if head is None or head.is_compound else head.text,
        second_token_kind=tokens[2].kind if head is not None else None,
        newline_context=newline_context,
        mode=mode,
        breaks=out.breaks,
    )


def resolve_skip_count(
    head_symbol: str,
    skip_table: SkipTable,
    arity: Optional[ArityLookup] = None,
) -> Optional[int]:
    count = skip_table.lookup(head_symbol)
    if count is None and arity is not None:
        count = arity(head_symbol)
    return count


def join_leading_breaks(
    result: LayoutResult,
    skip_table: SkipTable,
    arity: Optional[ArityLookup] = None,
) -> str:
    """Fold the first skip-count line breaks after the head back into spaces."""
    if result.mode is not FormatMode.MULTI_LINE or not result.breaks:
        return result.text

    count = resolve_skip_count(result.head_symbol, skip_table, arity)
    if count is None:
        second = result.second_token_kind
        if (second is TokenKind.COMPOUND_LIST and result.newline_context) or second in (
            TokenKind.CLOSE_PAREN,
            TokenKind.OPEN_PAREN,
        ):
            return result.text
        count = 1
    if count <= 0:
        return result.text

    chars = list(result.text)
    for offset in result.breaks[:count]:
        chars[offset] = " "
    return "".join(chars)
