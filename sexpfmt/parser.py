"""Tokenizer for Emacs Lisp flavoured S-expressions.

`lex` produces a flat token list with source spans. `tokenize` and
`read_forms` group everything below the first nesting level into
COMPOUND_LIST tokens, which is the view the layout engine works on.
"""

import re

from .types import Token, TokenKind

_OPENERS = {"(": ")", "[": "]"}
_CLOSERS = frozenset(_OPENERS.values())
_DELIMITERS = frozenset('()[]";')

_NUMBER = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:e[-+]?(?:\d+|INF|NaN))?")


def lex(src: str) -> list[Token]:
    tokens: list[Token] = []
    i = 0
    n = len(src)
    while i < n:
        ch = src[i]
        if ch.isspace():
            i += 1
            continue
        start = i
        if ch in _OPENERS:
            tokens.append(Token(TokenKind.OPEN_PAREN, ch, i, i + 1))
            i += 1
            continue
        if ch in _CLOSERS:
            tokens.append(Token(TokenKind.CLOSE_PAREN, ch, i, i + 1))
            i += 1
            continue
        if ch == '"':
            i = _scan_string(src, i)
            tokens.append(Token(TokenKind.STRING, src[start:i], start, i))
            continue
        if ch == ";":
            end = src.find("\n", i)
            if end == -1:
                end = n
            text = src[start:end].rstrip()
            tokens.append(Token(TokenKind.COMMENT, text, start, start + len(text)))
            i = end
            continue
        if src.startswith(",@", i) or src.startswith("#'", i):
            tokens.append(Token(TokenKind.PUNCTUATION, src[i:i + 2], i, i + 2))
            i += 2
            continue
        if ch in "'`,":
            tokens.append(Token(TokenKind.PUNCTUATION, ch, i, i + 1))
            i += 1
            continue
        i = _scan_atom(src, i)
        text = src[start:i]
        tokens.append(Token(_atom_kind(text, src[i:i + 1]), text, start, i))
    return tokens


def _scan_string(src: str, i: int) -> int:
    j = i + 1
    while j < len(src):
        ch = src[j]
        if ch == "\\":
            j += 2
            continue
        if ch == '"':
            return j + 1
        j += 1
    raise SyntaxError(f"unterminated string at offset {i}")


def _scan_atom(src: str, i: int) -> int:
    n = len(src)
    j = i
    if src[j] == "?" and j + 1 < n:
        # Character literal: the next character is always part of it, even `?(` or `? `.
        j += 3 if src[j + 1] == "\\" else 2
    while j < n:
        ch = src[j]
        if ch == "\\":
            j += 2
            continue
        if ch.isspace() or ch in _DELIMITERS:
            break
        j += 1
    return min(j, n)


def _atom_kind(text: str, following: str) -> TokenKind:
    if text.startswith("?"):
        return TokenKind.OTHER
    if _NUMBER.fullmatch(text):
        return TokenKind.NUMBER
    # `#s(...)`, `#[...]` style reader prefixes stay attached to their list.
    if text.startswith("#") and following in _OPENERS:
        return TokenKind.PUNCTUATION
    return TokenKind.SYMBOL


def _match_brackets(tokens: list[Token]) -> dict[int, int]:
    pairs: dict[int, int] = {}
    stack: list[int] = []
    for i, tok in enumerate(tokens):
        if tok.kind is TokenKind.OPEN_PAREN:
            stack.append(i)
        elif tok.kind is TokenKind.CLOSE_PAREN:
            if not stack:
                raise SyntaxError(f"unexpected {tok.text} at offset {tok.start}")
            j = stack.pop()
            if _OPENERS[tokens[j].text] != tok.text:
                raise SyntaxError(f"mismatched {tok.text} at offset {tok.start}")
            pairs[j] = i
    if stack:
        tok = tokens[stack[-1]]
        raise SyntaxError(f"unterminated {tok.text} at offset {tok.start}")
    return pairs


def _collapse(src: str, tokens: list[Token], pairs: dict[int, int], lo: int, hi: int) -> list[Token]:
    out: list[Token] = []
    i = lo
    while i < hi:
        tok = tokens[i]
        if tok.kind is TokenKind.OPEN_PAREN:
            close = tokens[pairs[i]]
            out.append(Token(TokenKind.COMPOUND_LIST, src[tok.start:close.end], tok.start, close.end))
            i = pairs[i] + 1
            continue
        out.append(tok)
        i += 1
    return out


def tokenize(src: str) -> list[Token]:
    """Token stream for one expression, nested lists collapsed to COMPOUND_LIST."""
    tokens = lex(src)
    if not tokens:
        return []
    pairs = _match_brackets(tokens)
    last = len(tokens) - 1
    if tokens[0].kind is TokenKind.OPEN_PAREN and pairs[0] == last:
        return [tokens[0], *_collapse(src, tokens, pairs, 1, last), tokens[last]]
    return _collapse(src, tokens, pairs, 0, len(tokens))


def read_forms(src: str) -> list[Token]:
    """Top-level tokens of a whole document; every top-level list is one COMPOUND_LIST."""
    tokens = lex(src)
    return _collapse(src, tokens, _match_brackets(tokens), 0, len(tokens))


def list_spans(src: str) -> list[tuple[int, int]]:
    """(start, end) of every bracketed list in src, outermost first."""
    tokens = lex(src)
    pairs = _match_brackets(tokens)
    return [(tokens[i].start, tokens[j].end) for i, j in sorted(pairs.items())]
