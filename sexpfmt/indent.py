"""Indentation pass run over a region after it has been re-broken.

Every line after the first is indented `width` columns past the innermost
open bracket; a line starting with a closing bracket lines up with its
opener. Lines inside a multi-line string are left alone.
"""

from .parser import lex
from .types import TokenKind


def indent_text(text: str, width: int = 2, base_column: int = 0) -> str:
    tokens = lex(text)
    stack: list[int] = []
    out: list[str] = []
    ti = 0
    verbatim_until = -1
    start = 0
    for lineno, line in enumerate(text.split("\n")):
        end = start + len(line)
        if lineno == 0 or start < verbatim_until:
            new_line = line
            origin = start - base_column if lineno == 0 else start
        else:
            stripped = line.lstrip()
            if not stripped:
                col = 0
            elif stack and stripped[0] in ")]":
                col = stack[-1]
            else:
                col = stack[-1] + width if stack else base_column
            new_line = " " * col + stripped if stripped else ""
            origin = start + (len(line) - len(stripped)) - col

        # origin maps an offset in text to its column in the re-indented line
        while ti < len(tokens) and tokens[ti].start <= end:
            tok = tokens[ti]
            if tok.kind is TokenKind.OPEN_PAREN:
                stack.append(tok.start - origin)
            elif tok.kind is TokenKind.CLOSE_PAREN and stack:
                stack.pop()
            if tok.end > end:
                verbatim_until = tok.end
            ti += 1

        out.append(new_line)
        start = end + 1
    return "\n".join(out)


def column_at(text: str, offset: int) -> int:
    return offset - (text.rfind("\n", 0, offset) + 1)
