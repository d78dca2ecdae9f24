from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, NamedTuple, Optional


class TokenKind(Enum):
    OPEN_PAREN = "open-paren"
    CLOSE_PAREN = "close-paren"
    PUNCTUATION = "punctuation"
    SYMBOL = "symbol"
    STRING = "string"
    NUMBER = "number"
    COMMENT = "comment"
    # A whole balanced sub-expression seen as one unit by its parent.
    COMPOUND_LIST = "compound-list"
    OTHER = "other"


class FormatMode(Enum):
    ONE_LINE = "one-line"
    MULTI_LINE = "multi-line"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    start: int
    end: int

    @property
    def is_compound(self) -> bool:
        return self.kind is TokenKind.COMPOUND_LIST


class SkipEntry(NamedTuple):
    symbol_name: str
    skip_count: int


# symbol name -> declared indentation arity, or None when unknown
ArityLookup = Callable[[str], Optional[int]]


@dataclass
class LayoutResult:
    text: str
    head_symbol: str = ""
    second_token_kind: Optional[TokenKind] = None
    newline_context: bool = False
    mode: FormatMode = FormatMode.ONE_LINE
    # offsets into text of the newlines emitted as plain separators
    breaks: list[int] = field(default_factory=list)
