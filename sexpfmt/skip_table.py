"""Skip counts: how many line breaks after a head symbol fold back onto the opening line."""

from typing import Iterable, Iterator, Optional, Union

from .types import SkipEntry

EntryLike = Union[SkipEntry, tuple[str, int]]

DEFAULT_SKIP_ENTRIES: tuple[SkipEntry, ...] = tuple(
    SkipEntry(name, count)
    for name, count in (
        ("and", 1),
        ("or", 1),
        ("not", 1),
        ("if", 1),
        ("when", 1),
        ("unless", 1),
        ("while", 1),
        ("cond", 0),
        ("progn", 0),
        ("save-excursion", 0),
        ("let", 1),
        ("let*", 1),
        ("lambda", 1),
        ("dolist", 1),
        ("dotimes", 1),
        ("catch", 1),
        ("condition-case", 2),
        ("unwind-protect", 1),
        ("with-current-buffer", 1),
        ("defun", 2),
        ("defmacro", 2),
        ("defsubst", 2),
        ("defvar", 2),
        ("defconst", 2),
        ("defcustom", 2),
        ("defface", 2),
        ("defgroup", 2),
        ("define-key", 2),
        ("global-set-key", 2),
        ("add-hook", 2),
        ("add-to-list", 2),
        ("setq", 2),
        ("setq-default", 2),
        ("setf", 2),
        ("equal", 2),
        ("eq", 2),
        ("string-match", 2),
        ("concat", 1),
        ("format", 1),
        ("message", 1),
        ("funcall", 2),
        ("apply", 2),
        ("mapcar", 2),
        ("mapc", 2),
        ("nth", 2),
        ("car", 1),
        ("cdr", 1),
        ("buffer-substring", 2),
        ("buffer-substring-no-properties", 2),
        ("with-eval-after-load", 1),
    )
)

# lisp-indent-function style declarations for forms the skip table does not name.
INDENT_ARITY: dict[str, int] = {
    "prog1": 1,
    "prog2": 2,
    "save-restriction": 0,
    "save-match-data": 0,
    "save-current-buffer": 0,
    "save-window-excursion": 0,
    "with-temp-buffer": 0,
    "with-output-to-string": 0,
    "with-syntax-table": 1,
    "with-no-warnings": 0,
    "ignore-errors": 0,
    "pcase": 1,
    "pcase-let": 1,
    "pcase-dolist": 1,
    "cl-flet": 1,
    "cl-labels": 1,
    "cl-letf": 1,
    "cl-block": 1,
    "cl-case": 1,
    "cl-destructuring-bind": 2,
    "if-let": 2,
    "when-let": 1,
    "if-let*": 2,
    "when-let*": 1,
    "with-slots": 2,
    "eval-when-compile": 0,
    "eval-and-compile": 0,
}


def default_arity(symbol_name: str) -> Optional[int]:
    return INDENT_ARITY.get(symbol_name)


class SkipTable:
    """Ordered (symbol, count) pairs; lookup is exact match, first entry wins.

    Duplicate names are accepted: later duplicates are never consulted.
    """

    def __init__(self, entries: Iterable[EntryLike] = DEFAULT_SKIP_ENTRIES):
        self._entries: list[SkipEntry] = []
        for name, count in entries:
            if not isinstance(count, int) or isinstance(count, bool) or count < 0:
                raise ValueError(f"skip count for {name!r} must be a non-negative integer, got {count!r}")
            self._entries.append(SkipEntry(str(name), count))

    @classmethod
    def from_mapping(cls, mapping: dict[str, int]) -> "SkipTable":
        return cls(mapping.items())

    def lookup(self, symbol_name: str) -> Optional[int]:
        for entry in self._entries:
            if entry.symbol_name == symbol_name:
                return entry.skip_count
        return None

    def __contains__(self, symbol_name: object) -> bool:
        return any(entry.symbol_name == symbol_name for entry in self._entries)

    def __iter__(self) -> Iterator[SkipEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SkipTable({len(self._entries)} entries)"
