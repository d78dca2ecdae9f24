from .buffer import Buffer, collapse_to_one_line, expand_to_multi_line, format_buffer, format_current_form, format_text
from .config import FormatConfig, load_config
from .files import format_directory, format_file
from .formatter import FormatError, descend, format_form
from .layout import join_leading_breaks, layout
from .parser import tokenize
from .skip_table import SkipTable
from .types import FormatMode, Token, TokenKind

__all__ = [
    "Buffer",
    "FormatConfig",
    "FormatError",
    "FormatMode",
    "SkipTable",
    "Token",
    "TokenKind",
    "collapse_to_one_line",
    "descend",
    "expand_to_multi_line",
    "format_buffer",
    "format_current_form",
    "format_directory",
    "format_file",
    "format_form",
    "format_text",
    "join_leading_breaks",
    "layout",
    "load_config",
    "tokenize",
]
