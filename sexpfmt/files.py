"""Format files and directory trees in place."""

import logging
from pathlib import Path
from typing import Union

from .buffer import ConfigLike, format_text
from .config import coerce_config
from .types import FormatMode

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "*.el"


def format_file(
    path: Union[str, Path],
    config: ConfigLike = None,
    mode: FormatMode = FormatMode.MULTI_LINE,
    *,
    write: bool = True,
) -> bool:
    """Reformat a file; returns True when its content changed.

    With write=False the file is only checked. A file that fails to tokenize
    raises SyntaxError and is left untouched.
    """
    path = Path(path)
    original = path.read_text(encoding="utf-8")
    formatted = format_text(original, config, mode)
    if formatted == original:
        logger.debug("%s already formatted", path)
        return False
    if write:
        path.write_text(formatted, encoding="utf-8")
        logger.info("reformatted %s", path)
    return True


def format_directory(
    path: Union[str, Path],
    config: ConfigLike = None,
    mode: FormatMode = FormatMode.MULTI_LINE,
    *,
    pattern: str = DEFAULT_PATTERN,
    write: bool = True,
) -> list[Path]:
    """Reformat every file under path matching pattern; returns the changed paths."""
    config = coerce_config(config)
    changed: list[Path] = []
    for file in sorted(Path(path).rglob(pattern)):
        if file.is_file() and format_file(file, config, mode, write=write):
            changed.append(file)
    return changed
