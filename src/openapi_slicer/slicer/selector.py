"""Select path items whose path string matches a regular expression."""

from __future__ import annotations

import logging
import re
from typing import Any, Union

logger = logging.getLogger(__name__)

Pattern = Union[str, re.Pattern]


def compile_pattern(pattern: Pattern) -> re.Pattern[str]:
    """Compile *pattern* unless it is already a compiled expression.

    Raises:
        re.error: If *pattern* is not a valid regular expression.
    """
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


def select_paths(paths: dict[str, Any], pattern: Pattern) -> dict[str, Any]:
    """Return the entries of *paths* whose key matches *pattern*.

    Matching uses search semantics: the expression may match anywhere in
    the path string. Path templates are matched literally, so ``{petId}``
    is just characters to the expression. The result keeps the source
    key order.

    Args:
        paths: The document's ``paths`` mapping.
        pattern: A regular expression string or compiled pattern.

    Returns:
        A new dictionary holding the matching path items.
    """
    regex = compile_pattern(pattern)
    selected = {path: item for path, item in paths.items() if regex.search(path)}
    logger.debug(
        "Selected %d of %d paths matching %r", len(selected), len(paths), regex.pattern
    )
    return selected
