"""Serialise sliced documents to JSON or YAML.

:func:`render` produces the text for a given format and
:func:`write_document` writes it to a path, choosing the format from the
path's extension. Writes overwrite any existing file and do not create
missing parent directories; :class:`OSError` from the file system
propagates unchanged.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import yaml

from openapi_slicer.models import DocumentFormat
from openapi_slicer.parser.loader import detect_format

logger = logging.getLogger(__name__)


class _NoAliasDumper(yaml.SafeDumper):
    """SafeDumper that never emits anchors and indents nested sequences."""

    def ignore_aliases(self, data: Any) -> bool:
        return True

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> Any:
        return super().increase_indent(flow, False)


def render(document: dict[str, Any], fmt: DocumentFormat, indent: int = 2) -> str:
    """Render *document* as text.

    JSON keeps non-ASCII characters and falls back to ``str()`` for values
    JSON cannot represent (e.g. dates read from YAML). YAML preserves the
    document's key order.

    Args:
        document: The document to serialise.
        fmt: Target format.
        indent: JSON indentation width; ``0`` produces compact JSON.

    Returns:
        The serialised text, always ending with a newline.
    """
    if fmt == DocumentFormat.JSON:
        if indent:
            text = json.dumps(document, indent=indent, ensure_ascii=False, default=str)
        else:
            text = json.dumps(
                document, separators=(",", ":"), ensure_ascii=False, default=str
            )
        return text + "\n"

    return yaml.dump(
        document,
        Dumper=_NoAliasDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def write_document(document: dict[str, Any], target: str, indent: int = 2) -> None:
    """Write *document* to *target* in the format implied by its extension.

    Raises:
        InvalidFileTypeError: If *target* does not end in ``.json``,
            ``.yml`` or ``.yaml``.
        OSError: If the file cannot be written.
    """
    fmt = detect_format(target)
    text = render(document, fmt, indent=indent)
    with open(target, "w", encoding="utf-8") as f:
        f.write(text)
    logger.debug("Wrote %s document to %s", fmt.value, target)
