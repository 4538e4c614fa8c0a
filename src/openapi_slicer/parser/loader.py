"""Load OpenAPI documents from a local file or a URL.

The document format is chosen from the path's extension: ``.json`` is read
with :mod:`json`, ``.yml``/``.yaml`` with :func:`yaml.safe_load`. Any other
extension is rejected *before* any I/O happens.

Parser errors (:class:`json.JSONDecodeError`, :class:`yaml.YAMLError`) are
not caught here; they propagate to the caller unchanged. The CLI layer is
responsible for turning them into user-facing messages.

The public functions are:

* :func:`detect_format` -- Map a path or URL to a
  :class:`~openapi_slicer.models.DocumentFormat`.
* :func:`load_document` -- Read and parse a document from any supported
  source.
"""

from __future__ import annotations

import json
import logging
from pathlib import PurePosixPath
from typing import Any
from urllib.parse import urlparse

import httpx
import yaml

from openapi_slicer.exceptions import InvalidFileTypeError, SpecParseError
from openapi_slicer.models import DocumentFormat

logger = logging.getLogger(__name__)

_EXTENSIONS: dict[str, DocumentFormat] = {
    ".json": DocumentFormat.JSON,
    ".yaml": DocumentFormat.YAML,
    ".yml": DocumentFormat.YAML,
}


def is_url(source: str) -> bool:
    """Return True when *source* is an http(s) URL rather than a file path."""
    return source.startswith(("http://", "https://"))


def detect_format(path: str) -> DocumentFormat:
    """Return the document format implied by *path*'s extension.

    For URLs only the path component is considered, so query strings do
    not affect detection.

    Args:
        path: A file path or http(s) URL.

    Returns:
        The matching :class:`~openapi_slicer.models.DocumentFormat`.

    Raises:
        InvalidFileTypeError: If the extension is not ``.json``, ``.yml``
            or ``.yaml``.
    """
    target = urlparse(path).path if is_url(path) else path
    suffix = PurePosixPath(target.replace("\\", "/")).suffix.lower()
    try:
        return _EXTENSIONS[suffix]
    except KeyError:
        raise InvalidFileTypeError(
            f"Invalid file type: {path}. Only JSON and YAML are supported."
        ) from None


def load_document(source: str) -> dict[str, Any]:
    """Load an OpenAPI document from a file path or URL.

    Args:
        source: A local file path or an http(s) URL ending in a supported
            extension.

    Returns:
        The parsed document as a dictionary.

    Raises:
        InvalidFileTypeError: If the extension is not supported.
        SpecParseError: If the URL cannot be fetched or the document root
            is not a mapping.
        OSError: If the local file cannot be read.
        json.JSONDecodeError: If a ``.json`` source is not valid JSON.
        yaml.YAMLError: If a YAML source is not valid YAML.
    """
    fmt = detect_format(source)
    if is_url(source):
        content = _load_from_url(source)
    else:
        with open(source, encoding="utf-8") as f:
            content = f.read()

    document = parse_content(content, fmt)
    logger.debug("Loaded %s document from %s", fmt.value, source)
    return document


def _load_from_url(url: str) -> str:
    """Fetch the raw document text from *url*.

    Raises:
        SpecParseError: If the request fails or returns an error status.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecParseError(
            f"HTTP {exc.response.status_code} fetching document from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecParseError(f"Failed to fetch document from {url}: {exc}") from exc
    return response.text


def parse_content(content: str, fmt: DocumentFormat) -> dict[str, Any]:
    """Parse *content* in the given format and check the root is a mapping.

    Raises:
        SpecParseError: If the parsed root is not a mapping.
    """
    if fmt == DocumentFormat.JSON:
        result = json.loads(content)
    else:
        result = yaml.safe_load(content)

    if not isinstance(result, dict):
        raise SpecParseError(
            "Document must be a JSON/YAML object (got "
            f"{type(result).__name__ if result is not None else 'empty document'})"
        )
    return result
