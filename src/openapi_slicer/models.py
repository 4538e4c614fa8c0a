"""Pydantic models shared across openapi-slicer modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config
directory or the project-local config file: :class:`SlicerConfig`.

**Document models** -- small value types produced while slicing:
:class:`DocumentFormat` and :class:`ComponentRef`.

The OpenAPI document itself is intentionally *not* modelled: it is kept as
the plain ``dict``/``list`` tree produced by the JSON or YAML reader so that
unknown keys and vendor extensions pass through untouched.
"""

from __future__ import annotations

import enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class DocumentFormat(str, enum.Enum):
    """Serialisation formats understood by the loader and the writer."""

    JSON = "json"
    YAML = "yaml"


class ComponentRef(BaseModel):
    """A parsed ``$ref`` pointer into the document's ``components`` section.

    Identity for dependency tracking is :attr:`name` alone; :attr:`category`
    is informational and is ``None`` when the pointer does not have the
    ``#/components/<category>/<name>`` shape.

    Example::

        ComponentRef(ref="#/components/schemas/Pet", category="schemas", name="Pet")
    """

    model_config = ConfigDict(frozen=True)

    ref: str
    category: Optional[str] = None
    name: str


class SlicerConfig(BaseModel):
    """Effective configuration after precedence resolution.

    Example ``openapi-slicer.json``::

        {"strict": true, "indent": 4, "output_format": "yaml"}
    """

    strict: bool = Field(
        default=False,
        description="Fail instead of warning when a $ref points to a missing component",
    )
    indent: int = Field(
        default=2, ge=0, le=8, description="Indentation used for JSON output"
    )
    output_format: Literal["auto", "json", "yaml"] = Field(
        default="auto",
        description="Format used when printing to stdout (files use their extension)",
    )
