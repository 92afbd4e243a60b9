"""Project configuration read from [tool.lazy-changesets].

Example::

    [tool.lazy-changesets]
    base-ref = "origin/main"
"""

from __future__ import annotations

import tomlkit
from pydantic import BaseModel, ConfigDict, Field

from .toml import get_tool_table

TOOL_NAME = "lazy-changesets"


class ChangesetConfig(BaseModel):
    """Settings for authoring changesets.

    Attributes:
        base_ref: Git ref that changed packages are detected against.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    base_ref: str = Field(default="main", alias="base-ref")


def load_config(doc: tomlkit.TOMLDocument) -> ChangesetConfig:
    """Load settings from a parsed root pyproject.toml.

    Raises:
        pydantic.ValidationError: On unknown keys or wrong types.
    """
    return ChangesetConfig.model_validate(get_tool_table(doc, TOOL_NAME))
