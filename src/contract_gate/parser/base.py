"""Data models shared by the repository, the parsers and the checks."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel


class ModuleHandle(BaseModel):
    """A module bundle discovered under a modules root."""

    name: str  # directory name, e.g. users
    path: Path


class SchemaRefUse(BaseModel):
    """One schema reference made by a front-end endpoint proposal."""

    screen_index: int
    proposal_index: int
    field: str  # requestSchemaRef / responseSchemaRef / errorSchemaRef
    ref: Any  # raw value, may be malformed
