"""Common configuration for API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base model exchanging camelCase JSON while using snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
