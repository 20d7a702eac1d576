"""Shared pydantic base for authored content."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AuthoredModel(BaseModel):
    """Base for authored content: snake_case in Python, camelCase in JSON."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
