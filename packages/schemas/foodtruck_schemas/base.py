"""Shared base model and field types for stored JSON documents."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

# Decimal in Python, plain JSON number in stored documents and responses
Money = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class CamelModel(BaseModel):
    """Base for documents whose JSON keys are camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        """Serialize to the camelCase JSON shape, dropping unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
