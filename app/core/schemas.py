# app/core/schemas.py
import enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Source(str, enum.Enum):
    """Where a ticket or a piece of feedback came from."""

    VOICE = "Voice"
    PHONE = "Phone"
    SYSTEM = "System"
    WEB = "Web"


class CamelModel(BaseModel):
    """Accepts snake_case or camelCase input, serializes camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
