"""Shared pydantic configuration for payload models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PayloadModel(BaseModel):
    """
    Base for models read from notification feeds.

    Feeds use camelCase keys; Python callers may use either spelling.
    Instances are frozen once validated.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
