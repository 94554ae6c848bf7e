"""Common base model for records exposed over the API."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AozModel(BaseModel):
    """
    Base model using camelCase field aliases.

    Records are addressed by snake_case attributes in Python and
    serialized with camelCase keys (``agentName``, ``createdAt``) on the wire.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_api(self) -> dict:
        """Serialize with camelCase keys and JSON-compatible values."""
        return self.model_dump(mode="json", by_alias=True)
