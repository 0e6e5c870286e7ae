"""Shared pydantic base for configuration models.

The builder UI stores configuration as camelCase JSON; Python code uses
snake_case attributes. Both spellings are accepted on input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """base model with camelCase aliases and lenient extra handling."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        protected_namespaces=(),
    )

    def to_wire(self) -> dict:
        """dump to the camelCase JSON shape used by the builder UI."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
