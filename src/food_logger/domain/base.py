"""Shared pydantic base for wire and storage models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model that reads and writes camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False
    )

    def to_document(self) -> dict[str, object]:
        """Return a JSON-compatible dict keyed by wire aliases."""
        return self.model_dump(mode="json", by_alias=True)
