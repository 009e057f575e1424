"""Base class for models exchanged with the REST API."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ApiModel(BaseModel):
    """Populated by field name or by the API's camelCase alias."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_payload(self) -> dict[str, Any]:
        """Serialize for a request body, using API field names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def id_field(**kwargs: Any) -> Any:
    """Identifier field accepting ``_id`` or ``id`` and emitting ``_id``."""
    return Field(
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
        **kwargs,
    )
