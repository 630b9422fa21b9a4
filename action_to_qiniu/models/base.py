"""Base models for action-to-qiniu."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RelayBaseModel(BaseModel):
    """Base model for all action-to-qiniu domain models."""

    model_config = ConfigDict(
        extra="forbid",  # Don't allow extra fields
        frozen=False,  # Allow modification (can be changed per model)
        validate_assignment=True,  # Validate on attribute assignment
    )


class CamelCaseModel(RelayBaseModel):
    """Base model for documents keyed in camelCase (config files, results JSON)."""

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        alias_generator=to_camel,
        populate_by_name=True,  # Accept snake_case names as well
    )


__all__ = ["RelayBaseModel", "CamelCaseModel"]
