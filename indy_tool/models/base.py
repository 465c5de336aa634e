"""Base models for Indy Tool."""

from pydantic import BaseModel, ConfigDict


class IndyBaseModel(BaseModel):
    """Base model for all models built by the tool itself."""

    model_config = ConfigDict(
        extra="forbid",  # Don't allow extra fields
        frozen=False,  # Allow modification (can be changed per model)
        validate_assignment=True,  # Validate on attribute assignment
    )


class IndyRecordModel(BaseModel):
    """Base model for documents read from the Indy REST API.

    Records are read-only once loaded and Indy adds fields over time, so unknown
    fields are ignored and the camelCase wire names are accepted alongside the
    Python names.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )


__all__ = ["IndyBaseModel", "IndyRecordModel"]
