"""Schemas for merged-document validation results."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ValidationResult(BaseModel):
    """Completeness classification of one merged document.

    Returned as data, never raised: callers check `valid` and decide whether
    to retry or regenerate.
    """

    model_config = ConfigDict(populate_by_name=True)

    valid: bool
    missing: list[str] = Field(default_factory=list, description="Fields absent or null")
    incomplete: list[str] = Field(
        default_factory=list, description="Fields present but empty for their type"
    )
    field_count: int | None = Field(
        None, alias="fieldCount", description="Schema field count, set when valid"
    )
    error: str | None = Field(None, description="Human-readable summary when invalid")

    def to_payload(self) -> dict[str, Any]:
        """Wire form with camelCase keys and unset optionals dropped.

        A valid result is just `{"valid": true, "fieldCount": n}`.
        """
        exclude = {"missing", "incomplete"} if self.valid else None
        return self.model_dump(by_alias=True, exclude_none=True, exclude=exclude)


class FunnelCopyValidation(BaseModel):
    """Page-level validation of merged funnel copy.

    Only `issues` make the result invalid; `warnings` are informational.
    """

    model_config = ConfigDict(populate_by_name=True)

    valid: bool
    issues: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    page_count: int = Field(0, alias="pageCount", description="Pages present and non-empty")
    field_count: int = Field(0, alias="fieldCount", description="Fields across all pages")
    empty_field_count: int = Field(0, alias="emptyFieldCount")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
