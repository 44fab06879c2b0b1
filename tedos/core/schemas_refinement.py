"""Schemas for answer refinement: section metadata, impact and regeneration plans."""

from pydantic import BaseModel, Field


class SectionMetadata(BaseModel):
    """Display metadata for one content section."""

    name: str = Field(..., description="Human-readable section name")
    key: int = Field(..., ge=1, description="Generation order number")


class DependencyImpact(BaseModel):
    """Sections touched by an edit to one vault field."""

    field_path: str = Field(..., description="Dotted path, e.g. 'offer.offerName'")
    affected_sections: list[str] = Field(default_factory=list)
    message: str = Field(..., description="Notice shown to the user before saving")


class RegenerationPlan(BaseModel):
    """Which answers changed and which sections must be regenerated as a result."""

    changed_answer_keys: list[str] = Field(default_factory=list)
    affected_sections: list[str] = Field(default_factory=list)

    @property
    def is_noop(self) -> bool:
        return not self.affected_sections
