"""Profile input schema."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..errors import ValidationError

NOT_PROVIDED = "Not provided"

REQUIRED_FIELDS: tuple[str, ...] = ("fullName", "skills")


class ProfileInput(BaseModel):
    """One evaluation request: a free-form description of a person."""

    full_name: str = Field(min_length=1)
    skills: str
    experience: str = NOT_PROVIDED
    education: str = NOT_PROVIDED
    bio: str = NOT_PROVIDED

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @field_validator("experience", "education", "bio", mode="before")
    @classmethod
    def _default_not_provided(cls, value: Any) -> Any:
        if value is None:
            return NOT_PROVIDED
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str) and not value.strip():
            return NOT_PROVIDED
        return value

    def missing_fields(self) -> list[str]:
        """Return wire names of required fields that are blank."""
        missing = []
        if not self.full_name.strip():
            missing.append("fullName")
        if not self.skills.strip():
            missing.append("skills")
        return missing

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ProfileInput":
        """Build a profile from a raw camelCase mapping.

        Absent, null or blank ``fullName``/``skills`` are reported together as
        missing required fields; any other schema violation is reported with
        the offending field names.
        """
        missing = [name for name in REQUIRED_FIELDS if not _has_text(payload.get(name))]
        if missing:
            raise ValidationError(
                "Missing required fields: " + ", ".join(REQUIRED_FIELDS),
                fields=missing,
            )
        try:
            return cls.model_validate(dict(payload))
        except PydanticValidationError as exc:
            fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
            raise ValidationError("Invalid profile fields: " + ", ".join(fields), fields=fields) from exc


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())
