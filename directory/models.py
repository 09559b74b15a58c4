"""
Institute record schema.

An Institute is the four editable form fields plus a store-assigned id.
Seats are kept as entered text; numbers found in older persisted data are
accepted and converted to text so display and round-trips stay stable.
"""

from pydantic import BaseModel, ConfigDict, field_validator

FORM_FIELDS = ("name", "city", "course", "seats")


class InstituteForm(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    city: str = ""
    course: str = ""
    seats: str = ""

    @field_validator("seats", mode="before")
    @classmethod
    def _seats_as_text(cls, value):
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    def missing_fields(self) -> list[str]:
        """Names of required fields that are blank."""
        return [f for f in FORM_FIELDS if not getattr(self, f).strip()]


class Institute(InstituteForm):
    id: int

    def to_form(self) -> InstituteForm:
        return InstituteForm(**self.model_dump(exclude={"id"}))

    @classmethod
    def from_form(cls, id: int, fields: InstituteForm) -> "Institute":
        return cls(id=id, **fields.model_dump())
