"""Data models for signed-in users and their profiles."""

from pydantic import BaseModel, ConfigDict, Field


class UserSession(BaseModel):
    """Authenticated session returned by the auth provider."""

    user_id: str
    email: str | None = None
    access_token: str | None = None


class UserProfile(BaseModel):
    """Row of the ``user_profile`` table."""

    id: int
    user_id: str
    name: str | None = None
    rank: str | None = None
    registration_number: str | None = Field(default=None, alias="matricule")
    station: str | None = Field(default=None, alias="caserne")
    avatar_url: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class ProfileUpdate(BaseModel):
    """
    Partial profile update.

    Only fields that were explicitly set are sent: an absent field is left
    unchanged, an explicit ``None`` clears the stored value.
    """

    name: str | None = None
    rank: str | None = None
    station: str | None = Field(default=None, serialization_alias="caserne")
    avatar_url: str | None = None

    def to_row(self) -> dict:
        """Columns to write, keyed by their database names."""
        return self.model_dump(exclude_unset=True, by_alias=True)

    @property
    def is_empty(self) -> bool:
        return not self.model_fields_set

    @classmethod
    def from_changes(cls, profile: UserProfile, **values: str | None) -> "ProfileUpdate":
        """
        Build an update holding only the values that differ from ``profile``.

        Empty strings and ``None`` compare equal, the way an edit form shows a
        missing value as a blank field.
        """
        changed = {}
        for field, value in values.items():
            current = getattr(profile, field)
            if (value or "") != (current or ""):
                changed[field] = value
        return cls(**changed)
