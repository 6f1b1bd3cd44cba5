"""User Schemas — Pydantic models for the users API boundary.

Invariants:
    - UserCreate.auth0Id: non-empty string
    - UserMetadata.facilities: non-empty list of non-empty facility ids
    - UserMetadata.defaultFacility: non-empty; membership in facilities is NOT checked
    - UserUpdate: every UserCreate field optional, minus the immutable auth0Id
    - JSON field names are camelCase (auth0Id, createdAt, ...) via aliases
    - UserResponse.metadata is read from User.user_metadata, never User.metadata

Design Decisions:
    - Field names match ORM attribute names; aliases carry the wire names, so
      to_values() output can be handed to the data access layer as-is
    - Extra fields forbidden on write models: a PATCH carrying auth0Id is a 400,
      not a silent no-op
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StringConstraints

from user_service.api.schema_builder import partial

FacilityId = Annotated[str, StringConstraints(min_length=1)]


class UserMetadata(BaseModel):
    """Facilities a user may act in, and the one selected by default."""
    model_config = ConfigDict(populate_by_name=True)

    facilities: list[FacilityId] = Field(min_length=1)
    default_facility: FacilityId = Field(alias="defaultFacility")


class UserWrite(BaseModel):
    """Shared behaviour of the insert and update shapes."""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    def to_values(self) -> dict:
        """Column values for the data access layer; metadata stored with wire names."""
        values = self.model_dump(exclude_unset=True, exclude_none=True)
        metadata = getattr(self, "user_metadata", None)
        if "user_metadata" in values and metadata is not None:
            values["user_metadata"] = metadata.model_dump(by_alias=True)
        return values


class UserCreate(UserWrite):
    """Insert shape — all required fields, secondary key format-checked."""
    auth0_id: str = Field(alias="auth0Id", min_length=1)
    user_metadata: UserMetadata = Field(alias="metadata")


UserUpdate = partial(UserCreate, "UserUpdate", exclude={"auth0_id"}, base=UserWrite)


class UserResponse(BaseModel):
    """Entity shape returned by every users endpoint."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    auth0_id: str = Field(alias="auth0Id")
    # ORM rows expose Base.metadata (the table registry), so read the attribute first
    user_metadata: UserMetadata | None = Field(
        None,
        validation_alias=AliasChoices("user_metadata", "metadata"),
        serialization_alias="metadata",
    )
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class Auth0IdParams(BaseModel):
    """Path parameters for the secondary-key lookup."""
    id: str = Field(min_length=1)
