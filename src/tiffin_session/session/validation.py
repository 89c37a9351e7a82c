"""
tiffin_session.session.validation

Local validation of session payloads before they reach the network.

Responsibilities:
- Validate signup data, including the role-conditional chef requirements.
- Reject profile patches that touch read-only fields or carry unusable values.
- Translate pydantic errors into the core's `ValidationError`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from tiffin_session.domain.users import Role, SpiceLevel, coerce_number, coerce_spice_level
from tiffin_session.errors import ValidationError

_COMMON_SIGNUP_FIELDS = {"name", "email", "password", "phone", "role", "address"}
_ROLE_SIGNUP_FIELDS: dict[Role, set[str]] = {
    Role.customer: {"preferences"},
    Role.chef: {
        "experience",
        "specialties",
        "kitchen_address",
        "kitchen_name",
        "max_orders_per_day",
        "delivery_radius",
    },
    Role.admin: {"permissions"},
}

# Fields the credential store owns; a profile patch may not set them.
READ_ONLY_PROFILE_FIELDS = frozenset(
    {"id", "_id", "role", "createdAt", "updatedAt", "rating", "totalOrders", "isVerified"}
)
NUMERIC_PROFILE_FIELDS = ("experience", "maxOrdersPerDay", "deliveryRadius")


class _WireModel(BaseModel):
    # Accept both wire (camelCase) and Python (snake_case) keys.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PreferencesInput(_WireModel):
    dietary_restrictions: list[str] = Field(default_factory=list)
    spice_level: SpiceLevel | None = None


class SignupRequest(_WireModel):
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=320)
    password: str = Field(min_length=1)
    phone: str = Field(min_length=1, max_length=32)
    role: Role
    address: str | None = None

    # Chef
    experience: float | None = Field(default=None, ge=0)
    specialties: list[str] = Field(default_factory=list)
    kitchen_address: str | None = None
    kitchen_name: str | None = None
    max_orders_per_day: int | None = Field(default=None, ge=1)
    delivery_radius: float | None = Field(default=None, ge=0)

    # Customer
    preferences: PreferencesInput | None = None

    # Admin
    permissions: list[str] = Field(default_factory=list)

    @field_validator("name", "email", "phone", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("address", "kitchen_address", "kitchen_name", mode="before")
    @classmethod
    def _blank_text_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("experience", "max_orders_per_day", "delivery_radius", mode="before")
    @classmethod
    def _blank_number_is_unset(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("specialties", mode="before")
    @classmethod
    def _split_specialties(cls, v: Any) -> Any:
        # Signup forms send specialties as one comma-separated string.
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, list | tuple):
            items = [s.strip() if isinstance(s, str) else s for s in v]
            return [s for s in items if s != ""]
        return v

    @field_validator("password")
    @classmethod
    def _password_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("password must not be blank")
        return v

    @model_validator(mode="after")
    def _chef_requirements(self) -> SignupRequest:
        if self.role is not Role.chef:
            return self
        missing = []
        if self.experience is None:
            missing.append("experience")
        if not self.specialties:
            missing.append("specialties")
        if not self.kitchen_address:
            missing.append("kitchenAddress")
        if missing:
            raise ValueError(f"Chef accounts require: {', '.join(missing)}")
        return self

    def to_wire(self) -> dict[str, Any]:
        """
        Signup body for the credential store: common fields plus the role's own fields.
        """

        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            include=_COMMON_SIGNUP_FIELDS | _ROLE_SIGNUP_FIELDS[self.role],
        )


def describe_validation_error(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        msg = str(err["msg"]).removeprefix("Value error, ")
        loc = ".".join(str(p) for p in err["loc"])
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


def validate_signup(user_data: Mapping[str, Any] | SignupRequest) -> SignupRequest:
    if isinstance(user_data, SignupRequest):
        return user_data
    try:
        return SignupRequest.model_validate(dict(user_data))
    except PydanticValidationError as e:
        raise ValidationError(describe_validation_error(e)) from e


def validate_profile_patch(patch: Mapping[str, Any]) -> dict[str, Any]:
    """
    Check a partial profile update (wire keys) before it is sent.

    Empty placeholders (`None`, `""`) are allowed for numeric fields; they simply
    never win during reconciliation.
    """

    if not isinstance(patch, Mapping):
        raise ValidationError("Profile update must be an object")

    read_only = sorted(patch.keys() & READ_ONLY_PROFILE_FIELDS)
    if read_only:
        raise ValidationError(f"Read-only fields cannot be updated: {', '.join(read_only)}")

    for name in NUMERIC_PROFILE_FIELDS:
        value = patch.get(name)
        if value is None or value == "":
            continue
        if coerce_number(value) is None:
            raise ValidationError(f"{name} must be a number")

    prefs = patch.get("preferences")
    if prefs is not None:
        if not isinstance(prefs, Mapping):
            raise ValidationError("preferences must be an object")
        spice = prefs.get("spiceLevel")
        if spice not in (None, "") and coerce_spice_level(spice) is None:
            raise ValidationError("spiceLevel must be one of mild, medium, hot")

    return dict(patch)
