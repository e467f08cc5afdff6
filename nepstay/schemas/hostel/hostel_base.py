"""
Hostel create/update schemas with field validation.
"""

import re
from typing import Any, Dict, List, Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from nepstay.schemas.common.base import BaseCreateSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "ContactInfoSchema",
    "LocationSchema",
    "HostelCreate",
    "HostelUpdate",
]

IMAGE_URL_RE = re.compile(r"^https?://.+$", re.IGNORECASE)
WHATSAPP_RE = re.compile(r"^(\+977)?[0-9]{10}$")
FACEBOOK_RE = re.compile(r"^https?://(www\.)?facebook\.com/.+$", re.IGNORECASE)
INSTAGRAM_RE = re.compile(r"^https?://(www\.)?instagram\.com/.+$", re.IGNORECASE)
WEBSITE_RE = re.compile(r"^https?://.+\..+$", re.IGNORECASE)
MAPS_EMBED_PREFIX = "https://www.google.com/maps/embed"

MAX_IMAGES = 10
MAX_FACILITIES = 20
MAX_FACILITY_LENGTH = 50


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ContactInfoSchema(BaseSchema):
    """Contact channels; every field optional, blanks are dropped."""

    phone: Optional[str] = Field(default=None, max_length=30)
    email: Optional[EmailStr] = None
    whatsapp: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    website: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def drop_blank(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v

    @field_validator("whatsapp")
    @classmethod
    def validate_whatsapp(cls, v: Optional[str]) -> Optional[str]:
        if v and not WHATSAPP_RE.match(re.sub(r"[\s-]", "", v)):
            raise ValueError("Please provide a valid WhatsApp number")
        return v

    @field_validator("facebook")
    @classmethod
    def validate_facebook(cls, v: Optional[str]) -> Optional[str]:
        if v and not FACEBOOK_RE.match(v):
            raise ValueError("Please provide a valid Facebook URL")
        return v

    @field_validator("instagram")
    @classmethod
    def validate_instagram(cls, v: Optional[str]) -> Optional[str]:
        if v and not INSTAGRAM_RE.match(v):
            raise ValueError("Please provide a valid Instagram URL")
        return v

    @field_validator("website")
    @classmethod
    def validate_website(cls, v: Optional[str]) -> Optional[str]:
        if v and not WEBSITE_RE.match(v):
            raise ValueError("Please provide a valid website URL")
        return v


class LocationSchema(BaseSchema):
    city: Optional[str] = Field(default=None, max_length=100)
    area: Optional[str] = Field(default=None, max_length=100)
    address: Optional[str] = Field(default=None, max_length=200)
    google_maps_url: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def drop_blank(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("google_maps_url")
    @classmethod
    def validate_maps_url(cls, v: Optional[str]) -> Optional[str]:
        if v and not v.startswith(MAPS_EMBED_PREFIX):
            raise ValueError("Please provide a valid Google Maps embed URL")
        return v


class HostelFieldsBase(BaseSchema):
    """Validators shared by create and update."""

    @field_validator("name", check_fields=False)
    @classmethod
    def normalize_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return " ".join(v.split())

    @field_validator("images", check_fields=False)
    @classmethod
    def validate_images(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        if len(v) > MAX_IMAGES:
            raise ValueError(f"Maximum {MAX_IMAGES} images allowed")
        for url in v:
            if not IMAGE_URL_RE.match(url):
                raise ValueError("Please provide a valid image URL")
        return v

    @field_validator("facilities", check_fields=False)
    @classmethod
    def clean_facilities(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        cleaned = [item.strip() for item in v if item and item.strip()]
        if len(cleaned) > MAX_FACILITIES:
            raise ValueError(f"Maximum {MAX_FACILITIES} facilities allowed")
        for item in cleaned:
            if len(item) > MAX_FACILITY_LENGTH:
                raise ValueError(f"Facility name cannot exceed {MAX_FACILITY_LENGTH} characters")
        return cleaned


class HostelCreate(HostelFieldsBase, BaseCreateSchema):
    """
    Payload for creating a hostel.

    The slug is generated from ``name`` and is not accepted from clients.
    """

    name: str = Field(..., min_length=1, max_length=100, examples=["Kathmandu Backpackers"])
    description: str = Field(..., min_length=1, max_length=2000)
    short_description: Optional[str] = Field(default=None, max_length=200)
    images: List[str] = Field(default_factory=list)
    price_per_night: float = Field(..., ge=0, examples=[1200])
    total_beds: int = Field(..., ge=1)
    contact_info: ContactInfoSchema = Field(default_factory=ContactInfoSchema)
    location: LocationSchema = Field(default_factory=LocationSchema)
    facilities: List[str] = Field(default_factory=list)
    featured: bool = False
    is_active: bool = True


class HostelUpdate(HostelFieldsBase, BaseUpdateSchema):
    """Partial update; at least one field must be present."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, min_length=1, max_length=2000)
    short_description: Optional[str] = Field(default=None, max_length=200)
    images: Optional[List[str]] = None
    price_per_night: Optional[float] = Field(default=None, ge=0)
    total_beds: Optional[int] = Field(default=None, ge=1)
    contact_info: Optional[ContactInfoSchema] = None
    location: Optional[LocationSchema] = None
    facilities: Optional[List[str]] = None
    featured: Optional[bool] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def require_one_field(self) -> "HostelUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self

    def to_changes(self) -> Dict[str, Any]:
        """
        Changed fields keyed by document path.

        Nested objects are flattened to dotted paths so a partial
        ``contactInfo`` or ``location`` keeps the sub-fields it did not send.
        """
        changes: Dict[str, Any] = {}
        for key, value in super().to_changes().items():
            if isinstance(value, dict):
                for sub_key, sub_value in value.items():
                    changes[f"{key}.{sub_key}"] = sub_value
            elif value is not None or key == "shortDescription":
                changes[key] = value
        return changes
