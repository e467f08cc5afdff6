"""
Hostel document model.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar, Dict, List, Optional

from nepstay.core.constants import HOSTELS_COLLECTION
from nepstay.models.base import BaseDocument
from nepstay.utils.datetime_utils import DateTimeHelper
from nepstay.utils.formatters import CurrencyFormatter


@dataclass
class ContactInfo:
    phone: Optional[str] = None
    email: Optional[str] = None
    whatsapp: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    website: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ContactInfo":
        data = data or {}
        return cls(**{key: data.get(key) for key in cls.__dataclass_fields__})


@dataclass
class Location:
    city: Optional[str] = None
    area: Optional[str] = None
    address: Optional[str] = None
    google_maps_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Location":
        data = data or {}
        return cls(
            city=data.get("city"),
            area=data.get("area"),
            address=data.get("address"),
            google_maps_url=data.get("googleMapsUrl"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "city": self.city,
            "area": self.area,
            "address": self.address,
            "googleMapsUrl": self.google_maps_url,
        }


@dataclass
class Hostel(BaseDocument):
    """A hostel listing as stored in the ``hostels`` collection."""

    __collection__: ClassVar[str] = HOSTELS_COLLECTION

    name: str = ""
    slug: str = ""
    description: str = ""
    short_description: Optional[str] = None
    images: List[str] = field(default_factory=list)
    price_per_night: float = 0
    total_beds: int = 1
    contact_info: ContactInfo = field(default_factory=ContactInfo)
    location: Location = field(default_factory=Location)
    facilities: List[str] = field(default_factory=list)
    featured: bool = False
    clicks: int = 0
    is_active: bool = True

    @classmethod
    def _decode_field(cls, name: str, value: Any) -> Any:
        if name == "contact_info":
            return ContactInfo.from_dict(value)
        if name == "location":
            return Location.from_dict(value)
        if name in ("images", "facilities"):
            return list(value or [])
        return value

    def _encode_field(self, name: str, value: Any) -> Any:
        if name == "contact_info":
            return asdict(value)
        if name == "location":
            return value.to_dict()
        return value

    @property
    def formatted_price(self) -> str:
        return CurrencyFormatter.format_npr(self.price_per_night)

    def to_public_dict(self) -> Dict[str, Any]:
        """Wire representation: camelCase keys, string id, derived fields."""
        data = self.to_document()
        data["id"] = self.id_str
        data["formattedPrice"] = self.formatted_price
        data["createdAt"] = DateTimeHelper.to_iso(self.created_at)
        data["updatedAt"] = DateTimeHelper.to_iso(self.updated_at)
        return data
