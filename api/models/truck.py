from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class Truck(BaseModel):
    """Fleet vehicle stored in the Truck collection.

    The identifier is assigned by the repository on creation; any id sent
    in a request body is ignored.
    """

    # Identifiers
    id: Optional[str] = Field(None, description="Store-assigned identifier")
    truck_number: Optional[str] = Field(None, description="Business key used by callers for updates", example="TRK-1001")

    # Vehicle Information
    type: Optional[str] = Field(None, description="Free-form category", example="Flatbed")  # Flatbed, Refrigerated, Container...
    capacity_tons: float = Field(0.0, ge=0, description="Load capacity in tons", example=18.5)
    owner_company: Optional[str] = Field(None, description="Company owning the truck", example="Swift Hauling LLC")

    # Status
    current_city: Optional[str] = Field(None, description="City where the truck is parked", example="Chicago")
    available: bool = Field(False, description="Whether the truck can be leased")

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "truckNumber": "TRK-1001",
                "type": "Flatbed",
                "capacityTons": 18.5,
                "ownerCompany": "Swift Hauling LLC",
                "currentCity": "Chicago",
                "available": True
            }
        }


class TruckProjection(BaseModel):
    """Field-restricted truck read: identifier, number, type and availability."""
    id: Optional[str] = None
    truck_number: Optional[str] = None
    type: Optional[str] = None
    available: Optional[bool] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CityTruckSummary(BaseModel):
    """Trucks grouped by current city"""
    city: Optional[str] = None  # trucks without a city are grouped under null
    truck_count: int
    total_capacity: float

    class Config:
        alias_generator = to_camel
        populate_by_name = True
