from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class LeaseStatus(str, Enum):
    """Conventional contract statuses. Stored values are not validated against these."""
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class LeaseContract(BaseModel):
    """Rental agreement binding a truck to a lessee for a date range.

    truck_number is a soft reference to Truck.truck_number; the store does
    not check that the truck exists. end_date is not checked against
    start_date.
    """

    # Identifiers
    id: Optional[str] = Field(None, description="Store-assigned identifier")
    truck_number: Optional[str] = Field(None, description="Truck number of the leased truck", example="TRK-1001")

    # Parties and Route
    lessee_name: Optional[str] = Field(None, description="Name of the lessee", example="Acme Freight")
    origin_city: Optional[str] = Field(None, description="Pickup city", example="Chicago")
    destination_city: Optional[str] = Field(None, description="Drop-off city", example="Denver")

    # Terms
    lease_amount: float = Field(0.0, ge=0, description="Total lease amount", example=4200.0)
    start_date: Optional[date] = Field(None, description="First day of the lease")
    end_date: Optional[date] = Field(None, description="Last day of the lease")

    # Status
    status: Optional[str] = Field(None, description="ACTIVE, COMPLETED or CANCELLED", example="ACTIVE")

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "truckNumber": "TRK-1001",
                "lesseeName": "Acme Freight",
                "originCity": "Chicago",
                "destinationCity": "Denver",
                "leaseAmount": 4200.0,
                "startDate": "2024-03-01",
                "endDate": "2024-03-15",
                "status": "ACTIVE"
            }
        }


class OriginCityLeaseTotal(BaseModel):
    """Lease amounts summed per origin city"""
    origin_city: Optional[str] = None
    total_lease: float
    contracts_count: int

    class Config:
        alias_generator = to_camel
        populate_by_name = True
