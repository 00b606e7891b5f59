from typing import List, Optional
import uuid

from database import BaseRepository
from models.truck import CityTruckSummary, Truck, TruckProjection


class TruckRepository(BaseRepository):
    """Repository for Truck entity operations"""

    def create(self, truck: Truck) -> Optional[Truck]:
        """Create a new truck node with a freshly assigned id"""
        query = """
        CREATE (t:Truck {
            id: $id,
            truckNumber: $truckNumber,
            type: $type,
            capacityTons: $capacityTons,
            ownerCompany: $ownerCompany,
            currentCity: $currentCity,
            available: $available
        })
        RETURN t
        """

        params = truck.model_dump(by_alias=True)
        params['id'] = str(uuid.uuid4())

        result = self.execute_write(query, params)
        return Truck.model_validate(result[0]['t']) if result else None

    def get_all(self) -> List[Truck]:
        """Get all trucks in store order"""
        query = """
        MATCH (t:Truck)
        RETURN t
        """
        result = self.execute_query(query)
        return [Truck.model_validate(record['t']) for record in result]

    def get_by_id(self, truck_id: str) -> Optional[Truck]:
        """Get a truck by its store-assigned id"""
        query = """
        MATCH (t:Truck {id: $id})
        RETURN t
        """
        result = self.execute_query(query, {"id": truck_id})
        return Truck.model_validate(result[0]['t']) if result else None

    def delete(self, truck_id: str) -> bool:
        """Delete a truck by id"""
        query = """
        MATCH (t:Truck {id: $id})
        DETACH DELETE t
        RETURN count(t) as deleted
        """
        result = self.execute_write(query, {"id": truck_id})
        return result[0]['deleted'] > 0 if result else False

    def find_available(self, city: str) -> List[Truck]:
        """Get available trucks currently in the given city"""
        query = """
        MATCH (t:Truck)
        WHERE t.available = true AND t.currentCity = $city
        RETURN t
        """
        result = self.execute_query(query, {"city": city})
        return [Truck.model_validate(record['t']) for record in result]

    def search(self, keyword: str) -> List[Truck]:
        """Find trucks whose number or type matches the keyword, ignoring case"""
        query = """
        MATCH (t:Truck)
        WHERE t.truckNumber =~ $pattern OR t.type =~ $pattern
        RETURN t
        """
        result = self.search_query(query, keyword)
        return [Truck.model_validate(record['t']) for record in result]

    def sort_by_capacity(self, descending: bool = False) -> List[Truck]:
        """Get all trucks ordered by capacity"""
        direction = "DESC" if descending else "ASC"
        query = f"""
        MATCH (t:Truck)
        RETURN t
        ORDER BY t.capacityTons {direction}
        """
        result = self.execute_query(query)
        return [Truck.model_validate(record['t']) for record in result]

    def paginate(self, page: int, size: int) -> List[Truck]:
        """Get one page of trucks in store order. Pages start at 1."""
        if page < 1 or size < 1:
            raise ValueError(f"page and size must be positive, got page={page}, size={size}")

        query = """
        MATCH (t:Truck)
        RETURN t
        SKIP $skip
        LIMIT $limit
        """
        params = {"skip": (page - 1) * size, "limit": size}
        result = self.execute_query(query, params)
        return [Truck.model_validate(record['t']) for record in result]

    def projected(self) -> List[TruckProjection]:
        """Get all trucks with only id, number, type and availability"""
        query = """
        MATCH (t:Truck)
        RETURN t {.id, .truckNumber, .type, .available} as t
        """
        result = self.execute_query(query)
        return [TruckProjection.model_validate(record['t']) for record in result]

    def above_capacity(self, min_tons: float) -> List[Truck]:
        """Get trucks with capacity strictly greater than min_tons"""
        query = """
        MATCH (t:Truck)
        WHERE t.capacityTons > $min_tons
        RETURN t
        """
        result = self.execute_query(query, {"min_tons": min_tons})
        return [Truck.model_validate(record['t']) for record in result]

    def update_city(self, truck_number: str, city: str) -> bool:
        """Move the first truck with this number to a new city"""
        return self._update_first(truck_number, "currentCity", city)

    def update_availability(self, truck_number: str, available: bool) -> bool:
        """Set availability on the first truck with this number"""
        return self._update_first(truck_number, "available", available)

    def group_by_city(self) -> List[CityTruckSummary]:
        """Count trucks and total their capacity per current city"""
        query = """
        MATCH (t:Truck)
        RETURN
            t.currentCity as city,
            count(t) as truckCount,
            sum(t.capacityTons) as totalCapacity
        """
        result = self.execute_query(query)
        return [CityTruckSummary.model_validate(record) for record in result]

    def _update_first(self, truck_number: str, field: str, value) -> bool:
        # field is always one of the literals passed by the public methods
        query = f"""
        MATCH (t:Truck {{truckNumber: $truck_number}})
        WITH t LIMIT 1
        SET t.{field} = $value
        RETURN count(t) as matched
        """
        result = self.execute_write(query, {"truck_number": truck_number, "value": value})
        return result[0]['matched'] > 0 if result else False
