from typing import Dict, List, Optional
import uuid

from database import BaseRepository
from models.lease_contract import LeaseContract, LeaseStatus, OriginCityLeaseTotal


class LeaseContractRepository(BaseRepository):
    """Repository for LeaseContract entity operations"""

    def create(self, contract: LeaseContract) -> Optional[LeaseContract]:
        """Create a new lease contract node with a freshly assigned id"""
        query = """
        CREATE (lc:LeaseContract {
            id: $id,
            truckNumber: $truckNumber,
            lesseeName: $lesseeName,
            originCity: $originCity,
            destinationCity: $destinationCity,
            leaseAmount: $leaseAmount,
            startDate: $startDate,
            endDate: $endDate,
            status: $status
        })
        RETURN lc
        """

        params = self._to_params(contract)
        params['id'] = str(uuid.uuid4())

        result = self.execute_write(query, params)
        return LeaseContract.model_validate(result[0]['lc']) if result else None

    def get_all(self) -> List[LeaseContract]:
        """Get all lease contracts in store order"""
        query = """
        MATCH (lc:LeaseContract)
        RETURN lc
        """
        result = self.execute_query(query)
        return [LeaseContract.model_validate(record['lc']) for record in result]

    def get_by_id(self, contract_id: str) -> Optional[LeaseContract]:
        """Get a lease contract by its store-assigned id"""
        query = """
        MATCH (lc:LeaseContract {id: $id})
        RETURN lc
        """
        result = self.execute_query(query, {"id": contract_id})
        return LeaseContract.model_validate(result[0]['lc']) if result else None

    def update(self, contract_id: str, contract: LeaseContract) -> Optional[LeaseContract]:
        """Replace every stored field of a lease contract.

        The path id always wins over an id carried in the payload. Replacing
        an id that does not exist yet stores it as a new contract.
        """
        query = """
        MERGE (lc:LeaseContract {id: $id})
        SET lc = $props
        RETURN lc
        """

        props = self._to_params(contract)
        props['id'] = contract_id

        result = self.execute_write(query, {"id": contract_id, "props": props})
        return LeaseContract.model_validate(result[0]['lc']) if result else None

    def delete(self, contract_id: str) -> bool:
        """Delete a lease contract by id"""
        query = """
        MATCH (lc:LeaseContract {id: $id})
        DETACH DELETE lc
        RETURN count(lc) as deleted
        """
        result = self.execute_write(query, {"id": contract_id})
        return result[0]['deleted'] > 0 if result else False

    def find_by_status(self, status: str) -> List[LeaseContract]:
        """Get lease contracts with exactly this status"""
        query = """
        MATCH (lc:LeaseContract {status: $status})
        RETURN lc
        """
        result = self.execute_query(query, {"status": status})
        return [LeaseContract.model_validate(record['lc']) for record in result]

    def search(self, keyword: str) -> List[LeaseContract]:
        """Find contracts whose lessee or destination city matches the keyword, ignoring case"""
        query = """
        MATCH (lc:LeaseContract)
        WHERE lc.lesseeName =~ $pattern OR lc.destinationCity =~ $pattern
        RETURN lc
        """
        result = self.search_query(query, keyword)
        return [LeaseContract.model_validate(record['lc']) for record in result]

    def update_status(self, contract_id: str, status: str) -> bool:
        """Set the status field. Any string is accepted."""
        return self._set_field(contract_id, "status", status)

    def update_amount(self, contract_id: str, amount: float) -> bool:
        """Set the lease amount field"""
        return self._set_field(contract_id, "leaseAmount", amount)

    def activate(self, contract_id: str) -> bool:
        """Mark a contract ACTIVE whatever its current status"""
        return self._set_field(contract_id, "status", LeaseStatus.ACTIVE.value)

    def total_lease_by_origin_city(self) -> List[OriginCityLeaseTotal]:
        """Sum lease amounts and count contracts per origin city"""
        query = """
        MATCH (lc:LeaseContract)
        RETURN
            lc.originCity as originCity,
            sum(lc.leaseAmount) as totalLease,
            count(lc) as contractsCount
        """
        result = self.execute_query(query)
        return [OriginCityLeaseTotal.model_validate(record) for record in result]

    def _set_field(self, contract_id: str, field: str, value) -> bool:
        # field is always one of the literals passed by the public methods
        query = f"""
        MATCH (lc:LeaseContract {{id: $id}})
        SET lc.{field} = $value
        RETURN count(lc) as matched
        """
        result = self.execute_write(query, {"id": contract_id, "value": value})
        return result[0]['matched'] > 0 if result else False

    @staticmethod
    def _to_params(contract: LeaseContract) -> Dict:
        # Convert dates to strings for Neo4j
        params = contract.model_dump(by_alias=True)
        if params.get('startDate'):
            params['startDate'] = params['startDate'].isoformat()
        if params.get('endDate'):
            params['endDate'] = params['endDate'].isoformat()
        return params
