import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from database import InvalidKeywordError, Neo4jConnection, get_db
from models.lease_contract import LeaseContract, OriginCityLeaseTotal
from repositories.lease_contract_repository import LeaseContractRepository

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/contracts",
    tags=["lease-contracts"],
    responses={404: {"description": "Lease contract not found"}}
)


def get_lease_contract_repository(db: Neo4jConnection = Depends(get_db)) -> LeaseContractRepository:
    """FastAPI dependency: a lease contract repository bound to the app connection"""
    return LeaseContractRepository(db)


def _not_found(contract_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Lease contract with id {contract_id} not found"
    )


@router.post("", response_model=LeaseContract, status_code=status.HTTP_201_CREATED)
def create_lease_contract(
    contract: LeaseContract,
    repo: LeaseContractRepository = Depends(get_lease_contract_repository)
):
    """Create a new lease contract. The store assigns its id."""
    result = repo.create(contract)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create lease contract"
        )

    logger.info(f"Created lease contract {result.id} for truck {result.truck_number}")
    return result


@router.get("", response_model=List[LeaseContract])
def get_lease_contracts(repo: LeaseContractRepository = Depends(get_lease_contract_repository)):
    """Get all lease contracts"""
    return repo.get_all()


@router.get("/status", response_model=List[LeaseContract])
def get_lease_contracts_by_status(
    status_value: str = Query(..., alias="status", description="Exact status to match"),
    repo: LeaseContractRepository = Depends(get_lease_contract_repository)
):
    """Get lease contracts with a given status"""
    return repo.find_by_status(status_value)


@router.get("/search", response_model=List[LeaseContract])
def search_lease_contracts(
    keyword: str = Query(..., description="Case-insensitive pattern matched against lessee and destination city"),
    repo: LeaseContractRepository = Depends(get_lease_contract_repository)
):
    """Search lease contracts by lessee name or destination city"""
    try:
        return repo.search(keyword)
    except InvalidKeywordError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/totalLeaseByOriginCity", response_model=List[OriginCityLeaseTotal])
def total_lease_by_origin_city(repo: LeaseContractRepository = Depends(get_lease_contract_repository)):
    """Get total lease amount and contract count per origin city"""
    return repo.total_lease_by_origin_city()


@router.get("/{contract_id}", response_model=LeaseContract)
def get_lease_contract(
    contract_id: str,
    repo: LeaseContractRepository = Depends(get_lease_contract_repository)
):
    """Get a lease contract by id"""
    contract = repo.get_by_id(contract_id)
    if not contract:
        raise _not_found(contract_id)
    return contract


@router.put("/{contract_id}", response_model=LeaseContract)
def replace_lease_contract(
    contract_id: str,
    contract: LeaseContract,
    repo: LeaseContractRepository = Depends(get_lease_contract_repository)
):
    """Replace a lease contract. The path id overrides any id in the body."""
    result = repo.update(contract_id, contract)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update lease contract"
        )

    logger.info(f"Replaced lease contract {contract_id}")
    return result


@router.delete("/{contract_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_lease_contract(
    contract_id: str,
    repo: LeaseContractRepository = Depends(get_lease_contract_repository)
):
    """Delete a lease contract"""
    if not repo.delete(contract_id):
        raise _not_found(contract_id)

    logger.info(f"Deleted lease contract {contract_id}")
    return None


@router.patch("/{contract_id}/status", status_code=status.HTTP_204_NO_CONTENT)
def update_lease_contract_status(
    contract_id: str,
    status_value: str = Query(..., alias="status", description="New status"),
    repo: LeaseContractRepository = Depends(get_lease_contract_repository)
):
    """Update only the status of a lease contract"""
    if not repo.update_status(contract_id, status_value):
        raise _not_found(contract_id)

    logger.info(f"Lease contract {contract_id} status set to {status_value}")
    return None


@router.patch("/{contract_id}/amount", status_code=status.HTTP_204_NO_CONTENT)
def update_lease_contract_amount(
    contract_id: str,
    amount: float = Query(..., description="New lease amount"),
    repo: LeaseContractRepository = Depends(get_lease_contract_repository)
):
    """Update only the lease amount of a lease contract"""
    if not repo.update_amount(contract_id, amount):
        raise _not_found(contract_id)

    logger.info(f"Lease contract {contract_id} amount set to {amount}")
    return None


@router.post("/{contract_id}/activate", status_code=status.HTTP_204_NO_CONTENT)
def activate_lease_contract(
    contract_id: str,
    repo: LeaseContractRepository = Depends(get_lease_contract_repository)
):
    """Mark a lease contract ACTIVE regardless of its current status"""
    if not repo.activate(contract_id):
        raise _not_found(contract_id)

    logger.info(f"Activated lease contract {contract_id}")
    return None
