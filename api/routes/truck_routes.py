import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from database import InvalidKeywordError, Neo4jConnection, get_db
from models.truck import CityTruckSummary, Truck, TruckProjection
from repositories.truck_repository import TruckRepository

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/trucks",
    tags=["trucks"],
    responses={404: {"description": "Truck not found"}}
)


def get_truck_repository(db: Neo4jConnection = Depends(get_db)) -> TruckRepository:
    """FastAPI dependency: a truck repository bound to the app connection"""
    return TruckRepository(db)


@router.post("", response_model=Truck, status_code=status.HTTP_201_CREATED)
def create_truck(truck: Truck, repo: TruckRepository = Depends(get_truck_repository)):
    """Create a new truck. The store assigns its id."""
    result = repo.create(truck)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create truck"
        )

    logger.info(f"Created truck {result.truck_number} with id {result.id}")
    return result


@router.get("", response_model=List[Truck])
def get_trucks(repo: TruckRepository = Depends(get_truck_repository)):
    """Get all trucks"""
    return repo.get_all()


@router.get("/available", response_model=List[Truck])
def get_available_trucks(
    city: str = Query(..., description="City the truck must currently be in"),
    repo: TruckRepository = Depends(get_truck_repository)
):
    """Get available trucks in a city"""
    return repo.find_available(city)


@router.get("/search", response_model=List[Truck])
def search_trucks(
    keyword: str = Query(..., description="Case-insensitive pattern matched against truck number and type"),
    repo: TruckRepository = Depends(get_truck_repository)
):
    """Search trucks by truck number or type"""
    try:
        return repo.search(keyword)
    except InvalidKeywordError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/sort", response_model=List[Truck])
def sort_trucks_by_capacity(
    desc: bool = Query(False, description="Sort from largest to smallest capacity"),
    repo: TruckRepository = Depends(get_truck_repository)
):
    """Get all trucks sorted by capacity"""
    return repo.sort_by_capacity(descending=desc)


@router.get("/page", response_model=List[Truck])
def paginate_trucks(
    page: int = Query(..., ge=1, description="Page number, starting at 1"),
    size: int = Query(..., ge=1, le=1000, description="Number of trucks per page"),
    repo: TruckRepository = Depends(get_truck_repository)
):
    """Get one page of trucks"""
    return repo.paginate(page, size)


@router.get("/projected", response_model=List[TruckProjection])
def get_projected_trucks(repo: TruckRepository = Depends(get_truck_repository)):
    """Get all trucks with only id, truck number, type and availability"""
    return repo.projected()


@router.get("/capacity", response_model=List[Truck])
def get_trucks_above_capacity(
    min_tons: float = Query(..., alias="minTons", description="Exclusive lower bound on capacity"),
    repo: TruckRepository = Depends(get_truck_repository)
):
    """Get trucks with capacity above a threshold"""
    return repo.above_capacity(min_tons)


@router.get("/groupByCity", response_model=List[CityTruckSummary])
def group_trucks_by_city(repo: TruckRepository = Depends(get_truck_repository)):
    """Get truck count and total capacity per city"""
    return repo.group_by_city()


@router.get("/{truck_id}", response_model=Truck)
def get_truck(truck_id: str, repo: TruckRepository = Depends(get_truck_repository)):
    """Get a truck by id"""
    truck = repo.get_by_id(truck_id)
    if not truck:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Truck with id {truck_id} not found"
        )
    return truck


@router.delete("/{truck_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_truck(truck_id: str, repo: TruckRepository = Depends(get_truck_repository)):
    """Delete a truck"""
    success = repo.delete(truck_id)
    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Truck with id {truck_id} not found"
        )

    logger.info(f"Deleted truck {truck_id}")
    return None


@router.patch("/{truck_number}/city", status_code=status.HTTP_204_NO_CONTENT)
def update_truck_city(
    truck_number: str,
    city: str = Query(..., description="New current city"),
    repo: TruckRepository = Depends(get_truck_repository)
):
    """Update a truck's current city by truck number"""
    if not repo.update_city(truck_number, city):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Truck with number {truck_number} not found"
        )

    logger.info(f"Truck {truck_number} moved to {city}")
    return None


@router.patch("/{truck_number}/availability", status_code=status.HTTP_204_NO_CONTENT)
def update_truck_availability(
    truck_number: str,
    available: bool = Query(..., description="New availability"),
    repo: TruckRepository = Depends(get_truck_repository)
):
    """Update a truck's availability by truck number"""
    if not repo.update_availability(truck_number, available):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Truck with number {truck_number} not found"
        )

    logger.info(f"Truck {truck_number} availability set to {available}")
    return None
