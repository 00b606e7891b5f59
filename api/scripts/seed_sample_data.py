#!/usr/bin/env python3
"""
Seed the database with random trucks and lease contracts.

Contracts reference truck numbers of the trucks generated in the same run.
Every run creates new records; nothing is deleted.
"""

import sys
import random
from pathlib import Path
from datetime import date, timedelta
from typing import List
import logging

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from config import settings
from database import Neo4jConnection
from models.lease_contract import LeaseContract, LeaseStatus
from models.truck import Truck
from repositories.lease_contract_repository import LeaseContractRepository
from repositories.truck_repository import TruckRepository

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

CITIES = ["Chicago", "Houston", "Phoenix", "Atlanta", "Miami", "Dallas", "Los Angeles", "Denver", "Seattle"]

# (type, min capacity, max capacity) in tons
TRUCK_TYPES = [
    ("Flatbed", 10.0, 24.0),
    ("Refrigerated", 8.0, 20.0),
    ("Container", 15.0, 30.0),
    ("Tanker", 12.0, 28.0),
    ("Box", 3.0, 12.0),
]

OWNERS = ["Swift Hauling LLC", "Eagle Freight Inc", "Prime Transport Corp", "Liberty Lines", "Rapid Carriers"]
LESSEES = ["Acme Freight", "Northwind Traders", "Blue Ridge Produce", "Summit Builders", "Harbor Imports"]


def generate_trucks(count: int) -> List[Truck]:
    """Generate trucks with unique truck numbers"""
    trucks = []
    for i in range(count):
        truck_type, low, high = random.choice(TRUCK_TYPES)
        trucks.append(Truck(
            truck_number=f"TRK-{1000 + i}",
            type=truck_type,
            capacity_tons=round(random.uniform(low, high), 1),
            owner_company=random.choice(OWNERS),
            current_city=random.choice(CITIES),
            available=random.random() > 0.3
        ))
    return trucks


def generate_contracts(count: int, truck_numbers: List[str]) -> List[LeaseContract]:
    """Generate lease contracts for the given truck numbers"""
    contracts = []
    today = date.today()
    for _ in range(count):
        start = today - timedelta(days=random.randint(0, 365))
        origin, destination = random.sample(CITIES, 2)
        contracts.append(LeaseContract(
            truck_number=random.choice(truck_numbers),
            lessee_name=random.choice(LESSEES),
            origin_city=origin,
            destination_city=destination,
            lease_amount=round(random.uniform(500, 15000), 2),
            start_date=start,
            end_date=start + timedelta(days=random.randint(1, 90)),
            status=random.choice(list(LeaseStatus)).value
        ))
    return contracts


def main():
    """Main entry point for the seed script."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Insert random trucks and lease contracts"
    )
    parser.add_argument(
        "--trucks",
        type=int,
        default=20,
        help="Number of trucks to create (default: 20)"
    )
    parser.add_argument(
        "--contracts",
        type=int,
        default=40,
        help="Number of lease contracts to create (default: 40)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible data"
    )
    args = parser.parse_args()

    if args.trucks < 1 and args.contracts > 0:
        parser.error("--contracts needs at least one truck to reference")

    random.seed(args.seed)

    db = Neo4jConnection(settings)
    try:
        if not db.verify_connectivity():
            logger.error("Cannot connect to Neo4j database")
            sys.exit(1)

        truck_repo = TruckRepository(db)
        contract_repo = LeaseContractRepository(db)

        trucks = generate_trucks(args.trucks)
        for truck in trucks:
            truck_repo.create(truck)
        logger.info(f"Created {len(trucks)} trucks")

        contracts = generate_contracts(args.contracts, [t.truck_number for t in trucks])
        for contract in contracts:
            contract_repo.create(contract)
        logger.info(f"Created {len(contracts)} lease contracts")
    finally:
        db.close()


if __name__ == "__main__":
    main()
