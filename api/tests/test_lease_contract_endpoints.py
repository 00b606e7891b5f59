import pytest
from datetime import date
from unittest.mock import Mock
from fastapi.testclient import TestClient

from main import app
from models.lease_contract import LeaseContract, OriginCityLeaseTotal
from repositories.lease_contract_repository import LeaseContractRepository
from routes.lease_contract_routes import get_lease_contract_repository
from database import InvalidKeywordError

client = TestClient(app)


@pytest.fixture
def repo():
    """Inject a mocked lease contract repository into the routes"""
    mock_repo = Mock(spec=LeaseContractRepository)
    app.dependency_overrides[get_lease_contract_repository] = lambda: mock_repo
    yield mock_repo
    app.dependency_overrides.clear()


def make_contract(**overrides):
    data = {
        "id": "c-1",
        "truck_number": "TRK-1001",
        "lessee_name": "Acme Freight",
        "origin_city": "Chicago",
        "destination_city": "Denver",
        "lease_amount": 4200.0,
        "start_date": date(2024, 3, 1),
        "end_date": date(2024, 3, 15),
        "status": "ACTIVE",
    }
    data.update(overrides)
    return LeaseContract(**data)


contract_payload = {
    "truckNumber": "TRK-1001",
    "lesseeName": "Acme Freight",
    "originCity": "Chicago",
    "destinationCity": "Denver",
    "leaseAmount": 4200.0,
    "startDate": "2024-03-01",
    "endDate": "2024-03-15",
    "status": "ACTIVE"
}


def test_create_lease_contract(repo):
    """Test creating a new lease contract"""
    repo.create.return_value = make_contract()

    response = client.post("/contracts", json=contract_payload)
    assert response.status_code == 201
    data = response.json()
    assert data["id"] == "c-1"
    assert data["startDate"] == "2024-03-01"
    assert data["leaseAmount"] == 4200.0

    sent = repo.create.call_args[0][0]
    assert sent.start_date == date(2024, 3, 1)


def test_create_lease_contract_invalid_date(repo):
    """Test a malformed date returns 422"""
    payload = dict(contract_payload, startDate="March first")

    response = client.post("/contracts", json=payload)
    assert response.status_code == 422
    repo.create.assert_not_called()


def test_get_lease_contracts(repo):
    """Test listing all contracts"""
    repo.get_all.return_value = [make_contract()]

    response = client.get("/contracts")
    assert response.status_code == 200
    assert response.json()[0]["lesseeName"] == "Acme Freight"


def test_get_lease_contract(repo):
    """Test getting a contract by id"""
    repo.get_by_id.return_value = make_contract()

    response = client.get("/contracts/c-1")
    assert response.status_code == 200
    assert response.json()["truckNumber"] == "TRK-1001"


def test_get_nonexistent_lease_contract(repo):
    """Test getting a non-existent contract returns 404"""
    repo.get_by_id.return_value = None

    response = client.get("/contracts/missing")
    assert response.status_code == 404
    assert "not found" in response.json()["detail"]


def test_replace_lease_contract(repo):
    """Test replacing a contract passes the path id"""
    repo.update.return_value = make_contract(lease_amount=5000.0)

    payload = dict(contract_payload, id="someone-else", leaseAmount=5000.0)
    response = client.put("/contracts/c-1", json=payload)
    assert response.status_code == 200
    assert response.json()["id"] == "c-1"

    contract_id, contract = repo.update.call_args[0]
    assert contract_id == "c-1"
    assert contract.lease_amount == 5000.0


def test_delete_lease_contract(repo):
    """Test deleting a contract"""
    repo.delete.return_value = True

    response = client.delete("/contracts/c-1")
    assert response.status_code == 204


def test_delete_nonexistent_lease_contract(repo):
    """Test deleting a non-existent contract returns 404"""
    repo.delete.return_value = False

    response = client.delete("/contracts/missing")
    assert response.status_code == 404


def test_find_by_status(repo):
    """Test the status filter is routed before the id lookup"""
    repo.find_by_status.return_value = [make_contract(status="COMPLETED")]

    response = client.get("/contracts/status", params={"status": "COMPLETED"})
    assert response.status_code == 200
    assert response.json()[0]["status"] == "COMPLETED"
    repo.find_by_status.assert_called_once_with("COMPLETED")
    repo.get_by_id.assert_not_called()


def test_search_lease_contracts(repo):
    """Test keyword search"""
    repo.search.return_value = []

    response = client.get("/contracts/search", params={"keyword": "acme"})
    assert response.status_code == 200
    repo.search.assert_called_once_with("acme")


def test_update_status(repo):
    """Test status update accepts any string"""
    repo.update_status.return_value = True

    response = client.patch("/contracts/c-1/status", params={"status": "ON_HOLD"})
    assert response.status_code == 204
    repo.update_status.assert_called_once_with("c-1", "ON_HOLD")


def test_update_amount(repo):
    """Test amount update parses the number"""
    repo.update_amount.return_value = True

    response = client.patch("/contracts/c-1/amount", params={"amount": "1250.75"})
    assert response.status_code == 204
    repo.update_amount.assert_called_once_with("c-1", 1250.75)


def test_update_amount_invalid_number(repo):
    """Test a non-numeric amount returns 422"""
    response = client.patch("/contracts/c-1/amount", params={"amount": "lots"})
    assert response.status_code == 422
    repo.update_amount.assert_not_called()


def test_update_amount_unknown_contract(repo):
    """Test updating an unknown contract returns 404"""
    repo.update_amount.return_value = False

    response = client.patch("/contracts/missing/amount", params={"amount": 10})
    assert response.status_code == 404


def test_total_lease_by_origin_city(repo):
    """Test aggregation serializes typed totals"""
    repo.total_lease_by_origin_city.return_value = [
        OriginCityLeaseTotal(origin_city="A", total_lease=150.0, contracts_count=2),
        OriginCityLeaseTotal(origin_city="B", total_lease=10.0, contracts_count=1),
    ]

    response = client.get("/contracts/totalLeaseByOriginCity")
    assert response.status_code == 200
    assert response.json() == [
        {"originCity": "A", "totalLease": 150.0, "contractsCount": 2},
        {"originCity": "B", "totalLease": 10.0, "contractsCount": 1},
    ]


def test_activate_lease_contract(repo):
    """Test activating a contract"""
    repo.activate.return_value = True

    response = client.post("/contracts/c-1/activate")
    assert response.status_code == 204
    repo.activate.assert_called_once_with("c-1")


def test_activate_nonexistent_lease_contract(repo):
    """Test activating an unknown contract returns 404"""
    repo.activate.return_value = False

    response = client.post("/contracts/missing/activate")
    assert response.status_code == 404


def test_create_status_only_contract_then_activate(repo):
    """Test a contract created with only a status can be activated"""
    repo.create.return_value = LeaseContract(id="c-9", status="CANCELLED")
    repo.activate.return_value = True

    response = client.post("/contracts", json={"status": "CANCELLED"})
    assert response.status_code == 201
    created = response.json()
    assert created["id"] == "c-9"
    assert created["truckNumber"] is None
    assert created["lesseeName"] is None

    sent = repo.create.call_args[0][0]
    assert sent.status == "CANCELLED"
    assert sent.truck_number is None

    response = client.post(f"/contracts/{created['id']}/activate")
    assert response.status_code == 204
    repo.activate.assert_called_once_with("c-9")


def test_replace_lease_contract_without_parties(repo):
    """Test a full replace does not require truck number or lessee"""
    repo.update.return_value = make_contract(truck_number=None, lessee_name=None)

    payload = {"originCity": "Chicago", "leaseAmount": 100.0}
    response = client.put("/contracts/c-1", json=payload)
    assert response.status_code == 200
    assert response.json()["truckNumber"] is None


def test_search_lease_contracts_invalid_keyword(repo):
    """Test a pattern the database rejects returns 400"""
    repo.search.side_effect = InvalidKeywordError("Invalid search keyword '(['")

    response = client.get("/contracts/search", params={"keyword": "(["})
    assert response.status_code == 400
