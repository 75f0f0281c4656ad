"""
Tests for trip, expense and settlement endpoints.
"""
from decimal import Decimal
from tripsplit.api.dependencies import get_trip_store
from tripsplit.main import app
from tripsplit.services.trip_store import TripStore


def create_trip_with(client, *names, currency="EUR"):
    response = client.post("/api/trips", json={"name": "Spain 2025", "currency": currency})
    assert response.status_code == 201
    trip = response.json()
    for name in names:
        response = client.post(f"/api/trips/{trip['id']}/participants", json={"name": name})
        assert response.status_code == 201
        trip = response.json()
    return trip


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_create_and_list_trips(client):
    trip = create_trip_with(client)
    assert trip["currency"] == "EUR"
    assert trip["participants"] == []

    response = client.get("/api/trips")
    assert response.status_code == 200
    assert [t["id"] for t in response.json()] == [trip["id"]]


def test_blank_trip_name_is_rejected(client):
    response = client.post("/api/trips", json={"name": "   "})
    assert response.status_code == 400


def test_unknown_trip_returns_404(client):
    assert client.get("/api/trips/missing").status_code == 404
    assert client.get("/api/trips/missing/settlement").status_code == 404


def test_expense_flow_and_settlement(client):
    trip = create_trip_with(client, "Ana", "Ben", "Cleo")
    ana, ben, cleo = [p["id"] for p in trip["participants"]]

    response = client.post(
        f"/api/trips/{trip['id']}/expenses",
        json={"description": "Dinner", "amount": "90.00", "payer_id": ana}
    )
    assert response.status_code == 201
    expense = response.json()["expenses"][0]
    assert expense["payer_name"] == "Ana"
    assert expense["consumer_ids"] == [ana, ben, cleo]
    assert Decimal(expense["share_amount"]) == Decimal("30")

    balances = client.get(f"/api/trips/{trip['id']}/balances").json()["balances"]
    assert [(b["name"], Decimal(b["net"])) for b in balances] == [
        ("Ana", Decimal(60)), ("Ben", Decimal(-30)), ("Cleo", Decimal(-30))
    ]

    settlement = client.get(f"/api/trips/{trip['id']}/settlement").json()
    assert [
        (t["from_name"], t["to_name"], Decimal(t["amount"])) for t in settlement["transfers"]
    ] == [("Ben", "Ana", Decimal(30)), ("Cleo", "Ana", Decimal(30))]
    assert Decimal(settlement["total_expenses"]) == Decimal(90)

    totals = client.get(f"/api/trips/{trip['id']}/totals").json()
    assert Decimal(totals["total"]) == Decimal(90)
    assert Decimal(totals["by_person"][ana]) == Decimal(90)
    assert Decimal(totals["by_person"][ben]) == Decimal(0)


def test_invalid_expense(client):
    trip = create_trip_with(client, "Ana")
    ana = trip["participants"][0]["id"]

    response = client.post(
        f"/api/trips/{trip['id']}/expenses",
        json={"description": "Dinner", "amount": "-1", "payer_id": ana}
    )
    assert response.status_code == 400

    response = client.post(
        f"/api/trips/{trip['id']}/expenses",
        json={"description": "Dinner", "amount": "1.001", "payer_id": ana}
    )
    assert response.status_code == 422


def test_delete_expense_settles_trip(client):
    trip = create_trip_with(client, "Ana", "Ben")
    ana = trip["participants"][0]["id"]
    trip = client.post(
        f"/api/trips/{trip['id']}/expenses",
        json={"description": "Taxi", "amount": "20", "payer_id": ana}
    ).json()

    response = client.delete(f"/api/trips/{trip['id']}/expenses/{trip['expenses'][0]['id']}")
    assert response.status_code == 200
    assert response.json()["expenses"] == []
    assert client.get(f"/api/trips/{trip['id']}/settlement").json()["transfers"] == []


def test_remove_participant_cascades(client):
    trip = create_trip_with(client, "Ana", "Ben")
    ana, ben = [p["id"] for p in trip["participants"]]
    client.post(
        f"/api/trips/{trip['id']}/expenses",
        json={"description": "Taxi", "amount": "20", "payer_id": ana}
    )

    orphans = client.get(f"/api/trips/{trip['id']}/participants/{ben}/orphans").json()
    assert len(orphans["expense_ids"]) == 1
    assert Decimal(orphans["total_amount"]) == Decimal(20)

    response = client.delete(f"/api/trips/{trip['id']}/participants/{ben}")
    assert response.status_code == 200
    assert [p["name"] for p in response.json()["participants"]] == ["Ana"]
    assert response.json()["expenses"] == []


def test_remove_participant_rejected(client, db):
    def reject_store():
        return TripStore(db, removal_policy="reject")

    trip = create_trip_with(client, "Ana", "Ben")
    ana, ben = [p["id"] for p in trip["participants"]]
    client.post(
        f"/api/trips/{trip['id']}/expenses",
        json={"description": "Taxi", "amount": "20", "payer_id": ana}
    )

    app.dependency_overrides[get_trip_store] = reject_store
    response = client.delete(f"/api/trips/{trip['id']}/participants/{ben}")
    assert response.status_code == 409
    assert len(response.json()["detail"]["expense_ids"]) == 1


def test_update_and_delete_trip(client):
    trip = create_trip_with(client, "Ana")
    response = client.patch(f"/api/trips/{trip['id']}", json={"name": "Porto"})
    assert response.status_code == 200
    assert response.json()["name"] == "Porto"

    assert client.delete(f"/api/trips/{trip['id']}").status_code == 204
    assert client.get(f"/api/trips/{trip['id']}").status_code == 404


def test_balances_endpoint_rounds_uneven_split(client):
    trip = create_trip_with(client, "Ana", "Ben", "Cleo")
    ana = trip["participants"][0]["id"]
    client.post(
        f"/api/trips/{trip['id']}/expenses",
        json={"description": "Hotel", "amount": "100", "payer_id": ana}
    )

    response = client.get(f"/api/trips/{trip['id']}/balances")
    assert response.status_code == 200
    assert [Decimal(b["net"]) for b in response.json()["balances"]] == [
        Decimal("66.67"), Decimal("-33.33"), Decimal("-33.33")
    ]
