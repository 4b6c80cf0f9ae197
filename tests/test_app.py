from datetime import datetime

from app import create_app
from models import Expense, db

USER = {"X-User-Id": "user-1"}
OTHER_USER = {"X-User-Id": "user-2"}


def add_expense(client, headers=USER, **payload):
    body = {"amount": 100, "category": "Misc"}
    body.update(payload)
    response = client.post("/api/expenses", json=body, headers=headers)
    assert response.status_code == 201
    return response.get_json()


def test_requests_without_user_are_rejected(client):
    response = client.get("/api/stats")

    assert response.status_code == 401
    assert response.get_json() == {"message": "Unauthorized"}


def test_default_user_from_config(app, client):
    app.config["DEFAULT_USER_ID"] = "local"

    response = client.get("/api/stats")

    assert response.status_code == 200


def test_home_redirects_to_stats(client):
    response = client.get("/")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/api/stats")


def test_parse_upi_endpoint(client):
    response = client.post(
        "/api/expenses/parse-upi",
        json={"message": "Paid Rs. 250 to Zomato via UPI"},
        headers=USER,
    )

    assert response.status_code == 200
    data = response.get_json()
    assert data["amount"] == 250
    assert data["category"] == "Food"
    assert data["note"] == "Paid to Zomato"
    assert data["originalMessage"] == "Paid Rs. 250 to Zomato via UPI"


def test_parse_upi_accepts_empty_message(client):
    response = client.post("/api/expenses/parse-upi", json={"message": ""}, headers=USER)

    assert response.status_code == 200
    assert response.get_json()["category"] == "Misc"


def test_parse_upi_rejects_missing_message(client):
    response = client.post("/api/expenses/parse-upi", json={"text": "hi"}, headers=USER)

    assert response.status_code == 400
    assert response.get_json()["field"] == "message"


def test_create_expense_and_read_back(client):
    created = add_expense(
        client,
        amount=250,
        category="Food",
        note="Paid to Zomato",
        paymentType="upi",
        date="2025-02-10T13:00:00",
        rawMessage="Paid Rs. 250 to Zomato via UPI",
    )

    assert created["userId"] == "user-1"
    assert created["paymentType"] == "upi"
    assert created["date"] == "2025-02-10T13:00:00"

    response = client.get(f"/api/expenses/{created['id']}", headers=USER)
    assert response.status_code == 200
    assert response.get_json() == created


def test_create_expense_validation_error(client):
    response = client.post(
        "/api/expenses", json={"amount": -1, "category": "Food"}, headers=USER
    )

    assert response.status_code == 400
    assert response.get_json() == {
        "message": "Input should be greater than 0",
        "field": "amount",
    }


def test_expense_of_another_user_is_forbidden(client):
    created = add_expense(client)

    assert client.get(f"/api/expenses/{created['id']}", headers=OTHER_USER).status_code == 403
    assert client.delete(f"/api/expenses/{created['id']}", headers=OTHER_USER).status_code == 403


def test_missing_expense(client):
    response = client.get("/api/expenses/999", headers=USER)

    assert response.status_code == 404
    assert response.get_json() == {"message": "Expense not found"}


def test_stats_are_scoped_to_user(client):
    add_expense(client, amount=100, category="Entertainment")
    add_expense(client, amount=200, category="Food")
    add_expense(client, headers=OTHER_USER, amount=999, category="Travel")

    data = client.get("/api/stats", headers=USER).get_json()

    assert data["totalSpent"] == 300
    assert [stat["category"] for stat in data["categoryStats"]] == ["Food", "Entertainment"]
    assert [insight["id"] for insight in data["insights"]] == ["impulsive-entertainment", "high-food"]
    assert len(data["recentExpenses"]) == 2


def test_stats_reflect_deletes_immediately(client):
    food = add_expense(client, amount=200, category="Food")
    add_expense(client, amount=100, category="Travel")

    before = client.get("/api/stats", headers=USER).get_json()
    assert before["totalSpent"] == 300

    response = client.delete(f"/api/expenses/{food['id']}", headers=USER)
    assert response.status_code == 204

    after = client.get("/api/stats", headers=USER).get_json()
    assert after["totalSpent"] == 100
    assert after["insights"][0]["id"] == "good-job"


def test_stats_use_full_ledger_for_recent_expenses(app, client):
    with app.app_context():
        for day in range(1, 9):
            db.session.add(Expense(
                user_id="user-1",
                amount=10,
                category="Essentials",
                date=datetime(2025, 4, day),
            ))
        db.session.commit()

    data = client.get("/api/stats", headers=USER).get_json()

    assert data["totalSpent"] == 80
    assert [e["date"][:10] for e in data["recentExpenses"]] == [
        "2025-04-08", "2025-04-07", "2025-04-06", "2025-04-05", "2025-04-04",
    ]
    assert data["monthlyStats"] == [{"month": "Apr", "total": 80}]


def test_parse_upi_overflowing_amount_is_valid_json(client):
    response = client.post(
        "/api/expenses/parse-upi",
        json={"message": "Paid Rs " + "9" * 400 + " to Amit"},
        headers=USER,
    )

    assert response.status_code == 200
    assert b"Infinity" not in response.data
    assert response.get_json()["amount"] == 0


def test_create_app_makes_sqlite_directory(tmp_path):
    database = tmp_path / "nested" / "data" / "expense.db"

    create_app({"SQLALCHEMY_DATABASE_URI": f"sqlite:///{database}", "LOG_LEVEL": "WARNING"})

    assert database.parent.is_dir()
    assert database.exists()
