from bson import ObjectId

from jewelry_admin.config.settings import get_settings
from jewelry_admin.models.user import customer_tier, to_customer


def test_customer_tiers():
    assert customer_tier(0) == "Bronze"
    assert customer_tier(24999) == "Bronze"
    assert customer_tier(25000) == "Silver"
    assert customer_tier(50000) == "Gold"
    assert customer_tier(99999.99) == "Gold"
    assert customer_tier(100000) == "VIP"


def test_to_customer_strips_secrets():
    customer = to_customer({
        "firstName": "Meera",
        "lastName": None,
        "password": "hash",
        "passwordResetToken": "token",
        "stats": {"totalSpent": 60000},
    })

    assert "password" not in customer
    assert "passwordResetToken" not in customer
    assert customer["fullName"] == "Meera"
    assert customer["tier"] == "Gold"


def test_list_customers(client, seed):
    seed(
        "users",
        {"firstName": "Meera", "lastName": "Shah", "email": "meera@example.com", "role": "user",
         "password": "hash", "emailVerificationToken": "t", "stats": {"totalSpent": 120000}},
        {"firstName": "Ravi", "lastName": "Kumar", "email": "ravi@example.com", "role": "admin", "password": "hash"},
    )

    response = client.get("/api/admin/customers")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["pagination"]["totalCustomers"] == 2
    for customer in data["customers"]:
        assert "password" not in customer
        assert "emailVerificationToken" not in customer

    by_email = {customer["email"]: customer for customer in data["customers"]}
    assert by_email["meera@example.com"]["tier"] == "VIP"
    assert by_email["meera@example.com"]["fullName"] == "Meera Shah"
    assert by_email["ravi@example.com"]["tier"] == "Bronze"


def test_list_customers_search_and_role(client, seed):
    seed(
        "users",
        {"firstName": "Meera", "lastName": "Shah", "email": "meera@example.com", "role": "user"},
        {"firstName": "Ravi", "lastName": "Kumar", "email": "ravi@example.com", "role": "admin"},
    )

    data = client.get("/api/admin/customers", params={"search": "kumar"}).json()["data"]
    assert [customer["email"] for customer in data["customers"]] == ["ravi@example.com"]

    data = client.get("/api/admin/customers", params={"role": "user"}).json()["data"]
    assert [customer["email"] for customer in data["customers"]] == ["meera@example.com"]


def test_delete_customer(client, seed):
    [user_id] = seed("users", {"firstName": "Meera", "email": "meera@example.com"})

    assert client.delete("/api/admin/customers").status_code == 400
    assert client.delete("/api/admin/customers", params={"id": str(user_id)}).status_code == 200
    assert client.delete("/api/admin/customers", params={"id": str(user_id)}).status_code == 404
    assert client.delete("/api/admin/customers", params={"id": str(ObjectId())}).status_code == 404


def test_large_page_sizes_are_capped_not_rejected(client, seed, monkeypatch):
    monkeypatch.setattr(get_settings(), "max_page_size", 2)
    seed("users", *[{"email": f"user{i}@example.com"} for i in range(3)])

    response = client.get("/api/admin/customers", params={"limit": 1000})

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["customers"]) == 2
    assert data["pagination"]["totalPages"] == 2
    assert data["pagination"]["hasNext"] is True


def test_dashboard_page_size_fits_default_cap(client):
    assert get_settings().max_page_size >= 1000
    assert client.get("/api/admin/customers", params={"limit": 1000}).status_code == 200
