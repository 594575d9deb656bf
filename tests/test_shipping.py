from bson import ObjectId


def location_payload(**overrides):
    payload = {
        "zipCode": " 411001 ",
        "charges": "50",
        "priceLessThan": 999,
        "state": " Maharashtra ",
        "stateCode": "mh",
        "gstCode": "27",
    }
    payload.update(overrides)
    return payload


def test_create_location_normalises_values(client):
    response = client.post("/api/admin/shipping", json=location_payload())

    assert response.status_code == 201
    location = response.json()["data"]
    assert location["zipCode"] == "411001"
    assert location["state"] == "Maharashtra"
    assert location["stateCode"] == "MH"
    assert location["charges"] == 50
    assert location["isActive"] is True


def test_add_alias_and_duplicate_zip(client):
    assert client.post("/api/admin/shipping/add", json=location_payload()).status_code == 201

    response = client.post("/api/admin/shipping", json=location_payload(zipCode=411001))

    assert response.status_code == 400
    assert response.json()["message"] == "Zip code already exists"


def test_create_location_requires_fields(client):
    payload = location_payload()
    del payload["gstCode"]

    response = client.post("/api/admin/shipping", json=payload)

    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "gstCode", "message": "Field required"}]


def test_list_only_active_locations(client, seed):
    seed(
        "shippings",
        {"zipCode": "411001", "state": "Maharashtra", "isActive": True},
        {"zipCode": "400001", "state": "Maharashtra", "isActive": True},
        {"zipCode": "560001", "state": "Karnataka", "isActive": True},
        {"zipCode": "110001", "state": "Delhi", "isActive": False},
    )

    data = client.get("/api/admin/shipping").json()["data"]
    assert data["pagination"]["totalLocations"] == 3
    assert data["states"] == ["Karnataka", "Maharashtra"]

    data = client.get("/api/admin/shipping", params={"state": "maharashtra"}).json()["data"]
    assert {location["zipCode"] for location in data["locations"]} == {"411001", "400001"}

    data = client.get("/api/admin/shipping", params={"search": "5600"}).json()["data"]
    assert [location["zipCode"] for location in data["locations"]] == ["560001"]


def test_update_location(client):
    location_id = client.post("/api/admin/shipping", json=location_payload()).json()["data"]["_id"]

    response = client.put(f"/api/admin/shipping/{location_id}", json={"stateCode": " ka ", "charges": 0})

    assert response.status_code == 200
    location = response.json()["data"]
    assert location["stateCode"] == "KA"
    assert location["charges"] == 0
    assert client.put(f"/api/admin/shipping/{ObjectId()}", json={"charges": 1}).status_code == 404


def test_delete_location_and_state(client, seed):
    ids = seed(
        "shippings",
        {"zipCode": "411001", "state": "Maharashtra", "isActive": True},
        {"zipCode": "400001", "state": "Maharashtra", "isActive": True},
        {"zipCode": "560001", "state": "Karnataka", "isActive": True},
    )

    assert client.delete(f"/api/admin/shipping/{ids[2]}").status_code == 200
    assert client.delete(f"/api/admin/shipping/{ids[2]}").status_code == 404

    response = client.delete("/api/admin/shipping/state/Maharashtra")
    assert response.status_code == 200
    assert response.json()["data"] == {"deletedCount": 2}

    response = client.delete("/api/admin/shipping/state/Maharashtra")
    assert response.status_code == 404
    assert response.json()["message"] == "No shipping locations found for this state"
