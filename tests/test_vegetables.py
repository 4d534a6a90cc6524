"""Vegetable catalog API tests."""

from bson import ObjectId


def test_create_and_get_vegetable(client):
    response = client.post(
        "/vegetables",
        json={"name": "Tomato", "price": "25.5", "category": "fruits", "photo": "https://img/t.jpg"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Vegetable created"

    response = client.get(f"/vegetables/{data['id']}")
    assert response.status_code == 200
    veg = response.json()
    assert veg["id"] == data["id"]
    assert veg["name"] == "Tomato"
    assert veg["category"] == "fruits"
    assert veg["price"] == 25.5
    assert veg["photo"] == "https://img/t.jpg"
    assert veg["createdAt"] is not None


def test_create_defaults_photo(client):
    response = client.post("/vegetables", json={"name": "Mint", "price": 5, "category": "herb"})
    veg = client.get(f"/vegetables/{response.json()['id']}").json()
    assert veg["photo"] == ""


def test_create_vegetable_validation_errors(client):
    response = client.post("/vegetables", json={"name": " ", "price": 1, "category": "root"})
    assert response.status_code == 400
    assert response.json() == {"error": "Name is required and cannot be empty"}

    response = client.post("/vegetables", json={"name": "Beet", "price": -3, "category": "root"})
    assert response.status_code == 400
    assert response.json()["error"] == "Price must be a valid non-negative number"

    response = client.post("/vegetables", json={"name": "Beet", "price": 3, "category": "tuber"})
    assert response.status_code == 400
    assert response.json()["error"].startswith("Category must be one of: stem, root")


def test_create_vegetable_rejects_non_object_body(client):
    response = client.post("/vegetables", json=["Beet"])
    assert response.status_code == 400
    assert response.json() == {"error": "Request body must be a JSON object"}


def test_list_vegetables(client, make_vegetable):
    make_vegetable(name="Carrot")
    make_vegetable(name="Garlic", category="bulb")
    response = client.get("/vegetables")
    assert response.status_code == 200
    assert sorted(v["name"] for v in response.json()) == ["Carrot", "Garlic"]


def test_get_vegetable_bad_id_and_missing(client):
    response = client.get("/vegetables/not-an-id")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid ID format: Must be a 24-character hexadecimal string"}

    response = client.get(f"/vegetables/{ObjectId()}")
    assert response.status_code == 404
    assert response.json() == {"error": "Vegetable not found"}


def test_update_vegetable(client, vegetable_id):
    response = client.put(
        f"/vegetables/{vegetable_id}",
        json={"name": "Purple Carrot", "price": 55, "category": "root"},
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Vegetable updated"}

    veg = client.get(f"/vegetables/{vegetable_id}").json()
    assert veg["name"] == "Purple Carrot"
    assert veg["price"] == 55
    # photo is kept when the update does not supply one
    assert veg["photo"] == "https://img/carrot.jpg"
    assert veg["updatedAt"] is not None


def test_update_vegetable_errors(client, vegetable_id):
    response = client.put("/vegetables/123", json={"name": "", "price": 1, "category": "root"})
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid ID format")

    response = client.put(f"/vegetables/{vegetable_id}", json={"name": "X", "price": 1, "category": "rock"})
    assert response.status_code == 400

    response = client.put(f"/vegetables/{ObjectId()}", json={"name": "X", "price": 1, "category": "root"})
    assert response.status_code == 404


def test_delete_vegetable(client, vegetable_id):
    response = client.delete(f"/vegetables/{vegetable_id}")
    assert response.status_code == 200
    assert response.json() == {"message": "Vegetable deleted"}

    response = client.delete(f"/vegetables/{vegetable_id}")
    assert response.status_code == 404
    assert response.json() == {"error": "Vegetable not found"}


def test_unknown_route(client):
    response = client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Endpoint not found"}
