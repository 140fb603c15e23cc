LISTING = {"crop": "Wheat", "quantity": 10, "price": 2000, "contact": "111"}


def test_listing_is_public_and_newest_first(login_as, client):
    farmer = login_as("farmer", name="Asha")
    for crop in ("Wheat", "Rice", "Onion"):
        resp = farmer.post("/farmer-listings", json={**LISTING, "crop": crop})
        assert resp.status_code == 201

    listings = client.get("/farmer-listings").json()
    assert [l["crop"] for l in listings] == ["Onion", "Rice", "Wheat"]
    first = listings[0]
    assert first["farmerName"] == "Asha"
    assert first["farmerId"] == farmer.user["id"]
    assert first["contactNumber"] == "111"
    assert first["status"] == "available"
    assert first["completedAt"] is None


def test_create_requires_farmer_role(login_as, client):
    buyer = login_as("buyer")
    resp = buyer.post("/farmer-listings", json=LISTING)
    assert resp.status_code == 403
    assert resp.json() == {"message": "Forbidden: Requires farmer role"}

    assert client.post("/farmer-listings", json=LISTING).status_code == 401


def test_create_rejects_non_positive_numbers(login_as):
    farmer = login_as("farmer")
    assert farmer.post("/farmer-listings", json={**LISTING, "quantity": 0}).status_code == 400
    assert farmer.post("/farmer-listings", json={**LISTING, "price": -5}).status_code == 400


def test_create_rejects_missing_fields(login_as):
    farmer = login_as("farmer")
    resp = farmer.post("/farmer-listings", json={"crop": "Wheat", "quantity": 1, "price": 1})
    assert resp.status_code == 400
    assert "contact" in resp.json()["message"]


def test_contact_number_key_is_accepted(login_as):
    farmer = login_as("farmer")
    body = {"crop": "Rice", "quantity": 3, "price": 1800, "contactNumber": "222"}
    resp = farmer.post("/farmer-listings", json=body)
    assert resp.status_code == 201
    assert resp.json()["contactNumber"] == "222"


def test_only_owner_deletes(login_as, client):
    farmer_a = login_as("farmer")
    farmer_b = login_as("farmer")
    listing_id = farmer_a.post("/farmer-listings", json=LISTING).json()["id"]

    resp = farmer_b.delete(f"/farmer-listings/{listing_id}")
    assert resp.status_code == 403
    assert resp.json() == {"message": "Forbidden: You do not own this listing."}

    resp = farmer_a.delete(f"/farmer-listings/{listing_id}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Listing deleted successfully."}

    assert all(l["id"] != listing_id for l in client.get("/farmer-listings").json())


def test_delete_unknown_listing(login_as):
    farmer = login_as("farmer")
    assert farmer.delete("/farmer-listings/999").status_code == 404


def test_delete_requires_session(client):
    assert client.delete("/farmer-listings/1").status_code == 401


def test_complete_is_owner_only_and_happens_once(login_as):
    farmer_a = login_as("farmer")
    farmer_b = login_as("farmer")
    listing_id = farmer_a.post("/farmer-listings", json=LISTING).json()["id"]

    assert farmer_b.put(f"/posts/farmer-listings/{listing_id}/complete").status_code == 403

    resp = farmer_a.put(f"/posts/farmer-listings/{listing_id}/complete")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Post marked as complete."}

    again = farmer_a.put(f"/posts/farmer-listings/{listing_id}/complete")
    assert again.status_code == 404
    assert again.json() == {"message": "Post not found or already completed."}

    listing = farmer_a.get(f"/farmer-listings/{listing_id}").json()
    assert listing["status"] == "completed"
    assert listing["completedAt"] is not None
    assert listing["farmerId"] == farmer_a.user["id"]


def test_complete_unknown_collection(login_as):
    farmer = login_as("farmer")
    resp = farmer.put("/posts/mandi/1/complete")
    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid post type."}


def test_filter_by_crop_and_status(login_as, client):
    farmer = login_as("farmer")
    wheat = farmer.post("/farmer-listings", json=LISTING).json()["id"]
    farmer.post("/farmer-listings", json={**LISTING, "crop": "Rice"})
    farmer.put(f"/posts/farmer-listings/{wheat}/complete")

    assert [l["crop"] for l in client.get("/farmer-listings?crop=wheat").json()] == ["Wheat"]
    assert [l["crop"] for l in client.get("/farmer-listings?status=available").json()] == ["Rice"]
    assert client.get("/farmer-listings?status=sold").status_code == 400


def test_my_posts_for_farmer(login_as):
    farmer_a = login_as("farmer")
    farmer_b = login_as("farmer")
    farmer_a.post("/farmer-listings", json=LISTING)
    farmer_a.post("/farmer-listings", json={**LISTING, "crop": "Maize"})
    farmer_b.post("/farmer-listings", json={**LISTING, "crop": "Gram"})

    mine = farmer_a.get("/my-posts").json()
    assert [p["crop"] for p in mine] == ["Maize", "Wheat"]
    assert {p["farmerId"] for p in mine} == {farmer_a.user["id"]}


def test_my_posts_for_admin_is_empty(login_as, client):
    admin = login_as("admin")
    assert admin.get("/my-posts").json() == []
    assert client.get("/my-posts").status_code == 401


def test_create_rejects_non_finite_numbers(login_as, client):
    farmer = login_as("farmer")
    for field in ("quantity", "price"):
        for value in (float("inf"), float("nan")):
            assert farmer.post("/farmer-listings", json={**LISTING, field: value}).status_code == 400
    assert client.get("/farmer-listings").json() == []
