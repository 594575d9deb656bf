from bson import ObjectId


def test_create_product_derives_tags(client, make_product):
    response = client.post("/api/products", json=make_product(isNewArrival=True))

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    product = body["data"]
    assert product["sku"] == "NECK001"
    assert product["brand"] == "Sabri"
    # isGiftable and women default to true
    assert product["tags"] == ["new-arrival", "giftable", "women"]
    assert "createdAt" in product and "updatedAt" in product


def test_create_product_requires_an_image(client, make_product):
    response = client.post("/api/products", json=make_product(images=[]))

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert any("At least one image is required" in error["message"] for error in body["errors"])


def test_create_product_rejects_unknown_category(client, make_product):
    response = client.post("/api/products", json=make_product(category="watches"))

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "category"


def test_create_product_duplicate_sku(client, make_product):
    assert client.post("/api/products", json=make_product()).status_code == 201

    response = client.post("/api/products", json=make_product(name="Another"))

    assert response.status_code == 400
    assert response.json()["message"] == "Product with this SKU already exists"


def test_list_products_paginates_newest_first(client, make_product):
    for index in range(3):
        client.post("/api/products", json=make_product(sku=f"SKU{index}", name=f"Ring {index}"))

    response = client.get("/api/products", params={"page": 1, "limit": 2})

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data["products"]) == 2
    assert data["pagination"] == {
        "currentPage": 1,
        "totalPages": 2,
        "totalProducts": 3,
        "hasNext": True,
        "hasPrev": False,
    }


def test_list_products_get_all_has_no_pagination(client, make_product):
    for index in range(3):
        client.post("/api/products", json=make_product(sku=f"SKU{index}"))

    data = client.get("/api/products", params={"getAll": "true", "limit": 1}).json()["data"]

    assert len(data["products"]) == 3
    assert data["pagination"] is None


def test_list_products_search_by_sku(client, make_product):
    client.post("/api/products", json=make_product(sku="RING001", name="Gold Ring", category="rings"))
    client.post("/api/products", json=make_product(sku="NECK001"))

    data = client.get("/api/products", params={"search": "ring0"}).json()["data"]

    assert [product["sku"] for product in data["products"]] == ["RING001"]


def test_get_product_invalid_and_missing_id(client):
    assert client.get("/api/products/not-an-id").status_code == 400

    response = client.get(f"/api/products/{ObjectId()}")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Product not found"}


def test_update_product_rejects_negative_stock(client, make_product):
    product_id = client.post("/api/products", json=make_product()).json()["data"]["_id"]

    response = client.put(f"/api/products/{product_id}", json={"stock": -5})

    assert response.status_code == 400
    assert "Stock cannot be negative" in response.json()["errors"][0]["message"]


def test_update_product_recomputes_tags(client, make_product):
    product_id = client.post("/api/products", json=make_product()).json()["data"]["_id"]

    response = client.put(f"/api/products/{product_id}", json={"isOnSale": True, "women": False})

    assert response.status_code == 200
    product = response.json()["data"]
    assert product["tags"] == ["giftable", "on-sale"]
    assert product["stock"] == 25


def test_update_product_keeps_at_least_one_image(client, make_product):
    product_id = client.post("/api/products", json=make_product()).json()["data"]["_id"]

    response = client.put(f"/api/products/{product_id}", json={"images": []})

    assert response.status_code == 400
    assert "At least one image is required" in response.json()["errors"][0]["message"]
    stored = client.get(f"/api/products/{product_id}").json()["data"]
    assert stored["images"] == ["https://cdn.example.com/neck001.jpg"]

    replaced = client.put(f"/api/products/{product_id}", json={"images": [" https://cdn.example.com/b.jpg ", ""]})
    assert replaced.json()["data"]["images"] == ["https://cdn.example.com/b.jpg"]


def test_update_missing_product(client):
    response = client.put(f"/api/products/{ObjectId()}", json={"stock": 3})
    assert response.status_code == 404


def test_delete_product(client, make_product):
    product_id = client.post("/api/products", json=make_product()).json()["data"]["_id"]

    assert client.delete(f"/api/products/{product_id}").status_code == 200
    assert client.delete(f"/api/products/{product_id}").status_code == 404


def test_csv_template_download(client):
    response = client.get("/api/products/csv-template")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "jewelry_products_template.csv" in response.headers["content-disposition"]
    assert response.text.startswith("name,price,originalPrice,cost,category")


CSV_HEADER = "name,price,originalPrice,cost,category,stock,description,sku,images,isFeatured\n"


def test_bulk_upload_skips_invalid_rows(client, db, run):
    csv_text = (
        CSV_HEADER
        + 'Silver Ring,1899,2999,1200,fine-silver,35,"Sterling silver ring",FS001,https://cdn.example.com/a.jpg|https://cdn.example.com/b.jpg,true\n'
        + "Broken Ring,1899,2999,1200,rings,10,,FS002,,false\n"
    )

    response = client.post(
        "/api/products/bulk-upload",
        files={"csvFile": ("products.csv", csv_text, "text/csv")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [product["sku"] for product in body["data"]] == ["FS001"]
    assert body["data"][0]["images"] == ["https://cdn.example.com/a.jpg", "https://cdn.example.com/b.jpg"]
    assert body["data"][0]["tags"] == ["featured"]
    assert body["errors"] == [{"row": 2, "message": "Missing required fields: description"}]
    assert body["totalProcessed"] == 2
    assert run(db.products.count_documents({})) == 1


def test_bulk_upload_with_no_valid_rows(client, db, run):
    csv_text = CSV_HEADER + "Broken Ring,abc,2999,1200,rings,10,Ring,FS002,,false\n"

    response = client.post(
        "/api/products/bulk-upload",
        files={"csvFile": ("products.csv", csv_text, "text/csv")},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["errors"] == [{"row": 1, "message": "Invalid selling price value"}]
    assert run(db.products.count_documents({})) == 0


def test_bulk_upload_reports_duplicate_skus_from_the_database(client, db, run, seed):
    run(db.products.create_index("sku", unique=True))
    seed("products", {"name": "Existing", "sku": "FS001", "stock": 1})
    csv_text = (
        CSV_HEADER
        + 'Silver Ring,1899,2999,1200,fine-silver,35,"Sterling silver ring",FS001,https://cdn.example.com/a.jpg,false\n'
        + 'Gold Ring,8999,12999,5500,rings,15,"Gold ring",RING001,https://cdn.example.com/r.jpg,false\n'
    )

    response = client.post(
        "/api/products/bulk-upload",
        files={"csvFile": ("products.csv", csv_text, "text/csv")},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["createdCount"] == 1
    assert [error["sku"] for error in body["errors"]] == ["FS001"]
    assert body["errors"][0]["message"]
    assert run(db.products.count_documents({"sku": "RING001"})) == 1


def test_bulk_upload_requires_a_file(client):
    response = client.post("/api/products/bulk-upload", data={"note": "no file"})

    assert response.status_code == 400
    assert response.json()["message"] == "No CSV file uploaded"


def test_import_upserts_by_id_and_sku(client, seed):
    [existing_id] = seed("products", {"name": "Old", "sku": "OLD1", "stock": 1})

    response = client.post("/api/products/import", json={"products": [
        {"_id": str(existing_id), "title": "Renamed", "stock": "7"},
        {
            "name": "By SKU",
            "SKU": "NEW1",
            "price": "120.5",
            "category": "rings",
            "description": "Imported ring",
            "images": "a.jpg | b.jpg",
            "tags": "gold",
        },
    ]})

    assert response.status_code == 200
    results = response.json()["results"]
    assert [result["action"] for result in results] == ["updatedById", "upsertBySku"]
    assert results[0]["id"] == str(existing_id)

    created = client.get(f"/api/products/{results[1]['id']}").json()["data"]
    assert created["brand"] == "Sabri"
    assert created["price"] == 120.5
    assert created["images"] == ["a.jpg", "b.jpg"]
    assert created["tags"] == ["gold"]

    again = client.post("/api/products/import", json={"products": [{"sku": "NEW1", "stock": 3}]})
    assert again.json()["results"][0] == {"id": results[1]["id"], "action": "upsertBySku"}

    product = client.get(f"/api/products/{existing_id}").json()["data"]
    assert product["name"] == "Renamed"
    assert product["stock"] == 7


def test_import_rejects_invalid_records_without_writing(client, seed, db, run):
    [existing_id] = seed("products", {"name": "Old", "sku": "OLD1", "stock": 1})

    response = client.post("/api/products/import", json={"products": [
        {"_id": str(existing_id), "title": "Renamed"},
        {"name": "No SKU"},
        {"name": "Bad category", "sku": "BAD1", "category": "hats", "description": "Hat"},
    ]})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert [error["record"] for error in body["errors"]] == [2, 3]
    assert "sku: Field required" in body["errors"][0]["message"]
    assert "description: Field required" in body["errors"][0]["message"]
    assert "Invalid category" in body["errors"][1]["message"]

    assert run(db.products.count_documents({})) == 1
    assert run(db.products.find_one({"_id": existing_id}))["name"] == "Old"


def test_import_creates_missing_id_and_rejects_repeated_sku(client, db, run):
    new_id = ObjectId()
    record = {"name": "Cuff", "category": "bracelets", "description": "Silver cuff", "price": "999"}

    response = client.post("/api/products/import", json={"products": [
        {"_id": str(new_id), "sku": "CUFF1", **record},
    ]})

    assert response.status_code == 200
    assert response.json()["results"] == [{"id": str(new_id), "action": "updatedById"}]
    stored = run(db.products.find_one({"_id": new_id}))
    assert stored["sku"] == "CUFF1"
    assert "createdAt" in stored

    repeated = client.post("/api/products/import", json={"products": [
        {"sku": "CUFF2", **record},
        {"sku": "CUFF2", **record},
    ]})

    assert repeated.status_code == 400
    assert repeated.json()["errors"] == [{"record": 2, "message": "Product with SKU CUFF2 already exists"}]
    assert run(db.products.count_documents({"sku": "CUFF2"})) == 0


def test_import_requires_products(client):
    response = client.post("/api/products/import", json={"products": []})

    assert response.status_code == 400
    assert response.json()["message"] == "No products provided"
