def create(client, module_id, title, body="", content_type="text"):
    response = client.post(
        "/api/content",
        json={
            "module_id": module_id,
            "title": title,
            "type": content_type,
            "content": body or title,
        },
    )
    assert response.status_code == 200
    return response.json()


def test_module_listing_and_lookup(client):
    first = create(client, 1, "Great Lavra")
    create(client, 1, "Vatopedi")
    create(client, 3, "Dafni harbour")

    modules = client.get("/api/content/modules").json()
    assert modules == [{"id": 1, "title": "Module 1"}, {"id": 3, "title": "Module 3"}]

    module_one = client.get("/api/content/modules/1").json()
    assert [c["title"] for c in module_one] == ["Great Lavra", "Vatopedi"]

    item = client.get(f"/api/content/{first['id']}").json()
    assert item["title"] == "Great Lavra"
    assert item["difficulty"] == "basic"


def test_search_is_case_insensitive(client):
    create(client, 2, "Byzantine icons", "Painted panels")
    create(client, 2, "Frescoes", "Wall painting in the katholikon")
    create(client, 2, "Library", "Manuscripts")

    results = client.get("/api/content/search", params={"term": "PAINT"}).json()
    assert sorted(r["title"] for r in results) == ["Byzantine icons", "Frescoes"]


def test_unknown_content(client):
    assert client.get("/api/content/nothing").status_code == 404


def test_invalid_content(client):
    response = client.post(
        "/api/content",
        json={"module_id": 9, "title": "Nowhere", "content": "x"},
    )
    assert response.status_code == 422

    response = client.post(
        "/api/content",
        json={"module_id": 1, "title": "Audio", "type": "audio", "content": "x"},
    )
    assert response.status_code == 422
