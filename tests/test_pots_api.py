def test_latest_one_row_per_pot(client, post_reading):
    post_reading("A", raw_value=500)
    post_reading("B", raw_value=480)
    newest_a = post_reading("A", raw_value=300)

    resp = client.get("/api/pots/latest")
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["count"] == 2
    assert [r["pot_id"] for r in body["data"]] == ["A", "B"]
    assert body["data"][0]["id"] == newest_a["id"]
    assert body["data"][0]["raw_value"] == 300
    assert body["data"][1]["raw_value"] == 480


def test_latest_empty_store(client):
    assert client.get("/api/pots/latest").json() == {"success": True, "count": 0, "data": []}


def test_inventory_counts_per_pot(client, post_reading):
    for _ in range(3):
        post_reading("A", location="Greenhouse")
    last_b = post_reading("B", location="Porch")

    resp = client.get("/api/pots")
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    a, b = body["data"]
    assert (a["pot_id"], a["location"], a["reading_count"]) == ("A", "Greenhouse", 3)
    assert (b["pot_id"], b["location"], b["reading_count"]) == ("B", "Porch", 1)
    assert b["last_reading"] == last_b["timestamp"]


def test_inventory_groups_by_pot_and_location(client, post_reading):
    post_reading("A", location="Kitchen")
    post_reading("A", location="Balcony")
    post_reading("A", location="Balcony")

    rows = client.get("/api/pots").json()["data"]
    assert [(r["pot_id"], r["location"], r["reading_count"]) for r in rows] == [
        ("A", "Balcony", 2),
        ("A", "Kitchen", 1),
    ]


def test_snapshots_are_idempotent(client, post_reading):
    post_reading("A")
    post_reading("B", location="Porch")
    post_reading("A")

    assert client.get("/api/pots").json() == client.get("/api/pots").json()
    assert client.get("/api/pots/latest").json() == client.get("/api/pots/latest").json()
