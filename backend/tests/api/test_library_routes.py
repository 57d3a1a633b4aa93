"""Library Routes - end-to-end behaviour of /api/libraries over a real SQLite session.

Invariants:
    - POST without id -> 201, Location /api/libraries/{id}, creation alert
    - POST with id -> 400 idexists, nothing persisted
    - PUT without id behaves like POST; PUT with id -> 200 and keeps the id
    - GET unknown id -> 404 with empty body
    - DELETE is idempotent
    - Ids outside the BIGINT range and pages past a BIGINT offset -> 400
    - GET list honours page/size/sort and emits X-Total-Count and Link
"""

from ester.config import Settings, get_settings
from ester.main import app


# --- Create -------------------------------------------------------------------

async def test_create_returns_201_with_location_and_alert(client):
    res = await client.post("/api/libraries", json={"name": "Central Library"})

    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "Central Library"
    assert body["id"] is not None
    assert res.headers["Location"] == f"/api/libraries/{body['id']}"
    assert res.headers["X-esterApp-alert"] == "esterApp.library.created"
    assert res.headers["X-esterApp-params"] == str(body["id"])


async def test_create_with_id_returns_400_and_persists_nothing(client):
    res = await client.post("/api/libraries", json={"id": 5, "name": "Rogue"})

    assert res.status_code == 400
    assert res.headers["X-esterApp-error"] == "error.idexists"
    assert res.headers["X-esterApp-params"] == "library"
    assert res.json()["error"]["error_key"] == "idexists"

    listing = await client.get("/api/libraries")
    assert listing.headers["X-Total-Count"] == "0"
    assert listing.json() == []


async def test_create_without_name_returns_400_validation_error(client):
    res = await client.post("/api/libraries", json={"code": "X1"})

    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert any(d["field"].endswith("name") for d in error["details"])


async def test_create_strips_name(client):
    res = await client.post("/api/libraries", json={"name": "  Tartu  "})
    assert res.json()["name"] == "Tartu"


# --- Update -------------------------------------------------------------------

async def test_update_without_id_behaves_like_create(client):
    res = await client.put("/api/libraries", json={"name": "Narva"})

    assert res.status_code == 201
    body = res.json()
    assert res.headers["Location"] == f"/api/libraries/{body['id']}"
    assert res.headers["X-esterApp-alert"] == "esterApp.library.created"


async def test_update_existing_returns_200_and_keeps_id(client):
    created = (await client.post("/api/libraries", json={"name": "Old"})).json()

    res = await client.put(
        "/api/libraries", json={"id": created["id"], "name": "New", "code": "N"},
    )

    assert res.status_code == 200
    assert res.json() == {"id": created["id"], "name": "New", "code": "N"}
    assert res.headers["X-esterApp-alert"] == "esterApp.library.updated"
    assert res.headers["X-esterApp-params"] == str(created["id"])

    fetched = await client.get(f"/api/libraries/{created['id']}")
    assert fetched.json()["name"] == "New"


async def test_update_unknown_id_upserts_under_that_id(client):
    res = await client.put("/api/libraries", json={"id": 999, "name": "Pärnu"})

    assert res.status_code == 200
    assert res.json()["id"] == 999
    fetched = await client.get("/api/libraries/999")
    assert fetched.status_code == 200
    assert fetched.json()["name"] == "Pärnu"


async def test_update_without_id_rejected_when_put_create_disabled(client):
    app.dependency_overrides[get_settings] = lambda: Settings(allow_put_create=False)

    res = await client.put("/api/libraries", json={"name": "Nowhere"})

    assert res.status_code == 400
    assert res.headers["X-esterApp-error"] == "error.idnull"


# --- Get / Delete -------------------------------------------------------------

async def test_get_unknown_returns_404_with_empty_body(client):
    res = await client.get("/api/libraries/12345")

    assert res.status_code == 404
    assert res.content == b""


async def test_get_non_integer_id_returns_400(client):
    res = await client.get("/api/libraries/abc")
    assert res.status_code == 400


async def test_get_id_beyond_bigint_returns_400(client):
    res = await client.get("/api/libraries/99999999999999999999")
    assert res.status_code == 400


async def test_delete_id_beyond_bigint_returns_400(client):
    res = await client.delete("/api/libraries/99999999999999999999")
    assert res.status_code == 400


async def test_get_largest_bigint_id_returns_404(client):
    res = await client.get(f"/api/libraries/{2**63 - 1}")
    assert res.status_code == 404


async def test_update_body_id_beyond_bigint_returns_400(client):
    res = await client.put(
        "/api/libraries", json={"id": 2**63, "name": "Overflow"},
    )
    assert res.status_code == 400


async def test_create_get_delete_get_scenario(client):
    created = await client.post("/api/libraries", json={"name": "Central Library"})
    library_id = created.json()["id"]

    got = await client.get(f"/api/libraries/{library_id}")
    assert got.status_code == 200
    assert got.json() == {"id": library_id, "name": "Central Library", "code": None}

    deleted = await client.delete(f"/api/libraries/{library_id}")
    assert deleted.status_code == 200
    assert deleted.content == b""
    assert deleted.headers["X-esterApp-alert"] == "esterApp.library.deleted"
    assert deleted.headers["X-esterApp-params"] == str(library_id)

    gone = await client.get(f"/api/libraries/{library_id}")
    assert gone.status_code == 404


async def test_delete_nonexistent_returns_200(client):
    res = await client.delete("/api/libraries/777")
    assert res.status_code == 200


# --- List ---------------------------------------------------------------------

async def test_list_first_page_headers(client, seed_libraries):
    res = await client.get("/api/libraries", params={"page": 0, "size": 2})

    assert res.status_code == 200
    assert len(res.json()) == 2
    assert res.headers["X-Total-Count"] == "5"
    assert res.headers["Link"] == (
        '</api/libraries?page=1&size=2>; rel="next",'
        '</api/libraries?page=2&size=2>; rel="last",'
        '</api/libraries?page=0&size=2>; rel="first"'
    )


async def test_list_last_page_has_prev_and_no_next(client, seed_libraries):
    res = await client.get("/api/libraries", params={"page": 2, "size": 2})

    assert len(res.json()) == 1
    link = res.headers["Link"]
    assert 'rel="next"' not in link
    assert '</api/libraries?page=1&size=2>; rel="prev"' in link


async def test_list_defaults_to_id_order(client, seed_libraries):
    res = await client.get("/api/libraries")

    ids = [lib["id"] for lib in res.json()]
    assert ids == sorted(ids)
    assert ids == [lib["id"] for lib in seed_libraries]


async def test_list_sorts_by_name_desc(client, seed_libraries):
    res = await client.get("/api/libraries", params={"sort": "name,desc"})

    names = [lib["name"] for lib in res.json()]
    assert names == ["Echo", "Delta", "Charlie", "Bravo", "Alpha"]


async def test_list_rejects_unknown_sort_property(client):
    res = await client.get("/api/libraries", params={"sort": "password,asc"})

    assert res.status_code == 400
    assert res.headers["X-esterApp-error"] == "error.sort.invalid"


async def test_list_rejects_negative_page(client):
    res = await client.get("/api/libraries", params={"page": -1})
    assert res.status_code == 400


async def test_list_rejects_page_past_bigint_offset(client):
    res = await client.get(
        "/api/libraries", params={"page": 10**18, "size": 2000},
    )

    assert res.status_code == 400
    assert res.headers["X-esterApp-error"] == "error.page.invalid"
    assert res.json()["error"]["error_key"] == "page.invalid"


async def test_list_exposes_pagination_headers_to_cors(client):
    res = await client.get(
        "/api/libraries", headers={"Origin": "http://localhost:9000"},
    )
    exposed = res.headers["access-control-expose-headers"]
    assert "X-Total-Count" in exposed
    assert "Link" in exposed
