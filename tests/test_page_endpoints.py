from __future__ import annotations

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client(reload_endpoints) -> TestClient:
    import app as app_module

    return TestClient(app_module.create_app())


def test_page_lifecycle(client: TestClient):
    r = client.post("/api/pages", json={"name": "  Notes  "})
    assert r.status_code == 201
    page = r.json()
    assert page["name"] == "Notes"
    assert len(page["blocks"]) == 1
    assert page["blocks"][0]["type"] == "text"
    page_id = page["id"]

    r = client.get("/api/pages")
    assert r.json() == [{"id": page_id, "name": "Notes"}]

    r = client.put(f"/api/pages/{page_id}", json={"name": "Ideas"})
    assert r.status_code == 200
    assert r.json()["name"] == "Ideas"
    assert r.json()["blocks"] == page["blocks"]

    blocks = [
        {"id": "h", "type": "text", "content": "Heading", "style": "h1"},
        {"id": "img", "type": "image", "source": "https://example.com/a.png", "width": 300, "height": 200},
    ]
    r = client.patch(f"/api/pages/{page_id}/blocks", json={"blocks": blocks})
    assert r.status_code == 200
    assert r.json() == {"blocks": blocks}

    r = client.get(f"/api/pages/{page_id}")
    assert r.json() == {"id": page_id, "name": "Ideas", "blocks": blocks}

    r = client.delete(f"/api/pages/{page_id}")
    assert r.status_code == 200
    assert r.json() == {"success": True}

    assert client.get("/api/pages").json() == []


@pytest.mark.parametrize("body", [{}, {"name": ""}, {"name": "   "}, {"name": 5}])
def test_blank_names_are_rejected(client: TestClient, body):
    r = client.post("/api/pages", json=body)
    assert r.status_code == 400
    assert r.json()["detail"] == "Page name is required"


def test_missing_pages_are_404(client: TestClient):
    assert client.get("/api/pages/nope").status_code == 404
    assert client.put("/api/pages/nope", json={"name": "x"}).status_code == 404
    assert client.delete("/api/pages/nope").status_code == 404
    r = client.patch("/api/pages/nope/blocks", json={"blocks": [{"id": "b", "type": "text", "content": "", "style": "p"}]})
    assert r.status_code == 404


def test_blocks_payload_is_validated(client: TestClient):
    page_id = client.post("/api/pages", json={"name": "Notes"}).json()["id"]

    r = client.patch(f"/api/pages/{page_id}/blocks", json={"blocks": "nope"})
    assert r.status_code == 400
    assert r.json()["detail"] == "blocks array is required"

    r = client.patch(
        f"/api/pages/{page_id}/blocks",
        json={"blocks": [{"id": "i", "type": "image", "source": "/x.png", "width": 0, "height": 1}]},
    )
    assert r.status_code == 400

    r = client.patch(f"/api/pages/{page_id}/blocks", json={"blocks": []})
    assert r.status_code == 400
    assert r.json()["detail"] == "a page needs at least one block"

    text = {"id": "same", "type": "text", "content": "", "style": "p"}
    r = client.patch(f"/api/pages/{page_id}/blocks", json={"blocks": [text, dict(text, content="again")]})
    assert r.status_code == 400
    assert r.json()["detail"] == "block ids must be unique"

    # rejected payloads leave the page alone
    assert len(client.get(f"/api/pages/{page_id}").json()["blocks"]) == 1


def test_storage_errors_are_distinct_from_not_found(client: TestClient, monkeypatch: pytest.MonkeyPatch):
    import endpoints.page_endpoints as page_endpoints

    async def _broken_list():
        raise PermissionError("read-only filesystem")

    monkeypatch.setattr(page_endpoints.PAGE_REPO, "list_pages", _broken_list)

    r = client.get("/api/pages")
    assert r.status_code == 500
    assert r.json() == {"detail": "storage error"}
