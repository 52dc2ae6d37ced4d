"""Tests API /email-builder — TestClient sur l'application autonome."""
import pytest
from fastapi.testclient import TestClient

from email_builder.app import app
from email_builder.blocks import BLOCK_CLASSES
from email_builder.core.schemas import EmailDocument
from email_builder.manifest import dump_document


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def payload(build):
    def _payload(*types):
        return dump_document(EmailDocument(blocks=build(*types)))
    return _payload


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_render(client, payload):
    doc = payload("hero", "text", "footer")
    r = client.post("/email-builder/render", json={
        "document": doc, "merge_tags": {"unsubscribe_url": "https://example.com/u"},
    })
    assert r.status_code == 200
    data = r.json()
    for block in doc["blocks"]:
        assert f'data-block-id="{block["id"]}"' in data["html"]
    assert 'href="https://example.com/u"' in data["html"]
    assert data["plain_text"].startswith(doc["blocks"][0]["content"]["headline"])


def test_render_rejects_inconsistent_positions(client, payload):
    doc = payload("text", "footer")
    doc["blocks"][1]["position"] = 5
    r = client.post("/email-builder/render", json={"document": doc})
    assert r.status_code == 422


def test_validate(client, payload):
    r = client.post("/email-builder/validate", json=payload("hero", "hero"))
    assert r.status_code == 200
    data = r.json()
    assert [v["rule_id"] for v in data["violations"]] == ["no-adjacent-heavy"]
    assert data["score"]["score"] == 90
    assert data["score"]["grade"] == "A-"


def test_autofix(client, payload):
    doc = payload("footer", "text")
    r = client.post("/email-builder/autofix", json={
        "document": doc, "block_id": doc["blocks"][0]["id"], "rule_id": "footer-last",
    })
    assert r.status_code == 200
    assert [b["type"] for b in r.json()["blocks"]] == ["text", "footer"]


def test_autofix_unknown_rule(client, payload):
    r = client.post("/email-builder/autofix", json={
        "document": payload("text"), "block_id": "x", "rule_id": "nope",
    })
    assert r.status_code == 404


def test_autofix_all(client, payload):
    r = client.post("/email-builder/autofix-all", json=payload("hero", "hero", "footer"))
    assert r.status_code == 200
    assert [b["type"] for b in r.json()["blocks"]] == ["hero", "spacer", "hero", "footer"]


def test_catalog(client):
    r = client.get("/email-builder/catalog")
    assert r.status_code == 200
    blocks = r.json()["blocks"]
    assert {b["type"] for b in blocks} == set(BLOCK_CLASSES)
    button = next(b for b in blocks if b["type"] == "button")
    assert button["style_defaults"]["padding"] == {"top": 16, "right": 32, "bottom": 16, "left": 32}
    assert "properties" in button["schema"]


def test_sections(client):
    r = client.get("/email-builder/sections")
    ids = {s["id"] for s in r.json()["sections"]}
    assert {"hero-with-cta", "social-proof", "feature-showcase", "before-after"} <= ids
    r = client.get("/email-builder/sections", params={"category": "hero"})
    assert [s["id"] for s in r.json()["sections"]] == ["hero-with-cta"]
    assert r.json()["sections"][0]["block_types"] == ["hero", "text", "button"]


def test_insert_section(client, payload):
    r = client.post("/email-builder/sections/hero-with-cta/insert", json={"document": payload("text", "footer")})
    assert r.status_code == 200
    data = r.json()
    assert data["success"]
    assert [b["type"] for b in data["blocks"]] == ["text", "hero", "text", "button", "footer"]
    assert len(data["inserted_ids"]) == 3


def test_insert_unknown_section(client, payload):
    r = client.post("/email-builder/sections/nope/insert", json={"document": payload("text")})
    assert r.status_code == 404


def test_insert_missing_target(client, payload):
    r = client.post("/email-builder/sections/hero-with-cta/insert", json={
        "document": payload("text"), "mode": "after", "target_id": "absent",
    })
    assert r.status_code == 404
    assert r.json()["detail"]["error_code"] == "not_found"


def test_insert_out_of_range(client, payload):
    r = client.post("/email-builder/sections/hero-with-cta/insert", json={
        "document": payload("text"), "mode": "at", "index": 7,
    })
    assert r.status_code == 422
    assert r.json()["detail"]["error_code"] == "out_of_range"
