import pytest

from storefront.extensions import db

API = "/api/v1"


@pytest.fixture
def store(client, auth_headers):
    response = client.post(
        f"{API}/stores",
        json={"store_name": "Green Leaf", "slug": "green-leaf"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    return response.get_json()


def _types(body):
    return [s["type"] for s in body["document"]["sections"]]


# ------------------------
# Access
# ------------------------
def test_health_needs_no_tenant(client):
    response = client.get(f"{API}/health")

    assert response.status_code == 200
    assert response.get_json()["service"] == "storefront-builder"


def test_openapi_document_is_served(client):
    response = client.get("/openapi/builder.yaml")

    assert response.status_code == 200
    assert b"/builder/publish" in response.data


def test_login_issues_tokens(client, tenant, admin):
    response = client.post(
        f"{API}/auth/login",
        json={"email": admin.email, "password": "correct-horse"},
        headers={"X-Tenant-ID": tenant.id},
    )
    assert response.status_code == 200

    token = response.get_json()["access_token"]
    builder = client.get(
        f"{API}/builder",
        headers={"Authorization": f"Bearer {token}", "X-Tenant-ID": tenant.id},
    )
    assert builder.status_code == 200


def test_refresh_issues_new_access_token(client, tenant, admin):
    login = client.post(
        f"{API}/auth/login",
        json={"email": "Admin@GreenLeaf.test", "password": "correct-horse"},
        headers={"X-Tenant-ID": tenant.id},
    ).get_json()

    response = client.post(
        f"{API}/auth/refresh",
        headers={"Authorization": f"Bearer {login['refresh_token']}", "X-Tenant-ID": tenant.id},
    )

    assert response.status_code == 200
    assert response.get_json()["access_token"]


def test_login_requires_credentials(client, tenant):
    response = client.post(f"{API}/auth/login", json={"email": ""}, headers={"X-Tenant-ID": tenant.id})

    assert response.status_code == 400
    assert response.get_json()["error"] == "ValidationError"


def test_login_rejects_bad_password(client, tenant, admin):
    response = client.post(
        f"{API}/auth/login",
        json={"email": admin.email, "password": "wrong"},
        headers={"X-Tenant-ID": tenant.id},
    )
    assert response.status_code == 401


def test_missing_tenant_header(client, auth_headers):
    headers = {"Authorization": auth_headers["Authorization"]}
    assert client.get(f"{API}/builder", headers=headers).status_code == 400


def test_builder_requires_admin(client, staff_headers):
    assert client.get(f"{API}/builder", headers=staff_headers).status_code == 403


def test_builder_requires_storefront_feature(client, tenant, auth_headers):
    tenant.features = {"storefront": False}
    db.session.commit()

    assert client.get(f"{API}/builder", headers=auth_headers).status_code == 403


# ------------------------
# Stores
# ------------------------
def test_slug_suggestion(client, auth_headers):
    response = client.get(f"{API}/stores/slug-suggestion?name=My Store!", headers=auth_headers)
    assert response.get_json()["slug"] == "my-store"


@pytest.mark.parametrize("slug, status, error", [
    ("ab", 400, "ValidationError"),
    ("My Store!", 400, "ValidationError"),
    ("green-leaf", 409, "ConflictError"),
])
def test_slug_check_rejections(client, auth_headers, store, slug, status, error):
    response = client.get(f"{API}/stores/slug-check", query_string={"slug": slug}, headers=auth_headers)

    assert response.status_code == status
    assert response.get_json()["error"] == error
    assert response.get_json()["field"] == "slug"


def test_slug_check_accepts_free_slug(client, auth_headers):
    response = client.get(f"{API}/stores/slug-check?slug=green-leaf-99", headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json()["available"] is True


def test_create_store_requires_name(client, auth_headers):
    response = client.post(f"{API}/stores", json={"slug": "green-leaf"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.get_json()["field"] == "store_name"


def test_create_second_store_conflicts(client, auth_headers, store):
    response = client.post(
        f"{API}/stores",
        json={"store_name": "Again", "slug": "again-store"},
        headers=auth_headers,
    )
    assert response.status_code == 409


def test_current_store_and_activity(client, auth_headers, store):
    current = client.get(f"{API}/stores/current", headers=auth_headers).get_json()
    assert current["slug"] == "green-leaf"
    assert current["status"] == "draft"

    activity = client.get(f"{API}/stores/activity", headers=auth_headers).get_json()
    assert [entry["action"] for entry in activity["data"]] == ["store.create"]


def test_current_store_missing(client, auth_headers):
    response = client.get(f"{API}/stores/current", headers=auth_headers)

    assert response.status_code == 404
    assert response.get_json()["error"] == "NotFoundError"


# ------------------------
# Builder
# ------------------------
def test_builder_without_store(client, auth_headers):
    body = client.get(f"{API}/builder", headers=auth_headers).get_json()

    assert body["store_exists"] is False
    assert body["document"]["sections"] == []
    assert body["document"]["theme"]["typography"]["fontFamily"] == "Inter"


def test_editing_flow(client, auth_headers, store):
    body = client.post(f"{API}/builder/template", json={"template": "minimal"}, headers=auth_headers).get_json()
    assert _types(body) == ["hero", "product_grid"]

    response = client.post(f"{API}/builder/sections", json={"type": "faq"}, headers=auth_headers)
    assert response.status_code == 201
    faq_id = response.get_json()["section_id"]
    assert response.get_json()["selected_section_id"] == faq_id
    assert response.get_json()["document"]["sections"][-1]["label"] == "FAQ"

    body = client.post(f"{API}/builder/sections/{faq_id}/move", json={"to_index": 0}, headers=auth_headers).get_json()
    assert _types(body) == ["faq", "hero", "product_grid"]

    body = client.patch(
        f"{API}/builder/sections/{faq_id}",
        json={"field": "content", "key": "heading", "value": "Questions?"},
        headers=auth_headers,
    ).get_json()
    assert body["dirty"] is True

    body = client.post(f"{API}/builder/commit", headers=auth_headers).get_json()
    assert body["committed"] is True
    assert body["dirty"] is False

    body = client.post(f"{API}/builder/sections/{faq_id}/visibility", headers=auth_headers).get_json()
    assert body["document"]["sections"][0]["visible"] is False

    body = client.post(f"{API}/builder/undo", headers=auth_headers).get_json()
    assert body["document"]["sections"][0]["visible"] is True
    assert body["history"]["can_redo"] is True

    body = client.post(f"{API}/builder/redo", headers=auth_headers).get_json()
    assert body["document"]["sections"][0]["visible"] is False


def test_duplicate_and_confirmed_removal(client, auth_headers, store):
    hero_id = client.post(f"{API}/builder/sections", json={"type": "hero"}, headers=auth_headers).get_json()["section_id"]

    response = client.post(f"{API}/builder/sections/{hero_id}/duplicate", headers=auth_headers)
    assert response.status_code == 201
    copy_id = response.get_json()["section_id"]
    assert [s["id"] for s in response.get_json()["document"]["sections"]] == [hero_id, copy_id]

    response = client.delete(f"{API}/builder/sections/{copy_id}", headers=auth_headers)
    assert response.status_code == 202
    assert response.get_json()["pending_removal"] == copy_id
    assert len(response.get_json()["document"]["sections"]) == 2

    body = client.post(f"{API}/builder/removal/confirm", headers=auth_headers).get_json()
    assert body["removed_section_id"] == copy_id
    assert body["pending_removal"] is None
    assert [s["id"] for s in body["document"]["sections"]] == [hero_id]


def test_cancelled_removal(client, auth_headers, store):
    hero_id = client.post(f"{API}/builder/sections", json={"type": "hero"}, headers=auth_headers).get_json()["section_id"]
    client.delete(f"{API}/builder/sections/{hero_id}", headers=auth_headers)

    body = client.post(f"{API}/builder/removal/cancel", headers=auth_headers).get_json()
    assert body["pending_removal"] is None

    response = client.post(f"{API}/builder/removal/confirm", headers=auth_headers)
    assert response.status_code == 400


def test_theme_routes(client, auth_headers, store):
    body = client.post(f"{API}/builder/theme/preset", json={"preset": "luxury"}, headers=auth_headers).get_json()
    assert body["selected_theme_id"] == "luxury"
    assert body["document"]["theme"]["typography"]["fontFamily"] == "Playfair Display"

    body = client.patch(
        f"{API}/builder/theme",
        json={"group": "colors", "key": "primary", "value": "#123456"},
        headers=auth_headers,
    ).get_json()
    assert body["document"]["theme"]["colors"]["primary"] == "#123456"

    response = client.patch(
        f"{API}/builder/theme",
        json={"group": "colors", "key": "primary", "value": "blue"},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_select_section(client, auth_headers, store):
    hero_id = client.post(f"{API}/builder/sections", json={"type": "hero"}, headers=auth_headers).get_json()["section_id"]

    body = client.post(f"{API}/builder/select", json={"section_id": None}, headers=auth_headers).get_json()
    assert body["selected_section_id"] is None

    body = client.post(f"{API}/builder/select", json={"section_id": hero_id}, headers=auth_headers).get_json()
    assert body["selected_section_id"] == hero_id


@pytest.mark.parametrize("method, path, payload, status, error", [
    ("post", "/builder/sections", {"type": "countdown"}, 400, "ValidationError"),
    ("post", "/builder/sections", {}, 400, "ValidationError"),
    ("post", "/builder/template", {"template": "holiday"}, 400, "ValidationError"),
    ("post", "/builder/sections/missing/duplicate", None, 404, "NotFoundError"),
    ("patch", "/builder/sections/missing", {"field": "content", "key": "a", "value": 1}, 404, "NotFoundError"),
    ("post", "/builder/sections/missing/move", {"to_index": 1}, 404, "NotFoundError"),
    ("post", "/builder/theme/preset", {"preset": "neon"}, 400, "ValidationError"),
    ("post", "/builder/versions/4/restore", None, 404, "NotFoundError"),
])
def test_builder_error_mapping(client, auth_headers, store, method, path, payload, status, error):
    response = getattr(client, method)(f"{API}{path}", json=payload, headers=auth_headers)

    assert response.status_code == status
    assert response.get_json()["error"] == error


def test_move_requires_integer_index(client, auth_headers, store):
    hero_id = client.post(f"{API}/builder/sections", json={"type": "hero"}, headers=auth_headers).get_json()["section_id"]

    response = client.post(f"{API}/builder/sections/{hero_id}/move", json={"to_index": "1"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.get_json()["field"] == "to_index"


def test_update_rejects_unknown_field(client, auth_headers, store):
    hero_id = client.post(f"{API}/builder/sections", json={"type": "hero"}, headers=auth_headers).get_json()["section_id"]

    response = client.patch(
        f"{API}/builder/sections/{hero_id}",
        json={"field": "visible", "key": "x", "value": False},
        headers=auth_headers,
    )
    assert response.status_code == 400


# ------------------------
# Persistence
# ------------------------
def test_publish_empty_store_is_rejected(client, auth_headers, store):
    response = client.post(f"{API}/builder/publish", headers=auth_headers)

    assert response.status_code == 400
    assert response.get_json()["error"] == "InvariantViolation"


def test_save_publish_and_restore(client, auth_headers, store):
    client.post(f"{API}/builder/template", json={"template": "standard"}, headers=auth_headers)

    body = client.post(f"{API}/builder/save", headers=auth_headers).get_json()
    assert body["message"] == "Draft saved"

    body = client.post(f"{API}/builder/publish", headers=auth_headers).get_json()
    assert body["version"] == 1

    client.post(f"{API}/builder/template", json={"template": "landing"}, headers=auth_headers)
    body = client.post(f"{API}/builder/publish", headers=auth_headers).get_json()
    assert body["version"] == 2

    versions = client.get(f"{API}/builder/versions", headers=auth_headers).get_json()
    assert [v["version"] for v in versions] == [2, 1]

    body = client.post(f"{API}/builder/versions/1/restore", headers=auth_headers).get_json()
    assert body["restored_version"] == 1
    assert _types(body) == ["hero", "features", "product_grid"]

    current = client.get(f"{API}/stores/current", headers=auth_headers).get_json()
    assert current["status"] == "published"

    body = client.post(f"{API}/builder/unpublish", headers=auth_headers).get_json()
    assert body["message"] == "Store unpublished"
    assert client.post(f"{API}/builder/unpublish", headers=auth_headers).status_code == 400

    actions = [
        entry["action"]
        for entry in client.get(f"{API}/stores/activity?limit=50", headers=auth_headers).get_json()["data"]
    ]
    assert actions.count("store.publish") == 2
    assert "Published version 2" in [
        entry["summary"]
        for entry in client.get(f"{API}/stores/activity", headers=auth_headers).get_json()["data"]
    ]
    assert "store.save_draft" in actions


def test_reload_discards_unsaved_edits(client, auth_headers, store):
    client.post(f"{API}/builder/sections", json={"type": "hero"}, headers=auth_headers)

    body = client.post(f"{API}/builder/reload", headers=auth_headers).get_json()
    assert body["document"]["sections"] == []
    assert body["history"]["can_undo"] is False


def test_stale_save_is_a_conflict(client, auth_headers, store):
    client.post(f"{API}/builder/sections", json={"type": "hero"}, headers=auth_headers)

    headers = dict(auth_headers, **{"If-Unmodified-Since": "Mon, 01 Jan 2001 00:00:00 GMT"})
    response = client.post(f"{API}/builder/save", headers=headers)

    assert response.status_code == 409
    assert response.get_json()["error"] == "ConflictError"


def test_fresh_save_passes_lock(client, auth_headers, store):
    headers = dict(auth_headers, **{"If-Unmodified-Since": "Fri, 01 Jan 2100 00:00:00 GMT"})
    assert client.post(f"{API}/builder/save", headers=headers).status_code == 200


def test_invalid_unmodified_since_header(client, auth_headers, store):
    headers = dict(auth_headers, **{"If-Unmodified-Since": "yesterday-ish"})
    assert client.post(f"{API}/builder/save", headers=headers).status_code == 400


def test_memory_backend_flow(app, client, auth_headers):
    app.config["BUILDER_GATEWAY"] = "memory"

    response = client.post(
        f"{API}/stores",
        json={"store_name": "Green Leaf", "slug": "green-leaf"},
        headers=auth_headers,
    )
    assert response.status_code == 201

    client.post(f"{API}/builder/sections", json={"type": "gallery"}, headers=auth_headers)
    body = client.post(f"{API}/builder/publish", headers=auth_headers).get_json()
    assert body["version"] == 1

    current = client.get(f"{API}/stores/current", headers=auth_headers).get_json()
    assert current["status"] == "published"


@pytest.mark.parametrize("payload, field", [
    ({"store_name": "Green Leaf", "slug": 12345}, "slug"),
    ({"store_name": "Green Leaf", "slug": ["green-leaf"]}, "slug"),
    ({"store_name": 42, "slug": "green-leaf"}, "store_name"),
    ({"store_name": {"en": "Green Leaf"}, "slug": "green-leaf"}, "store_name"),
])
def test_create_store_rejects_non_string_fields(client, auth_headers, payload, field):
    response = client.post(f"{API}/stores", json=payload, headers=auth_headers)

    assert response.status_code == 400
    assert response.get_json()["error"] == "ValidationError"
    assert response.get_json()["field"] == field


@pytest.mark.parametrize("limit", [-1, 0])
def test_activity_limit_is_at_least_one(client, auth_headers, store, limit):
    for _ in range(3):
        client.post(f"{API}/builder/save", headers=auth_headers)

    response = client.get(f"{API}/stores/activity?limit={limit}", headers=auth_headers)

    assert response.status_code == 200
    assert len(response.get_json()["data"]) == 1


def test_activity_limit_is_capped(client, auth_headers, store):
    for _ in range(3):
        client.post(f"{API}/builder/save", headers=auth_headers)

    data = client.get(f"{API}/stores/activity?limit=1000", headers=auth_headers).get_json()["data"]
    assert len(data) == 4


def test_undo_reports_reverted_theme_preset(client, auth_headers, store):
    body = client.post(f"{API}/builder/theme/preset", json={"preset": "dark-mode"}, headers=auth_headers).get_json()
    assert body["selected_theme_id"] == "dark-mode"

    body = client.post(f"{API}/builder/undo", headers=auth_headers).get_json()
    assert body["selected_theme_id"] is None
    assert body["document"]["theme"]["colors"]["background"] == "#ffffff"
