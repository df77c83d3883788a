from urllib.parse import unquote

from visitor_service.app.crud.location_crud import generate_registration_slug
from visitor_service.app.models.system_settings import SystemSettings


def _create_location(client, headers, name="Main Office"):
    return client.post("/api/locations", headers=headers,
                       json={"name": name, "address": "123 Business Ave"})


def test_slug_generation():
    assert generate_registration_slug("  Main Office ") == "main-office"
    assert generate_registration_slug("R&D Lab (North)") == "randd-lab-north"


def test_create_location_builds_slug_and_qr(client, admin_headers):
    response = _create_location(client, admin_headers)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["registrationUrl"] == "main-office"
    assert data["isActive"] is True
    assert unquote(data["qrCodeUrl"]).endswith("data=http://visitors.test/register/main-office")


def test_duplicate_names_get_unique_slugs(client, admin_headers):
    _create_location(client, admin_headers)
    second = _create_location(client, admin_headers)

    assert second.json()["data"]["registrationUrl"] == "main-office-2"


def test_location_writes_need_admin(client, headers):
    response = _create_location(client, headers(role="reception", location_id=1))

    assert response.status_code == 403


def test_public_lookup_and_slug(client, make_location):
    make_location("Main Office")
    make_location("Closed Site", is_active=False)

    lookup = client.get("/api/locations/lookup")
    by_slug = client.get("/api/locations/url/main-office")
    missing = client.get("/api/locations/url/nowhere")

    assert [item["name"] for item in lookup.json()["data"]] == ["Main Office"]
    assert by_slug.json()["data"]["name"] == "Main Office"
    assert missing.status_code == 404


def test_update_keeps_slug(client, admin_headers, make_location):
    location = make_location("Main Office")

    response = client.put(f"/api/locations/{location.id}", headers=admin_headers,
                          json={"name": "Head Office", "address": "1 New St"})

    data = response.json()["data"]
    assert data["name"] == "Head Office"
    assert data["registrationUrl"] == "main-office"


def test_location_in_use_cannot_be_deleted(client, admin_headers, make_location, make_staff):
    location = make_location()
    make_staff(location)

    response = client.delete(f"/api/locations/{location.id}", headers=admin_headers)

    assert response.status_code == 409


def test_toggle_location(client, admin_headers, make_location):
    location = make_location()

    response = client.patch(f"/api/locations/{location.id}/toggle-status", headers=admin_headers)

    assert response.json()["data"]["isActive"] is False


def test_location_counts(client, admin_headers, make_location, make_staff, make_visitor):
    location = make_location()
    make_staff(location)
    make_visitor(location)
    make_visitor(location)

    response = client.get(f"/api/locations/{location.id}", headers=admin_headers)

    data = response.json()["data"]
    assert data["visitorCount"] == 2
    assert data["staffCount"] == 1


def test_staff_crud(client, admin_headers, make_location):
    location = make_location()
    payload = {
        "firstName": "Emily",
        "lastName": "Watson",
        "locationId": location.id,
        "email": "emily.watson@company.com",
        "role": "staff",
        "canLogin": True,
        "password": "Staff123!",
    }

    created = client.post("/api/staff", headers=admin_headers, json=payload)
    duplicate = client.post("/api/staff", headers=admin_headers, json=payload)
    listed = client.get(f"/api/staff/location/{location.id}", headers=admin_headers)

    assert created.status_code == 201
    data = created.json()["data"]
    assert data["fullName"] == "Emily Watson"
    assert data["locationName"] == "Main Office"
    assert "password" not in data
    assert duplicate.status_code == 400
    assert [s["id"] for s in listed.json()["data"]] == [data["id"]]


def test_staff_for_unknown_location(client, admin_headers):
    response = client.post("/api/staff", headers=admin_headers, json={
        "firstName": "Emily", "lastName": "Watson", "locationId": 99,
        "email": "emily@company.com"})

    assert response.status_code == 404


def test_staff_listing_requires_login(client):
    assert client.get("/api/staff").status_code == 401


def test_custom_fields(client, admin_headers):
    created = client.post("/api/custom-fields", headers=admin_headers, json={
        "name": "vehicle", "type": "select", "label": "Vehicle",
        "options": ["Car", "Bike"], "order": 2})
    field_id = created.json()["data"]["id"]
    client.put(f"/api/custom-fields/{field_id}", headers=admin_headers, json={
        "name": "vehicle", "type": "select", "label": "Vehicle",
        "options": ["Car"], "isActive": False})

    public = client.get("/api/custom-fields")
    everything = client.get("/api/custom-fields/all", headers=admin_headers)

    assert created.json()["data"]["options"] == ["Car", "Bike"]
    assert public.json()["data"] == []
    assert everything.json()["data"][0]["options"] == ["Car"]


def test_settings_upsert_and_read(client, db, admin_headers):
    db.add(SystemSettings(key="IsPhotoMandatory", value="false"))
    db.commit()

    updated = client.put("/api/settings/IsPhotoMandatory", headers=admin_headers,
                         json={"value": "true"})
    created = client.put("/api/settings/Greeting", headers=admin_headers,
                         json={"value": "Welcome", "description": "Kiosk greeting"})
    read = client.get("/api/settings/IsPhotoMandatory")

    assert updated.json()["data"]["value"] == "true"
    assert created.json()["data"]["key"] == "Greeting"
    assert read.json()["data"]["value"] == "true"
    assert client.get("/api/settings/Missing").status_code == 404


def test_test_email_reports_delivery(client, admin_headers, sent_emails):
    response = client.post("/api/settings/test-email", headers=admin_headers, json={
        "toEmail": "ops@company.com", "subject": "SMTP check", "body": "hello"})

    assert response.json()["data"] is True
    assert sent_emails[0]["recipients"] == ["ops@company.com"]
