from conftest import auth, upload


def test_creator_creates_type_owned_by_caller(client, creator):
    creator_user, token = creator
    resp = client.post(
        "/document-types",
        json={"name": "Contract", "description": "Signed contracts", "createdBy": 999},
        headers=auth(token),
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Contract"
    assert body["isActive"] is True
    assert body["createdBy"] == creator_user["id"]


def test_uploader_cannot_create_type(client, uploader):
    resp = client.post("/document-types", json={"name": "Receipt"}, headers=auth(uploader[1]))
    assert resp.status_code == 403
    assert resp.json()["error"] == "Forbidden"


def test_list_get_and_count(client, admin, invoice_type):
    token = admin[1]
    client.post("/document-types", json={"name": "Archive", "isActive": False}, headers=auth(token))

    names = [t["name"] for t in client.get("/document-types", headers=auth(token)).json()]
    assert names == ["Archive", "Invoice"]
    active = client.get("/document-types", params={"active": True}, headers=auth(token)).json()
    assert [t["name"] for t in active] == ["Invoice"]

    assert client.get("/document-types/count", headers=auth(token)).json() == {"count": 2}
    resp = client.get(f"/document-types/{invoice_type['id']}", headers=auth(token))
    assert resp.json()["description"] == "Supplier invoices"
    assert client.get("/document-types/999", headers=auth(token)).status_code == 404


def test_update_by_creator_and_not_by_approver(client, creator, approver, invoice_type):
    type_id = invoice_type["id"]
    resp = client.patch(f"/document-types/{type_id}", json={"description": "All invoices"}, headers=auth(approver[1]))
    assert resp.status_code == 403

    resp = client.patch(f"/document-types/{type_id}", json={"description": "All invoices"}, headers=auth(creator[1]))
    assert resp.status_code == 204
    body = client.get(f"/document-types/{type_id}", headers=auth(creator[1])).json()
    assert body["description"] == "All invoices"
    assert body["name"] == "Invoice"


def test_only_admin_deletes_type(client, admin, creator, invoice_type):
    type_id = invoice_type["id"]
    assert client.delete(f"/document-types/{type_id}", headers=auth(creator[1])).status_code == 403
    assert client.delete(f"/document-types/{type_id}", headers=auth(admin[1])).status_code == 204
    assert client.get(f"/document-types/{type_id}", headers=auth(admin[1])).status_code == 404


def test_delete_referenced_type_is_conflict(client, admin, uploader, invoice_type):
    upload(client, uploader[1], invoice_type["id"])
    resp = client.delete(f"/document-types/{invoice_type['id']}", headers=auth(admin[1]))
    assert resp.status_code == 409


def test_null_for_required_fields_leaves_them_unchanged(client, admin, invoice_type):
    token = admin[1]
    type_id = invoice_type["id"]
    for body in ({"name": None}, {"isActive": None}):
        resp = client.patch(f"/document-types/{type_id}", json=body, headers=auth(token))
        assert resp.status_code == 204

    body = client.get(f"/document-types/{type_id}", headers=auth(token)).json()
    assert body["name"] == "Invoice"
    assert body["isActive"] is True

    resp = client.patch(f"/document-types/{type_id}", json={"description": None}, headers=auth(token))
    assert resp.status_code == 204
    assert client.get(f"/document-types/{type_id}", headers=auth(token)).json()["description"] is None
