import pytest
from fastapi.testclient import TestClient
from docflow.auth.deps import get_db, get_storage
from docflow.db.session import init_db, make_engine, make_session_factory
from docflow.main import create_app
from docflow.uploads.storage import FileStorage

PASSWORD = "secret123"


@pytest.fixture
def session_factory():
    engine = make_engine("sqlite://")
    init_db(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def app(session_factory, upload_dir):
    app = create_app()

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_storage] = lambda: FileStorage(upload_dir, 64 * 1024)
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def signup(client, email, role, username=None, password=PASSWORD):
    resp = client.post("/users/signup", json={
        "email": email,
        "username": username or email.split("@")[0],
        "password": password,
        "role": role,
    })
    assert resp.status_code == 200, resp.text
    return resp.json()


def login(client, email, password=PASSWORD):
    resp = client.post("/users/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


@pytest.fixture
def make_user(client):
    def _make(email, role):
        user = signup(client, email, role)
        return user, login(client, email)
    return _make


@pytest.fixture
def admin(make_user):
    return make_user("admin@example.com", "admin")


@pytest.fixture
def uploader(make_user):
    return make_user("uploader@example.com", "document_uploader")


@pytest.fixture
def approver(make_user):
    return make_user("approver@example.com", "document_approver")


@pytest.fixture
def creator(make_user):
    return make_user("creator@example.com", "document_creator")


@pytest.fixture
def invoice_type(client, admin):
    _, token = admin
    resp = client.post("/document-types", json={"name": "Invoice", "description": "Supplier invoices"}, headers=auth(token))
    assert resp.status_code == 200, resp.text
    return resp.json()


def upload(client, token, document_type_id, title="Invoice March", content=b"%PDF-1.4 test", remarks=None):
    data = {"title": title, "documentTypeId": str(document_type_id)}
    if remarks is not None:
        data["remarks"] = remarks
    return client.post(
        "/documents/upload",
        data=data,
        files={"file": ("march.pdf", content, "application/pdf")},
        headers=auth(token),
    )
