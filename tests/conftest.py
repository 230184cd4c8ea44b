import mongomock
import pytest

from purchy_backend.app import create_app
from purchy_backend.mongo import get_purchy_service

TEST_DB = "purchy_test"


def purchy_payload(**overrides):
    payload = {
        "Session": "S1",
        "farmer_name": "Ram",
        "code_no": "12",
        "purchy_no": "P1",
        "date": "2024-01-01",
        "weight": 60,
        "price": 200,
        "transport_status": "Unpaid",
        "transporter_name": "X",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def app(mongo_client):
    return create_app(
        {
            "TESTING": True,
            "MONGO_DBNAME": TEST_DB,
            "LOGIN_USERNAME": "admin",
            "LOGIN_PASSWORD": "secret",
        },
        mongo_client=mongo_client,
    )


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def purchies(mongo_client):
    return mongo_client[TEST_DB]["purchies"]


@pytest.fixture
def service(app):
    with app.app_context():
        return get_purchy_service()


@pytest.fixture
def add_purchy(client):
    def _add(**overrides):
        resp = client.post("/add-purchy", json=purchy_payload(**overrides))
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["purchy"]
    return _add
