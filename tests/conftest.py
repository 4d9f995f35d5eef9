import pytest
from fastapi.testclient import TestClient

from roster.core.config import Settings
from roster.core.database import Database
from roster.main import create_app


@pytest.fixture
def database():
    db = Database("sqlite:///:memory:")
    db.create_all()
    yield db
    db.close()


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def app(database):
    settings = Settings(database_url="sqlite:///:memory:", create_tables=False)
    return create_app(settings=settings, database=database)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(client):
    def _make_user(email, name=None):
        response = client.post("/api/users", json={"name": name, "email": email})
        assert response.status_code == 201, response.text
        return response.json()

    return _make_user


@pytest.fixture
def make_course(client):
    def _make_course(title, description=None):
        response = client.post("/api/courses", json={"title": title, "description": description})
        assert response.status_code == 201, response.text
        return response.json()

    return _make_course
