import os

# Point the application engine at an in-memory database before user_api is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import sessionmaker
from user_api.core.database import Base, get_db
from user_api.main import app


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    """Test client whose requests each get a fresh session on the test engine"""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def user_data():
    """A valid user body in the JSON shape the API accepts"""

    def make(**overrides):
        data = {
            "firstName": "Ann",
            "lastName": "Lee",
            "email": "a@x.com",
            "phone": "+1 (555) 123-4567",
            "streetAddress": "1 Main Street",
            "city": "Springfield",
            "state": "IL",
            "userName": "alice",
            "password": "secret1",
        }
        data.update(overrides)
        return data

    return make
