"""
Integration test fixtures. Overrides get_db and the text generator for API tests.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


@pytest.fixture
def testing_session_factory():
    """In-memory engine shared across the TestClient's threads."""
    import api.models.models  # noqa: F401
    from api.config import Base
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def override_get_db(testing_session_factory):
    def _get_db():
        db = testing_session_factory()
        try:
            yield db
        finally:
            db.close()

    return _get_db


@pytest.fixture
def generator(fake_generator):
    """Provider that answers with non-JSON text, so quiz submissions use the fallback."""
    return fake_generator(text="I am not JSON")


@pytest.fixture
def api_client(override_get_db, generator):
    """FastAPI TestClient with in-memory DB and fake text generator."""
    from fastapi.testclient import TestClient
    from api.api import app
    from api.bootstrap import get_text_generator
    from api.config import get_db
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_text_generator] = lambda: generator
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_course(testing_session_factory, course_factory):
    db = testing_session_factory()
    try:
        course = course_factory(db)
        course_factory(db, published=False, slug="draft-course", questions_per_topic=(2,))
        return course.id
    finally:
        db.close()


@pytest.fixture
def logged_in_client(api_client):
    """API client with a registered learner; the auth cookie is kept by the client."""
    response = api_client.post(
        "/auth/register",
        json={"name": "Test Learner", "email": "Learner@Example.com", "password": "testpass123"},
    )
    assert response.status_code == 201
    return api_client
