"""
Pytest configuration and shared fixtures for the test suite.
Ensures proper Python path and provides common fixtures for unit and integration tests.
"""
import sys
from datetime import datetime
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root and src to Python path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
src_path = project_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


class FakeGenerator:
    """Text generator stand-in: returns `text`, raises `error`, or sleeps `delay` seconds first."""

    def __init__(self, text="", error=None, delay=0.0, model="fake-model", available=True):
        self.text = text
        self.error = error
        self.delay = delay
        self.model = model
        self.available = available
        self.prompts = []

    def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text

    async def agenerate(self, prompt):
        import asyncio

        self.prompts.append(prompt)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.text

    async def is_available(self):
        return self.available


@pytest.fixture
def fake_generator():
    return FakeGenerator


# ----- In-memory DB (for tests that need DB without touching real DB) -----
@pytest.fixture
def in_memory_engine():
    """Create an in-memory SQLite engine shared by every connection in the test."""
    return create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def db_session(in_memory_engine):
    """Create an in-memory database session. Uses api.config.Base for schema."""
    import api.models.models  # noqa: F401  (registers tables)
    from api.config import Base
    Base.metadata.create_all(in_memory_engine)
    SessionLocal = sessionmaker(bind=in_memory_engine)
    session = SessionLocal()
    yield session
    session.close()


def add_sample_course(db, *, published=True, slug="python-basics", questions_per_topic=(3, 5)):
    """A course with one topic per entry in `questions_per_topic`; option 0 is always correct."""
    from api.models.models import Course, Question, Topic

    course = Course(
        id=f"course-{slug}",
        name=f"Course {slug}",
        slug=slug,
        description="Learn Python from scratch",
        category="Programming",
        programming_language="Python",
        level="Beginner",
        duration_hours=10,
        learning_outcomes=["Write Python scripts"],
        is_published=published,
        created_at=datetime(2025, 1, 1),
    )
    for t_idx, n in enumerate(questions_per_topic, start=1):
        topic = Topic(
            id=f"{slug}-topic-{t_idx}",
            title=f"Topic {t_idx}",
            description="",
            content="Some content",
            order_index=t_idx,
            passing_score=70,
        )
        for q_idx in range(1, n + 1):
            topic.questions.append(
                Question(
                    id=f"{slug}-t{t_idx}-q{q_idx}",
                    order_index=q_idx,
                    prompt=f"Question {t_idx}.{q_idx}?",
                    options=["right", "wrong", "also wrong"],
                    correct_option_index=0,
                    explanation=f"Explanation {t_idx}.{q_idx}",
                )
            )
        course.topics.append(topic)
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


@pytest.fixture
def test_course(db_session):
    """Published course: topic 1 has 3 questions, topic 2 has 5."""
    return add_sample_course(db_session)


@pytest.fixture
def test_user(db_session):
    from api.models.models import User
    user = User(
        name="Test Learner",
        email="learner@example.com",
        hashed_password="not-a-real-hash",
        preferences={},
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def course_factory():
    return add_sample_course
