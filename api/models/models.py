from api.config import Base
from sqlalchemy import Column, Integer, String, JSON, Date, DateTime, ForeignKey, Text, Boolean, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    role = Column(String, default="student", nullable=False)  # student|instructor|admin
    account_status = Column(String, default="active", nullable=False)  # active|suspended|deleted
    skill_level = Column(String, default="Beginner", nullable=False)  # Beginner|Intermediate|Advanced|Expert
    preferences = Column(JSON, nullable=True)

    # Gamification
    points = Column(Integer, default=0, nullable=False)
    streak_count = Column(Integer, default=0, nullable=False)
    last_activity_date = Column(Date, nullable=True)
    total_study_time = Column(Integer, default=0, nullable=False)  # minutes

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    enrollments = relationship("Enrollment", backref="user", cascade="all, delete-orphan")
    quiz_attempts = relationship(
        "QuizAttempt",
        backref="user",
        cascade="all, delete-orphan",
        order_by="QuizAttempt.completed_at",
    )


class Course(Base):
    __tablename__ = "courses"
    id = Column(String, primary_key=True, index=True)  # uuid
    name = Column(String, unique=True, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False)
    long_description = Column(Text, nullable=True)
    category = Column(String, nullable=False)
    programming_language = Column(String, nullable=False)
    level = Column(String, default="Beginner", nullable=False)
    duration_hours = Column(Integer, nullable=False, default=0)
    learning_outcomes = Column(JSON, nullable=True)  # list[str]
    is_published = Column(Boolean, default=False, nullable=False)
    is_featured = Column(Boolean, default=False, nullable=False)
    enrolled_count = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    topics = relationship(
        "Topic",
        backref="course",
        cascade="all, delete-orphan",
        order_by="Topic.order_index",
    )


class Topic(Base):
    __tablename__ = "topics"
    id = Column(String, primary_key=True, index=True)  # uuid
    course_id = Column(String, ForeignKey("courses.id"), index=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=True)
    order_index = Column(Integer, nullable=False)
    duration_minutes = Column(Integer, nullable=True)
    passing_score = Column(Integer, default=70, nullable=False)
    time_limit_minutes = Column(Integer, default=30, nullable=False)

    questions = relationship(
        "Question",
        backref="topic",
        cascade="all, delete-orphan",
        order_by="Question.order_index",
    )


class Question(Base):
    __tablename__ = "questions"
    id = Column(String, primary_key=True, index=True)  # uuid
    topic_id = Column(String, ForeignKey("topics.id"), index=True, nullable=False)
    order_index = Column(Integer, nullable=False)
    prompt = Column(Text, nullable=False)
    options = Column(JSON, nullable=False)  # list[str]
    correct_option_index = Column(Integer, nullable=False)
    explanation = Column(Text, nullable=False, default="")
    difficulty = Column(String, default="Medium", nullable=False)  # Easy|Medium|Hard
    points = Column(Integer, default=10, nullable=False)


class Enrollment(Base):
    __tablename__ = "enrollments"
    __table_args__ = (UniqueConstraint("user_id", "course_id", name="uq_enrollment_user_course"),)
    id = Column(String, primary_key=True, index=True)  # uuid
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    course_id = Column(String, ForeignKey("courses.id"), index=True, nullable=False)
    enrolled_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    progress = Column(Integer, default=0, nullable=False)  # 0-100
    completed_topic_ids = Column(JSON, nullable=False, default=list)  # list[str], unique

    course = relationship("Course", foreign_keys=[course_id])


class QuizAttempt(Base):
    """Append-only quiz history entry."""
    __tablename__ = "quiz_attempts"
    id = Column(String, primary_key=True, index=True)  # uuid
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    course_id = Column(String, ForeignKey("courses.id"), index=True, nullable=False)
    topic_id = Column(String, ForeignKey("topics.id"), index=True, nullable=False)
    topic_title = Column(String, nullable=False)
    score = Column(Integer, nullable=False)  # 0-100
    total_questions = Column(Integer, nullable=False)
    correct_answers = Column(Integer, nullable=False)
    time_spent_seconds = Column(Integer, default=0, nullable=False)
    difficulty = Column(String, nullable=False)
    weak_areas = Column(JSON, nullable=False, default=list)  # list[str]
    recommendation = Column(JSON, nullable=True)
    completed_at = Column(DateTime, default=datetime.utcnow, nullable=False)
