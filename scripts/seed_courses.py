#!/usr/bin/env python3
"""
Seed sample published courses with topics and quizzes.

Run: python scripts/seed_courses.py
     python scripts/seed_courses.py --reset   # drop and recreate all tables first

Courses are matched on slug, so running it twice does not duplicate anything.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from uuid import uuid4

_project_root = Path(__file__).resolve().parent.parent
for _p in (_project_root, _project_root / "src"):
    if str(_p) not in sys.path:
        sys.path.insert(0, str(_p))

from api.config import SessionLocal, create_db, reset_db  # noqa: E402
from api.models.models import Course, Question, Topic  # noqa: E402
from api.utils.logger import configure_logging  # noqa: E402

logger = configure_logging()

COURSES = [
    {
        "name": "Python Programming Fundamentals",
        "slug": "python-programming-fundamentals",
        "description": "Master Python from basics to advanced concepts with hands-on projects",
        "long_description": (
            "Comprehensive Python course covering variables, data types, control structures, "
            "functions, OOP, and more. Perfect for beginners and those looking to strengthen their foundation."
        ),
        "category": "Programming",
        "programming_language": "Python",
        "level": "Beginner",
        "duration_hours": 40,
        "is_featured": True,
        "learning_outcomes": [
            "Write clean and efficient Python code",
            "Understand object-oriented programming concepts",
            "Build real-world Python applications",
        ],
        "topics": [
            {
                "title": "Introduction to Python",
                "description": "Get started with Python syntax, variables, and data types",
                "duration_minutes": 120,
                "content": "Python is a high-level, interpreted programming language known for its simplicity and readability.",
                "passing_score": 70,
                "time_limit_minutes": 15,
                "questions": [
                    (
                        "What is Python?",
                        [
                            "A compiled programming language",
                            "An interpreted high-level programming language",
                            "A database management system",
                            "An operating system",
                        ],
                        1,
                        "Python is an interpreted, high-level programming language.",
                        "Easy",
                        10,
                    ),
                    (
                        "Which of the following is a valid variable name in Python?",
                        ["2variable", "variable_name", "variable-name", "variable name"],
                        1,
                        "Names may hold letters, digits and underscores but cannot start with a digit.",
                        "Easy",
                        10,
                    ),
                    (
                        "What is the output of: print(type(5.0))",
                        ["<class 'int'>", "<class 'float'>", "<class 'number'>", "<class 'decimal'>"],
                        1,
                        "5.0 is a floating-point number.",
                        "Easy",
                        10,
                    ),
                ],
            },
            {
                "title": "Control Flow and Loops",
                "description": "Master if-else statements, for loops, and while loops",
                "duration_minutes": 150,
                "content": "Control flow statements allow you to control the execution path of your program.",
                "passing_score": 70,
                "time_limit_minutes": 20,
                "questions": [
                    (
                        "What will be the output of the following code?\nfor i in range(3):\n    print(i)",
                        ["0 1 2", "1 2 3", "0 1 2 3", "1 2"],
                        0,
                        "range(3) generates 0 to 2; the stop value is excluded.",
                        "Medium",
                        15,
                    ),
                    (
                        "Which loop is used when you don't know how many iterations are needed?",
                        ["for loop", "while loop", "do-while loop", "foreach loop"],
                        1,
                        "While loops run until their condition becomes false.",
                        "Easy",
                        10,
                    ),
                ],
            },
        ],
    },
    {
        "name": "Data Structures and Algorithms",
        "slug": "data-structures-algorithms",
        "description": "Master essential DSA concepts for technical interviews and competitive programming",
        "long_description": (
            "Deep dive into arrays, linked lists, trees, graphs, sorting, searching, and dynamic programming."
        ),
        "category": "DSA",
        "programming_language": "Python",
        "level": "Intermediate",
        "duration_hours": 60,
        "is_featured": False,
        "learning_outcomes": [
            "Implement common data structures from scratch",
            "Analyze time and space complexity",
        ],
        "topics": [
            {
                "title": "Arrays and Strings",
                "description": "Master array manipulation and string algorithms",
                "duration_minutes": 180,
                "content": "Arrays store elements in contiguous memory locations.",
                "passing_score": 70,
                "time_limit_minutes": 25,
                "questions": [
                    (
                        "What is the time complexity of accessing an element in an array by index?",
                        ["O(1)", "O(n)", "O(log n)", "O(n^2)"],
                        0,
                        "Elements are contiguous, so indexing is constant time.",
                        "Medium",
                        15,
                    ),
                    (
                        "Which approach is best for finding duplicates in an unsorted array?",
                        ["Linear search", "Binary search", "Hash table", "Bubble sort"],
                        2,
                        "A hash set of seen elements finds duplicates in O(n).",
                        "Medium",
                        15,
                    ),
                ],
            },
        ],
    },
]


def _build_course(data: dict) -> Course:
    course = Course(
        id=str(uuid4()),
        name=data["name"],
        slug=data["slug"],
        description=data["description"],
        long_description=data["long_description"],
        category=data["category"],
        programming_language=data["programming_language"],
        level=data["level"],
        duration_hours=data["duration_hours"],
        learning_outcomes=data["learning_outcomes"],
        is_published=True,
        is_featured=data["is_featured"],
    )
    for t_idx, t in enumerate(data["topics"], start=1):
        topic = Topic(
            id=str(uuid4()),
            title=t["title"],
            description=t["description"],
            content=t["content"],
            order_index=t_idx,
            duration_minutes=t["duration_minutes"],
            passing_score=t["passing_score"],
            time_limit_minutes=t["time_limit_minutes"],
        )
        for q_idx, (prompt, options, correct, explanation, difficulty, points) in enumerate(t["questions"], start=1):
            topic.questions.append(
                Question(
                    id=str(uuid4()),
                    order_index=q_idx,
                    prompt=prompt,
                    options=options,
                    correct_option_index=correct,
                    explanation=explanation,
                    difficulty=difficulty,
                    points=points,
                )
            )
        course.topics.append(topic)
    return course


def seed() -> int:
    """Insert missing sample courses; returns how many were added."""
    create_db()
    db = SessionLocal()
    added = 0
    try:
        for data in COURSES:
            if db.query(Course).filter(Course.slug == data["slug"]).first() is not None:
                logger.info("course exists, skipping slug=%s", data["slug"])
                continue
            db.add(_build_course(data))
            added += 1
            logger.info("seeded course slug=%s topics=%s", data["slug"], len(data["topics"]))
        db.commit()
    finally:
        db.close()
    return added


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed sample courses")
    parser.add_argument("--reset", action="store_true", help="Drop and recreate all tables first")
    args = parser.parse_args()
    if args.reset:
        reset_db()
    added = seed()
    print(f"Seeded {added} course(s).")


if __name__ == "__main__":
    main()
