"""
Pytest configuration and fixtures for testing.
"""
import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ.pop("REDIS_URL", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

import catalog.models  # noqa: F401
from catalog.db.base import Base
from catalog.db.deps import get_db
from catalog.main import app
from catalog.modules.categories.models import Category, Subcategory
from catalog.modules.courses.models import Course, CourseSection
from catalog.modules.geo.models import Country, State
from catalog.modules.users.models import User

# Test database URL
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """FastAPI test client with test database."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def category(db):
    category = Category(name="Programming", slug="programming", position=0)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def subcategory(db, category):
    subcategory = Subcategory(
        category_id=category.id, name="Python", slug="python", position=0
    )
    db.add(subcategory)
    db.commit()
    db.refresh(subcategory)
    return subcategory


@pytest.fixture
def creator(db):
    user = User(id="creator-1", name="Asha", phone=9876543210)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def course(db, subcategory, creator):
    course = Course(
        subcategory_id=subcategory.id,
        user_id=creator.id,
        title="Python Basics",
        slug="python-basics",
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


@pytest.fixture
def other_course(db, subcategory, creator):
    course = Course(
        subcategory_id=subcategory.id,
        user_id=creator.id,
        title="Advanced Python",
        slug="advanced-python",
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


@pytest.fixture
def section(db, course):
    section = CourseSection(course_id=course.id, title="Getting started", position=0)
    db.add(section)
    db.commit()
    db.refresh(section)
    return section


@pytest.fixture
def india(db):
    country = Country(name="India", iso2="IN", iso3="IND", numeric_code=356, region="Asia")
    db.add(country)
    db.commit()
    db.refresh(country)
    return country


@pytest.fixture
def usa(db):
    country = Country(
        name="United States", iso2="US", iso3="USA", numeric_code=840, region="Americas"
    )
    db.add(country)
    db.commit()
    db.refresh(country)
    return country


@pytest.fixture
def karnataka(db, india):
    state = State(
        country_id=india.id,
        country_code="IN",
        country_name="India",
        name="Karnataka",
        iso2="KA",
        iso3166_2="IN-KA",
    )
    db.add(state)
    db.commit()
    db.refresh(state)
    return state
