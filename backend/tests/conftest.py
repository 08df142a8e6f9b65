import os

# Keep the application engine off the production database during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.core.database import Base, get_db
from app.db import models  # noqa: F401  registers the tables on Base.metadata
from app.db.seed import create_hotel, create_room, create_reviews

# Use in-memory SQLite for tests (math functions are registered on connect)
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def test_engine():
    """Create a test database engine"""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return engine


@pytest.fixture(scope="function")
def test_db_session(test_engine):
    """Create a test database session"""
    # Create all tables
    Base.metadata.create_all(bind=test_engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def override_get_db(test_db_session):
    """Override the get_db dependency for testing"""
    def _override_get_db():
        try:
            yield test_db_session
        finally:
            pass
    return _override_get_db


@pytest.fixture
def paris_hotels(test_db_session):
    """
    Three hotels around Paris:

    - "Le Marais": rooms at 800 (1 bedroom) and 950 (2 bedrooms), three reviews
    - "Montmartre": a single 1200 suite, no reviews
    - "Versailles": ~18 km away, rooms at 300 and 300 (tie), three reviews
    """
    db = test_db_session

    marais = create_hotel(db, "Le Marais", geo_lat=48.8590, geo_lng=2.3620)
    marais_single = create_room(db, marais, price=800, surface=18, bedrooms=1, bathrooms=1, room_type="Chambre simple")
    marais_double = create_room(db, marais, price=950, surface=32, bedrooms=2, bathrooms=1, room_type="Chambre double")
    create_reviews(db, marais, [4, 5, 4])

    montmartre = create_hotel(db, "Montmartre", geo_lat=48.8867, geo_lng=2.3431)
    montmartre_suite = create_room(db, montmartre, price=1200, surface=45, bedrooms=3, bathrooms=2, room_type="Suite")

    versailles = create_hotel(db, "Versailles", geo_lat=48.8049, geo_lng=2.1204)
    versailles_first = create_room(db, versailles, price=300, surface=25, bedrooms=2, bathrooms=1, room_type="Chambre double")
    versailles_second = create_room(db, versailles, price=300, surface=28, bedrooms=2, bathrooms=2, room_type="Chambre double")
    create_reviews(db, versailles, [2, 3, 3])

    db.commit()
    return {
        "marais": marais,
        "montmartre": montmartre,
        "versailles": versailles,
        "marais_single": marais_single,
        "marais_double": marais_double,
        "montmartre_suite": montmartre_suite,
        "versailles_first": versailles_first,
        "versailles_second": versailles_second,
    }
