# tests/conftest.py
"""
Pytest configuration and fixtures.
"""

import os

import pytest

# Set test environment before any wararka module reads settings
os.environ.setdefault("TESTING", "1")
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["LOG_FORMAT"] = "text"


@pytest.fixture
def db_session():
    """Session on a fresh in-memory schema, dropped after the test."""
    from wararka import models  # noqa: F401
    from wararka.database import Base, SessionLocal, engine

    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def long_body():
    """Article body that passes the completeness check."""
    return " ".join(["Somali football clubs met in Mogadishu for the regional final."] * 6)
