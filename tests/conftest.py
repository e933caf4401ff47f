import os

import pytest

# Cheap password hashing for the demo user reseeded before every test
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from lazynote.core.database import reset_db  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_database():
    """Every test starts from the seeded demo data"""
    reset_db(seed=True)
    yield
