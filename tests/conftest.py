# tests/conftest.py
import os

# Point the app at a throwaway in-memory database before anything imports it.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ.pop("NLP_API_KEY", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.core.database import Base, SessionLocal, engine  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.core.seed import seed_technicians  # noqa: E402
from app.main import app  # noqa: E402

RESIDENT_ID = 101
OTHER_RESIDENT_ID = 102
ADMIN_ID = 1


def bearer(user_id: int, role: str, unit: str | None, email: str) -> dict[str, str]:
    token = create_access_token(user_id, email, role, unit)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    seed_technicians(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    return TestClient(app)


@pytest.fixture
def resident_headers():
    return bearer(RESIDENT_ID, "resident", "Unit 5", "resident@example.com")


@pytest.fixture
def other_resident_headers():
    return bearer(OTHER_RESIDENT_ID, "resident", "Unit 9", "neighbour@example.com")


@pytest.fixture
def admin_headers():
    return bearer(ADMIN_ID, "admin", "ADMIN", "admin@example.com")
