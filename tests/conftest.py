# tests/conftest.py
import os
import tempfile

# Must be set before any kiosk module reads the settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["IMAGES_DIR"] = tempfile.mkdtemp(prefix="kiosk-images-")
os.environ["REPORT_PHONE_NUMBERS"] = '["972500000000"]'
os.environ["REPORT_TIMEZONE"] = "Asia/Jerusalem"
for key in ("TWILIO_ACCOUNT_SID", "TWILIO_AUTH_TOKEN", "TWILIO_FROM_NUMBER"):
    os.environ.pop(key, None)

import pytest
from fastapi.testclient import TestClient

from kiosk.domain import models  # registers tables
from kiosk.infrastructure.database import Base, engine
from kiosk.main import app

@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield

@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
