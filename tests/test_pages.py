# tests/test_pages.py
from fastapi.testclient import TestClient

from kiosk.infrastructure.database import Base, engine
from kiosk.main import app
from kiosk.infrastructure.whatsapp_service import WhatsAppReportSender, whatsapp_link

def test_home_shows_connected_clients(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "Connected devices:</strong> 0" in r.text

def test_health(client):
    assert client.get("/health").json() == {"status": "active"}

def test_admin_page_renders(client):
    r = client.get("/admin")
    assert r.status_code == 200
    assert "/ws" in r.text

def test_send_daily_whatsapp_has_link_per_recipient(client):
    client.post("/record-order", json={"orderId": 1, "items": [{"name": "Cola", "quantity": 2, "price": 7.5}]})
    r = client.get("/send-daily-whatsapp")
    assert r.status_code == 200
    assert "https://wa.me/972500000000?text=" in r.text
    assert "Cola" in r.text

def test_test_daily_report_page(client):
    r = client.get("/test-daily-report")
    assert r.status_code == 200
    assert "Report generated" in r.text
    assert "No sales today" in r.text

def test_whatsapp_link_encodes_message():
    link = whatsapp_link("+972500000000", "Total: 10 & more")
    assert link == "https://wa.me/972500000000?text=Total%3A%2010%20%26%20more"

def test_sender_without_credentials_only_builds_links():
    sender = WhatsAppReportSender(recipients=["972500000000", "972511111111"])
    assert sender.enabled is False
    assert sender.send_report("hello") == 0
    assert len(sender.links_for("hello")) == 2

def test_lifespan_creates_schema():
    Base.metadata.drop_all(bind=engine)
    with TestClient(app) as c:
        r = c.get("/products")
    assert r.status_code == 200
    assert r.json() == []
