import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from kiosk.infrastructure.notification_hub import PRODUCTS_UPDATED

router = APIRouter()
logger = logging.getLogger(__name__)
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    return templates.TemplateResponse(request, "index.html", {
        "connected_clients": request.app.state.hub.connected_count,
    })

@router.get("/health")
def health_check():
    return {"status": "active"}

@router.get("/admin", response_class=HTMLResponse)
def admin(request: Request):
    return templates.TemplateResponse(request, "admin.html", {})

@router.get("/notify-update", response_class=HTMLResponse)
async def notify_update(request: Request):
    hub = request.app.state.hub
    await hub.broadcast(PRODUCTS_UPDATED)
    return templates.TemplateResponse(request, "notify_update.html", {
        "connected_clients": hub.connected_count,
    })

@router.get("/send-daily-whatsapp", response_class=HTMLResponse)
def send_daily_whatsapp(request: Request):
    """Report preview with one click-to-send WhatsApp link per configured recipient."""
    message = request.app.state.report_generator.generate()
    if message is None:
        return JSONResponse(status_code=500, content={"error": "Failed to generate the daily report"})

    return templates.TemplateResponse(request, "daily_report.html", {
        "message": message,
        "links": request.app.state.whatsapp_sender.links_for(message),
    })

@router.get("/test-daily-report", response_class=HTMLResponse)
def test_daily_report(request: Request):
    message = request.app.state.report_generator.generate()
    if message is None:
        return HTMLResponse("❌ Failed to generate the report")
    return templates.TemplateResponse(request, "test_report.html", {"message": message})
