import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from kiosk.core.config import settings
from kiosk.core.errors import StorageError

# 1. Infrastructure & Application Imports
from kiosk.infrastructure.database import init_db
from kiosk.infrastructure.notification_hub import NotificationHub
from kiosk.infrastructure.repositories.product_repository import SqlProductRepository
from kiosk.infrastructure.repositories.order_repository import SqlOrderRepository
from kiosk.infrastructure.repositories.sales_repository import SqlSalesLedger
from kiosk.infrastructure.whatsapp_service import WhatsAppReportSender
from kiosk.application.report_generator import ReportGenerator
from kiosk.application.scheduler import DailyReportScheduler
from kiosk.interfaces import products_api, orders_api, realtime, pages

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    Path(settings.IMAGES_DIR).mkdir(parents=True, exist_ok=True)
    if settings.SCHEDULER_ENABLED:
        app.state.scheduler.start()
    logger.info(f"🚀 Server running on http://localhost:{settings.PORT}")
    logger.info(f"🎛️ Admin: http://localhost:{settings.PORT}/admin")
    logger.info(f"📸 Images served from: {settings.IMAGES_DIR}")
    yield
    await app.state.scheduler.stop()

app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
)

# ---------------------------------------------------------
# COMPOSITION ROOT
# ---------------------------------------------------------
hub = NotificationHub()
report_generator = ReportGenerator()
whatsapp_sender = WhatsAppReportSender()

app.state.hub = hub
app.state.product_repo = SqlProductRepository()
app.state.order_repo = SqlOrderRepository()
app.state.sales_ledger = SqlSalesLedger()
app.state.report_generator = report_generator
app.state.whatsapp_sender = whatsapp_sender
app.state.scheduler = DailyReportScheduler(report_generator, hub, whatsapp_sender)

# Include Routers
app.include_router(products_api.router)
app.include_router(orders_api.router)
app.include_router(realtime.router)
app.include_router(pages.router)

# Product images; the directory may be created after startup
app.mount("/images", StaticFiles(directory=settings.IMAGES_DIR, check_dir=False), name="images")

@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    return JSONResponse(status_code=500, content={"error": str(exc)})

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
