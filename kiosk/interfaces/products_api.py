import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from kiosk.core.config import settings
from kiosk.domain.schemas import ProductIn, ProductOut, ProductUpdate, StockUpdate
from kiosk.infrastructure.notification_hub import PRODUCTS_UPDATED

router = APIRouter()
logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}

def _product(product) -> dict:
    return ProductOut.model_validate(product).model_dump(mode="json")

@router.get("/products")
def list_products(request: Request):
    products = request.app.state.product_repo.list_products()
    return [_product(p) for p in products]

@router.post("/products")
async def create_product(payload: ProductIn, request: Request):
    product = await run_in_threadpool(
        request.app.state.product_repo.create_product,
        name=payload.name,
        price=payload.price,
        image_url=payload.image_url,
        category=payload.category,
    )
    await request.app.state.hub.broadcast(PRODUCTS_UPDATED)
    return {"success": True, "product": _product(product)}

@router.put("/products/{product_id}")
async def update_product(product_id: int, payload: ProductUpdate, request: Request):
    product = await run_in_threadpool(
        request.app.state.product_repo.update_product,
        product_id,
        name=payload.name,
        price=payload.price,
        image_url=payload.image_url,
        category=payload.category,
        in_stock=payload.in_stock,
    )
    await request.app.state.hub.broadcast(PRODUCTS_UPDATED)
    return {"success": True, "product": _product(product)}

@router.delete("/products/{product_id}")
async def delete_product(product_id: int, request: Request):
    await run_in_threadpool(request.app.state.product_repo.delete_product, product_id)
    await request.app.state.hub.broadcast(PRODUCTS_UPDATED)
    return {"success": True, "message": "Product deleted"}

@router.patch("/products/{product_id}/stock")
async def toggle_stock(product_id: int, request: Request, payload: Optional[StockUpdate] = None):
    in_stock = payload.in_stock if payload is not None else None
    product = await run_in_threadpool(request.app.state.product_repo.toggle_stock, product_id, in_stock)
    await request.app.state.hub.broadcast(PRODUCTS_UPDATED)
    return {"success": True, "product": _product(product)}

@router.get("/available-images")
def available_images():
    images_dir = Path(settings.IMAGES_DIR)
    try:
        files = sorted(
            entry.name for entry in images_dir.iterdir()
            if entry.is_file() and entry.suffix.lower() in IMAGE_EXTENSIONS
        )
    except OSError as e:
        logger.error(f"❌ Failed to read images from {images_dir}: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to read images"})
    return files
