import logging

from fastapi import APIRouter, Request
from starlette.concurrency import run_in_threadpool

from kiosk.domain.schemas import OrderIn, OrderOut, RecordOrderIn, StatusUpdate
from kiosk.infrastructure.notification_hub import NEW_ORDER, ORDER_UPDATED, ORDER_DELETED

router = APIRouter()
logger = logging.getLogger(__name__)

def _order(order) -> dict:
    return OrderOut.model_validate(order).model_dump(mode="json")

@router.post("/orders", status_code=201)
async def create_order(payload: OrderIn, request: Request):
    order = _order(await run_in_threadpool(request.app.state.order_repo.create_order, payload.model_dump()))
    # Push to any admin screen that is open
    await request.app.state.hub.broadcast(NEW_ORDER, order)
    return {"success": True, "order": order}

@router.get("/orders")
def list_orders(request: Request):
    return [_order(o) for o in request.app.state.order_repo.list_orders()]

@router.patch("/orders/{order_id}/status")
async def update_order_status(order_id: int, payload: StatusUpdate, request: Request):
    order = _order(await run_in_threadpool(request.app.state.order_repo.update_status, order_id, payload.status))
    await request.app.state.hub.broadcast(ORDER_UPDATED, order)
    return {"success": True, "order": order}

@router.delete("/orders/{order_id}")
async def delete_order(order_id: int, request: Request):
    await run_in_threadpool(request.app.state.order_repo.delete_order, order_id)
    await request.app.state.hub.broadcast(ORDER_DELETED, {"id": order_id})
    return {"success": True, "message": "Order deleted"}

@router.post("/record-order")
def record_order(payload: RecordOrderIn, request: Request):
    items = [item.model_dump() for item in payload.items]
    request.app.state.sales_ledger.record_order(payload.order_id, items)

    if payload.total is not None:
        items_total = sum(item["price"] * item["quantity"] for item in items)
        if abs(items_total - payload.total) > 0.01:
            logger.warning(
                f"⚠️ Order {payload.order_id}: items sum to {items_total:.2f}, "
                f"declared total is {payload.total:.2f}"
            )
    return {"success": True}
