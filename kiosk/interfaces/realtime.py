from fastapi import APIRouter, WebSocket, WebSocketDisconnect

router = APIRouter()

@router.websocket("/ws")
async def admin_updates(websocket: WebSocket):
    """
    Real-time channel for admin screens. Server-to-client only; anything the
    client sends is read and ignored so disconnects are noticed.
    """
    hub = websocket.app.state.hub
    await hub.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(websocket)
