# tests/test_concurrency.py
import asyncio
import time
from types import SimpleNamespace

import httpx

from kiosk.application.scheduler import DailyReportScheduler
from kiosk.main import app

DELAY = 0.3
REQUESTS = 4

class SlowProductRepository:
    def list_products(self):
        time.sleep(DELAY)
        return []

    def create_product(self, name, price, image_url=None, category=None):
        time.sleep(DELAY)
        return SimpleNamespace(id=1, name=name, price=price, image_url="",
                               category="General", in_stock=True)

async def _concurrently(method, url, **kwargs):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        started = time.perf_counter()
        responses = await asyncio.gather(*[ac.request(method, url, **kwargs) for _ in range(REQUESTS)])
        return responses, time.perf_counter() - started

def test_slow_reads_run_in_parallel(monkeypatch):
    monkeypatch.setattr(app.state, "product_repo", SlowProductRepository())
    responses, elapsed = asyncio.run(_concurrently("GET", "/products"))
    assert all(r.status_code == 200 for r in responses)
    assert elapsed < DELAY * REQUESTS * 0.75

def test_slow_writes_do_not_block_the_loop(monkeypatch):
    monkeypatch.setattr(app.state, "product_repo", SlowProductRepository())
    responses, elapsed = asyncio.run(_concurrently("POST", "/products", json={"name": "Cola", "price": 7.5}))
    assert all(r.status_code == 200 for r in responses)
    assert elapsed < DELAY * REQUESTS * 0.75

class SlowGenerator:
    def generate(self):
        time.sleep(DELAY)
        return "report text"

class IdleHub:
    connected_count = 0

def test_scheduler_fire_runs_report_off_the_loop():
    scheduler = DailyReportScheduler(SlowGenerator(), IdleHub(), at="19:30", timezone="Asia/Jerusalem")

    async def scenario():
        started = time.perf_counter()
        results = await asyncio.gather(*[scheduler.run_once() for _ in range(REQUESTS)])
        return results, time.perf_counter() - started

    results, elapsed = asyncio.run(scenario())
    assert results == ["report text"] * REQUESTS
    assert elapsed < DELAY * REQUESTS * 0.75
