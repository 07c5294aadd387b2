"""
Mock exchange REST APIs serving synthetic books in each venue's native schema.

Paths match the real endpoints, so one server can stand in for every venue:
uvicorn mock_apis.app:app --port 8000
COINBASE_BASE_URL=http://localhost:8000 GEMINI_BASE_URL=http://localhost:8000 python -m book_cost
"""
from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse
from typing import List, Optional, Tuple
import random, time

app = FastAPI(title="Mock Exchange Order Book APIs")

BASE_PRICES = {"BTC": 68000.0, "ETH": 3500.0, "SOL": 150.0}
TICK = 0.01
KRAKEN_ALIASES = {"XBT": "BTC", "XDG": "DOGE"}


def synthetic_levels(base: str, depth: int, seed: Optional[int]) -> Tuple[List[Tuple[float, float]], List[Tuple[float, float]]]:
    rng = random.Random(seed)
    base_price = BASE_PRICES[base]
    bids = [(round(base_price - i*TICK, 8), round(rng.uniform(0.1, 5.0), 8)) for i in range(1, depth+1)]
    asks = [(round(base_price + i*TICK, 8), round(rng.uniform(0.1, 5.0), 8)) for i in range(1, depth+1)]
    return bids, asks


def unknown_product(name: str):
    return JSONResponse({"message": f"unknown product {name}"}, status_code=404)


@app.get("/health")
def health(): return {"status": "ok", "ts": int(time.time())}


@app.get("/products/{product_id}/book")
async def coinbase_book(product_id: str, level: int = 2, depth: int = Query(20, ge=1, le=500), seed: Optional[int] = None):
    base = product_id.split("-")[0].upper()
    if base not in BASE_PRICES: return unknown_product(product_id)
    bids, asks = synthetic_levels(base, depth, seed)
    return {"bids": [[str(p), str(q), 1] for p, q in bids],
            "asks": [[str(p), str(q), 1] for p, q in asks],
            "sequence": int(time.time() * 1000)}


@app.get("/v1/book/{symbol}")
async def gemini_book(symbol: str, depth: int = Query(20, ge=1, le=500), seed: Optional[int] = None):
    base = symbol.upper()[:-3]
    if base not in BASE_PRICES: return unknown_product(symbol)
    bids, asks = synthetic_levels(base, depth, seed)
    ts = str(int(time.time()))
    return {"bids": [{"price": str(p), "amount": str(q), "timestamp": ts} for p, q in bids],
            "asks": [{"price": str(p), "amount": str(q), "timestamp": ts} for p, q in asks]}


@app.get("/0/public/Depth")
async def kraken_depth(pair: str, count: int = Query(20, ge=1, le=500), seed: Optional[int] = None):
    base = pair.upper()[:-3]
    base = KRAKEN_ALIASES.get(base, base)
    if base not in BASE_PRICES: return {"error": ["EQuery:Unknown asset pair"], "result": {}}
    bids, asks = synthetic_levels(base, count, seed)
    ts = int(time.time())
    return {"error": [], "result": {pair.upper(): {"bids": [[str(p), str(q), ts] for p, q in bids],
                                                   "asks": [[str(p), str(q), ts] for p, q in asks]}}}
