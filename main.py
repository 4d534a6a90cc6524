# main.py
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vegshop.core.config import get_settings
from vegshop.core.errors import register_exception_handlers
from vegshop.core.logging import configure_logging
from vegshop.db import connect, get_db
from vegshop.routers import auth, daily_stock, users, vegetables
from vegshop.services.stock import StockLocks

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = connect(settings)
    app.state.db = client[settings.db_name]
    app.state.stock_locks = StockLocks()
    yield
    client.close()
    logger.info("MongoDB connection closed")


app = FastAPI(title="Vegetable Shop Inventory API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

app.include_router(vegetables.router)
app.include_router(daily_stock.router)
app.include_router(users.router)
app.include_router(auth.router)


@app.get("/ping")
async def ping_db(db=Depends(get_db)):
    res = await db.command("ping")
    return {"mongo_ok": res.get("ok")}


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
