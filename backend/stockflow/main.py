from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockflow.api.health import router as health_router
from stockflow.api.routes_alerts import router as alerts_router
from stockflow.api.routes_products import router as products_router
from stockflow.config import settings
from stockflow.db import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup; tables are only dropped when RESET_DB is set explicitly
    init_db(reset=settings.RESET_DB)
    yield


app = FastAPI(title="StockFlow - Inventory Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(products_router, prefix="/api/products", tags=["products"])

app.include_router(alerts_router, tags=["alerts"])
