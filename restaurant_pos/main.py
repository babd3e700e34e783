import logging
from contextlib import asynccontextmanager

from aiokafka import AIOKafkaProducer
from fastapi import FastAPI
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from prometheus_client import make_asgi_app

import restaurant_pos.models  # noqa: F401  registers tables on Base.metadata
from restaurant_pos.config import settings
from restaurant_pos.database import Base, engine
from restaurant_pos.events import EventPublisher
from restaurant_pos.middleware.metrics import MetricsMiddleware
from restaurant_pos.middleware.request_id import RequestIDMiddleware
from restaurant_pos.middleware.session import SessionGateMiddleware
from restaurant_pos.routers import (
    admin,
    auth,
    benchmarks,
    billing,
    kitchen,
    menu,
    orders,
    restaurant_settings,
    tables,
)
from restaurant_pos.services.menu_service import seed_demo_data
from restaurant_pos.utils.logging import setup_logging
from restaurant_pos.utils.tracing import setup_tracing

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

setup_tracing("restaurant-pos", settings.otlp_endpoint)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up, creating database tables")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    SQLAlchemyInstrumentor().instrument(engine=engine.sync_engine)

    if settings.seed_demo_data:
        await seed_demo_data()

    producer = None
    if settings.kafka_enabled:
        producer = AIOKafkaProducer(
            bootstrap_servers=settings.kafka_bootstrap_servers,
            enable_idempotence=True,
        )
        await producer.start()
    app.state.event_publisher = EventPublisher(producer)
    logger.info("Startup complete", extra={"kafka_enabled": producer is not None})

    yield

    if producer is not None:
        await producer.stop()
    await engine.dispose()
    logger.info("Shutting down")


app = FastAPI(
    title="Restaurant POS",
    description="Tables, orders, kitchen, billing and benchmark analytics",
    version="1.0.0",
    lifespan=lifespan,
)

FastAPIInstrumentor.instrument_app(app)
# Last added runs first: request ids, then metrics, then the dashboard gate
app.add_middleware(SessionGateMiddleware)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(tables.router, prefix="/dashboard/tables", tags=["tables"])
app.include_router(menu.router, prefix="/dashboard/menu", tags=["menu"])
app.include_router(orders.router, prefix="/dashboard/orders", tags=["orders"])
app.include_router(kitchen.router, prefix="/dashboard/kitchen", tags=["kitchen"])
app.include_router(billing.router, prefix="/dashboard/billing", tags=["billing"])
app.include_router(
    restaurant_settings.router, prefix="/dashboard/settings", tags=["settings"]
)
app.include_router(admin.router, prefix="/dashboard/admin", tags=["admin"])
app.include_router(benchmarks.router, prefix="/dashboard/benchmarks", tags=["benchmarks"])

# Expose Prometheus metrics at /metrics
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)


@app.get("/", tags=["auth"])
async def landing():
    return {"app": "Restaurant POS", "login": "/api/auth/login"}


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}
