from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.endpoints import router
from app.core.config import settings
from app.core.tracing import instrument_app, setup_tracing, shutdown_tracing
from app.shared.correlation import CorrelationMiddleware
from app.shared.errors import register_exception_handlers
from app.shared.logging_config import setup_logging

setup_logging(service_name=settings.SERVICE_NAME)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_tracing()
    yield
    shutdown_tracing()


app = FastAPI(
    title="Life Journal Service",
    description="Journal entries with AI sentiment, analytics, memories, search and yearly export",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(CorrelationMiddleware)
register_exception_handlers(app)
instrument_app(app)

app.include_router(router, prefix="/api")

@app.get("/")
async def root():
    return {"message": "Life Journal Service Running"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
