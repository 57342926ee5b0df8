"""
Main FastAPI application
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from inventory.config import get_settings
from inventory.errors import InventoryError
from inventory.services.product_store import ProductStore
from inventory.api import products, stats
from inventory.utils.logger import configure_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    current = get_settings()
    configure_logging(current.DEBUG)
    store = ProductStore(current.database_url, echo=current.DEBUG)
    await store.open()
    app.state.store = store
    logger.info(f"Server running on port {current.PORT}")

    yield

    # uvicorn has drained in-flight requests by the time shutdown runs
    logger.info("Shutting down...")
    await store.close()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InventoryError)
async def inventory_error_handler(request: Request, exc: InventoryError):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = first.get("loc", ())

    # A non-numeric id can never match a product
    if loc and loc[0] == "path":
        return JSONResponse(status_code=404, content={"error": "Product not found"})
    if first.get("type") == "json_invalid":
        return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})
    if first.get("type") == "missing":
        return JSONResponse(status_code=400, content={"error": "Missing required fields"})

    field = loc[-1] if loc else "body"
    return JSONResponse(
        status_code=400,
        content={"error": f"Invalid value for {field}: {first.get('msg', 'invalid input')}"},
    )


# Include routers
app.include_router(products.router, prefix="/api/products", tags=["Products"])
app.include_router(stats.router, prefix="/api/stats", tags=["Stats"])


@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/health", response_class=PlainTextResponse)
async def health_check():
    return "OK"


def run():
    import uvicorn
    uvicorn.run(
        "inventory.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )


if __name__ == "__main__":
    run()
