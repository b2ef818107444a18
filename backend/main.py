import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from billed.config import settings
from billed.health import router as health_router
from billed.bills.routes import router as bills_router
from billed.store.service import close_store
from billed.error_handler import exception_handler

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

def configure_app_logging(level: str) -> None:
    """Application modules follow the configured level (case-insensitive, e.g. `info`)."""
    logging.getLogger('billed').setLevel(level.strip().upper())

configure_app_logging(settings.LOG_LEVEL)

# Keep external libraries at WARNING to reduce noise
logging.getLogger('uvicorn').setLevel(logging.WARNING)
logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
logging.getLogger('httpx').setLevel(logging.WARNING)

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Shutdown: close the store HTTP client
    await close_store()

app = FastAPI(
    title="Billed API",
    version="1.0.0",
    docs_url="/docs" if settings.ENV == "development" else None,
    lifespan=lifespan
)

# CORS Configuration
if settings.ENV == "development":
    origins = ["http://localhost:8080", "http://127.0.0.1:8080"]  # Front dev server
else:
    origins = [settings.STORE_API_URL]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

exception_handler(app)

app.include_router(health_router, tags=["health"])
app.include_router(bills_router, prefix="/api/bills", tags=["bills"])
