"""
ArtVerse - Backend API
Marketplace connecting artists and buyers: artworks, commissions, courses
"""
import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables before settings are read
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from artverse.api import (  # noqa: E402
    artworks, auth, cart, commissions, contact, courses, dashboard, notifications, orders, uploads, users, wishlist,
)
from artverse.core.config import settings  # noqa: E402
from artverse.core.database import check_connection, init_db  # noqa: E402
from artverse.core.errors import register_exception_handlers  # noqa: E402
from artverse.core.logging_config import configure_logging  # noqa: E402

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"{settings.API_TITLE} {settings.API_VERSION} started")
    yield


app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
    lifespan=lifespan,
)

# Cookies are sent cross-site by the SPA, so credentials must be allowed
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routers
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(artworks.router, prefix="/api/artworks", tags=["Artworks"])
app.include_router(courses.router, prefix="/api/courses", tags=["Courses"])
app.include_router(cart.router, prefix="/api/cart", tags=["Cart"])
app.include_router(wishlist.router, prefix="/api/wishlist", tags=["Wishlist"])
app.include_router(orders.router, prefix="/api/orders", tags=["Orders"])
app.include_router(commissions.router, prefix="/api/commissions", tags=["Commissions"])
app.include_router(dashboard.router, prefix="/api/artists/dashboard", tags=["Artist Dashboard"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["Notifications"])
app.include_router(contact.router, prefix="/api/contact", tags=["Contact"])
app.include_router(uploads.router, prefix="/api/uploads", tags=["Uploads"])


@app.get("/")
def root():
    """Root endpoint - API status banner"""
    return {
        "message": "ArtVerse API",
        "status": "online",
        "version": settings.API_VERSION,
        "description": settings.API_DESCRIPTION,
    }


@app.get("/health")
def health():
    """Health check endpoint for monitoring - tests database connectivity"""
    start_time = time.time()
    connected, latency_ms, error = check_connection()

    return {
        "status": "healthy" if connected else "degraded",
        "service": "artverse-api",
        "version": settings.API_VERSION,
        "database": {
            "status": "connected" if connected else "disconnected",
            "latency_ms": latency_ms,
            "error": error,
        },
        "total_latency_ms": round((time.time() - start_time) * 1000, 2),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("artverse.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=False)
