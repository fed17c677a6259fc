"""
Matrimony Client API - FastAPI Application
Search, profile and session glue between the mobile screens and the
remote matrimony backend.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from matrimony.config import settings
from matrimony.routers import auth_router, search_router, profiles_router, dashboard_router

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
    Client API for the matrimony mobile application.

    Features:
    - Quick and advanced profile search
    - Normalized profile listings and details
    - Session-backed login/logout
    - Member dashboard summary
    """,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)


@app.on_event("startup")
async def startup_event():
    """Log the backend this instance talks to."""
    logger.info(f"{settings.APP_NAME} using backend {settings.API_BASE_URL}")


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth_router)
app.include_router(search_router)
app.include_router(profiles_router)
app.include_router(dashboard_router)


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION
    }


@app.get("/api/info")
async def app_info():
    """Application information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "backend": settings.API_BASE_URL,
        "features": [
            "Quick search",
            "Advanced search",
            "Selected profiles",
            "Profile details",
            "Dashboard summary",
            "JSON session store",
        ]
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000, reload=True)
