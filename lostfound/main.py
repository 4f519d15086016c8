"""Main FastAPI application for the lost & found matching engine"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from lostfound.api.endpoints import items, matches, notifications
from lostfound.config import get_settings
from lostfound.database import init_db
from lostfound.exceptions import MatchingError
import logging

settings = get_settings()

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

# Stable error kind -> HTTP status
ERROR_STATUS_CODES = {
    "not_found": 404,
    "forbidden": 403,
    "invalid_input": 400,
    "store_unavailable": 503,
}

# Create FastAPI app
app = FastAPI(
    title="Lost & Found Matching API",
    description="Scores lost/found item pairs and surfaces likely matches for confirmation",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers with /api prefix
app.include_router(items.router, prefix="/api", tags=["Items"])
app.include_router(matches.router, prefix="/api", tags=["Matches"])
app.include_router(notifications.router, prefix="/api", tags=["Notifications"])


@app.exception_handler(MatchingError)
async def matching_error_handler(request: Request, exc: MatchingError):
    status_code = ERROR_STATUS_CODES.get(exc.kind, 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind}: {exc.message}")
    headers = {"Retry-After": "5"} if exc.retryable else None
    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


@app.on_event("startup")
async def startup_event():
    """Initialize database on startup"""
    logger.info("Initializing database...")
    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
