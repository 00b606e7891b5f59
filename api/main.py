import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from neo4j.exceptions import ServiceUnavailable, SessionExpired

from config import settings
from database import SCHEMA_NAMES, Neo4jConnection, get_db
from routes.truck_routes import router as truck_router
from routes.lease_contract_routes import router as lease_contract_router

# Configure logging based on settings
Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(settings.log_file),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - startup and shutdown events."""
    # Startup
    logger.info(f"Starting {settings.app_name}...")
    app.state.db = Neo4jConnection(settings)
    if not app.state.db.verify_connectivity():
        logger.warning(
            "Cannot connect to Neo4j database; constraints and indexes "
            f"{', '.join(SCHEMA_NAMES)} not ensured, retrying on next healthy /health check"
        )
    else:
        logger.info("Successfully connected to Neo4j database")
        app.state.db.ensure_schema()

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")
    app.state.db.close()


# OpenAPI tags for better documentation organization
tags_metadata = [
    {
        "name": "health",
        "description": "Health check endpoints for monitoring API status",
    },
    {
        "name": "trucks",
        "description": "Fleet trucks - create, read, delete, filter, search, sort, paginate and group by city",
    },
    {
        "name": "lease-contracts",
        "description": "Lease contracts binding a truck to a lessee - CRUD, status and amount updates, activation and totals per origin city",
    },
]

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="""
    ## Overview
    Inventory and booking backend for a truck leasing business. It keeps the
    fleet of trucks and the lease contracts that rent them out.

    ## Features
    - **Trucks**: availability by city, keyword search, capacity sorting and filtering, pagination
    - **Lease Contracts**: status filtering, keyword search, partial updates, activation
    - **Aggregations**: fleet capacity per city, lease totals per origin city
    """,
    version=settings.app_version,
    lifespan=lifespan,
    openapi_tags=tags_metadata,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    debug=settings.debug
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoint
@app.get("/health",
         tags=["health"],
         summary="Health Check",
         description="Check the health status of the API and database connectivity",
         response_description="Health status information")
def health_check(db: Neo4jConnection = Depends(get_db)):
    """Check API and database health status.

    Returns:
        dict: Health status with API status, database status, and version
    """
    connected = db.verify_connectivity()
    if connected and not db.schema_ready:
        db.ensure_schema()
    db_status = "healthy" if connected else "unhealthy"
    return {
        "status": "healthy",
        "database": db_status,
        "version": settings.app_version
    }


# Root endpoint
@app.get("/",
         summary="API Information",
         description="Get basic information about the API",
         response_description="API metadata")
def root():
    """Get basic API information.

    Returns:
        dict: API name, version, and documentation URL
    """
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "documentation": "/docs"
    }


app.include_router(truck_router)
app.include_router(lease_contract_router)


# Error handlers
@app.exception_handler(ServiceUnavailable)
@app.exception_handler(SessionExpired)
async def database_unavailable_handler(request: Request, exc: Exception):
    """Handle an unreachable Neo4j database.

    Args:
        request: The incoming request
        exc: The driver exception that was raised
    """
    logger.error(f"Database unavailable during {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"error": "Database unavailable"}
    )


@app.exception_handler(404)
async def not_found_handler(request, exc):
    """Handle 404 Not Found errors.

    Args:
        request: The incoming request
        exc: The exception that was raised
    """
    # If it's an HTTPException with a detail, preserve it
    if hasattr(exc, 'detail'):
        return JSONResponse(
            status_code=404,
            content={"detail": exc.detail}
        )
    return JSONResponse(
        status_code=404,
        content={"error": "Resource not found", "path": str(request.url)}
    )


@app.exception_handler(500)
async def internal_error_handler(request, exc):
    """Handle 500 Internal Server errors.

    Args:
        request: The incoming request
        exc: The exception that was raised
    """
    logger.error(f"Internal server error: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"}
    )


if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8000)
