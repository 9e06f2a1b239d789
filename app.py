"""
CarePair Backend
FastAPI application for patient/caretaker medication adherence tracking
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Configuration and database
from config import settings
from database import create_db_engine, create_session_factory, init_db, DatabaseHealthCheck
from errors import CarePairError
from api import include_routers

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)


# ==================== LIFESPAN ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler: owns the database engine"""
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENV}")
    
    # An engine placed on app.state beforehand (tests, embedding) is reused
    owns_engine = getattr(app.state, "engine", None) is None
    if owns_engine:
        app.state.engine = create_db_engine()
        app.state.session_factory = create_session_factory(app.state.engine)
    
    try:
        init_db(app.state.engine)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise
    
    yield
    
    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}")
    if owns_engine:
        app.state.engine.dispose()
        app.state.engine = None
        app.state.session_factory = None


# ==================== APP INITIALIZATION ====================

app = FastAPI(
    title=settings.APP_NAME,
    description="""
    ## CarePair API
    
    Medication adherence tracking for patients paired one-to-one with a caretaker.
    
    ### Features
    - **Pairing**: every patient is bound to an available caretaker at signup
    - **Daily logs**: patients mark their medication as taken; unmarked past days count as missed
    - **Dashboards**: adherence rate, streak and weekly/monthly rollups for both roles
    """,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

include_routers(app, prefix=settings.API_PREFIX)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its status and duration"""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)")
    return response


# ==================== EXCEPTION HANDLERS ====================

def _error_response(status_code: int, message, code: str = None) -> JSONResponse:
    content = {
        "error": True,
        "message": message,
        "status_code": status_code,
        "timestamp": datetime.utcnow().isoformat()
    }
    if code:
        content["code"] = code
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(CarePairError)
async def domain_exception_handler(request, exc: CarePairError):
    return _error_response(exc.status_code, exc.message, exc.code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    fields = [".".join(str(part) for part in err["loc"][1:]) for err in exc.errors()]
    message = "Missing or invalid fields"
    if fields:
        message = f"{message}: {', '.join(f for f in fields if f)}"
    return _error_response(400, message, "ValidationError")


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    return _error_response(exc.status_code, exc.detail)


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    logger.error(f"Unexpected error: {exc}", exc_info=True)
    return _error_response(
        500,
        "An unexpected error occurred" if not settings.DEBUG else str(exc),
        "UnexpectedError"
    )


# ==================== HEALTH ENDPOINTS ====================

@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - basic health check"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat()
    }


@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """Detailed health check endpoint"""
    engine = request.app.state.engine
    db_connected = DatabaseHealthCheck.is_connected(engine)
    
    return {
        "status": "healthy" if db_connected else "degraded",
        "timestamp": datetime.utcnow().isoformat(),
        "checks": {
            "database": {
                "status": "up" if db_connected else "down",
                "type": engine.dialect.name
            }
        },
        "version": settings.APP_VERSION,
        "environment": settings.ENV
    }


# ==================== MAIN ====================

if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "app:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
