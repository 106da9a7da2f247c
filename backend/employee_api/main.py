import logging
import json
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError

from employee_api.core.config import settings
from employee_api.core.database import Database
from employee_api.core.errors import EmployeeValidationError, StorageError
from employee_api.core.limiter import limiter, rate_limit, rate_limit_exceeded_handler
from employee_api.routes import employee

# Configure structured JSON logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(message)s",
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "employee-api"
VERSION = "1.0.0"


class JSONFormatter(logging.Formatter):
    def format(self, record):
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
        }
        if hasattr(record, "employee_id"):
            log_data["employee_id"] = record.employee_id
        if hasattr(record, "request_path"):
            log_data["request_path"] = record.request_path
        if hasattr(record, "status_code"):
            log_data["status_code"] = record.status_code
        if hasattr(record, "response_time"):
            log_data["response_time"] = record.response_time
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


# Apply JSON formatter to root logger
handler = logging.StreamHandler()
handler.setFormatter(JSONFormatter())
logging.getLogger().handlers = [handler]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting Employee API")
    database = Database(settings.get_database_url(), pool_size=settings.DB_POOL_SIZE)
    app.state.db = database
    try:
        await database.ping()
        logger.info("Connected to Database!")
    except (SQLAlchemyError, OSError):
        # Keep serving; queries fail with 500 until the database is reachable
        logger.error("There is an error in Connection.", exc_info=True)
    yield
    # Shutdown
    await database.dispose()
    logger.info("Shutting down Employee API")


app = FastAPI(
    title="Employee Directory API",
    description="CRUD and prefix search over the employee table",
    version=VERSION,
    lifespan=lifespan,
)

# Rate limiting: one counter per client address across every route
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = time.time() - start_time

    logger.info(
        f"{request.method} {request.url.path}",
        extra={
            "request_path": str(request.url.path),
            "status_code": response.status_code,
            "response_time": f"{process_time:.3f}s",
        },
    )

    return response


# Include routers
app.include_router(employee.router, prefix="/employee", tags=["Employee"])


@app.get("/health")
@rate_limit
async def health_check(request: Request):
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": VERSION,
        "environment": settings.ENVIRONMENT,
    }


@app.get("/ready")
@rate_limit
async def readiness_check(request: Request):
    try:
        await request.app.state.db.ping()
        return {
            "status": "ready",
            "service": SERVICE_NAME,
            "environment": settings.ENVIRONMENT,
        }
    except (SQLAlchemyError, OSError):
        logger.warning("Readiness check failed", exc_info=True)
        return JSONResponse(status_code=503, content={"status": "not_ready"})


@app.exception_handler(EmployeeValidationError)
async def employee_validation_handler(request: Request, exc: EmployeeValidationError):
    return JSONResponse(status_code=400, content={"errors": exc.errors})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed JSON bodies get the same 400 shape as rule violations
    errors = []
    for error in exc.errors():
        loc = error.get("loc", ())
        field = str(loc[-1]) if len(loc) > 1 and loc[0] != "body" else "body"
        errors.append({"field": field, "message": error.get("msg", "Invalid value")})
    return JSONResponse(status_code=400, content={"errors": errors})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    # Detail was already logged by the repository
    return PlainTextResponse("Error occurred", status_code=500)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})
