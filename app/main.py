# app/main.py
import uvicorn
import os
import logging
import traceback
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from app.core.config import settings
from app.core.database import engine, Base
from app.core.exceptions import AppError
from app.api.v1.api import api_router
from app.models import expense, user  # noqa: F401  (register tables on Base.metadata)

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

# Create all tables on startup for local runs; deployed databases use alembic
async def create_db_and_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

@asynccontextmanager
async def lifespan(app: FastAPI):
    await create_db_and_tables()
    logger.info(f"{settings.APP_NAME} {settings.VERSION} started ({settings.ENVIRONMENT})")
    yield
    await engine.dispose()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Authentication", "description": "Registration, login and logout"},
        {"name": "User Management", "description": "Current user profile operations"},
        {"name": "expenses", "description": "Expenses owned by the authenticated user"},
    ],
)

def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
        tags=app.openapi_tags,
    )
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
    }
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)

# ------------------------------------------------------------
# ERROR RESPONSES
# ------------------------------------------------------------
def error_response(
    status_code: int,
    message: Union[str, List[str]],
    error_type: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
    stack: Optional[str] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"statusCode": status_code, "message": message}
    if error_type:
        content["errorType"] = error_type
    if stack and not settings.is_production:
        content["stack"] = stack
    return JSONResponse(status_code=status_code, content=content, headers=headers)

def _validation_messages(exc: RequestValidationError) -> List[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return messages

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return error_response(exc.status_code, exc.message, exc.error_type, headers=exc.headers)

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return error_response(HTTP_400_BAD_REQUEST, _validation_messages(exc), "Bad Request")

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), type(exc).__name__, headers=getattr(exc, "headers", None))

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Anything unrecognized becomes a generic 500"""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return error_response(
        HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        type(exc).__name__,
        stack=stack,
    )

# ------------------------------------------------------------
# ROOT ENDPOINT
# ------------------------------------------------------------
@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information"""
    return {
        "message": f"{settings.APP_NAME} is running!",
        "version": settings.VERSION,
    }

# ------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ------------------------------------------------------------
@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }

# ------------------------------------------------------------
# BUSINESS LOGIC ROUTES
# ------------------------------------------------------------
app.include_router(api_router, prefix=settings.API_PREFIX)

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    uvicorn.run("app.main:app", host=os.environ.get("HOST", "0.0.0.0"), port=port, reload=False)
