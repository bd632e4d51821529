"""FastAPI application entry point. Registers middleware, error handlers, routers and static uploads."""

import logging
import os
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException
from intern_admin.config import settings
from intern_admin.database import Base, engine
import intern_admin.models  # noqa: F401 - registers model metadata
from intern_admin.routers import programs, registrations, selection, uploads, wilayah
from intern_admin.services.upload_service import ensure_upload_dirs

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Internship Registration Admin API",
    description="Program listings, applicant selection and participant tracking",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    content = {"success": False, "message": str(exc.detail)}
    if exc.status_code >= 500 and settings.DEBUG and exc.__cause__ is not None:
        content["error"] = str(exc.__cause__)
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid input for '{location}': {first.get('msg')}" if location else str(first.get("msg"))
    return JSONResponse(status_code=400, content={"success": False, "message": message})


@app.exception_handler(SQLAlchemyError)
async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("[storage] %s %s failed", request.method, request.url.path)
    content = {"success": False, "message": "Internal server error"}
    if settings.DEBUG:
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


app.include_router(programs.router)
app.include_router(selection.router)
app.include_router(registrations.router)
app.include_router(uploads.router)
app.include_router(wilayah.router)


@app.on_event("startup")
def ensure_schema():
    # Create any tables missing from the database on boot.
    Base.metadata.create_all(bind=engine)
    ensure_upload_dirs()


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "Internship Registration Admin API"}


# Static file serving for uploads
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")
