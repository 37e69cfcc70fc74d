from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import logging

from task_portal.config.settings import settings
from task_portal.database import Base, SessionLocal, engine
from task_portal.routers import admin, auth, employee, tasks
from task_portal.services.credentials import CredentialStore
from task_portal.services.exceptions import StorageError, TaskPortalError

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Task Portal API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Route registration
app.include_router(auth.router, tags=["Authentication"])
app.include_router(admin.router, tags=["Admin"])
app.include_router(employee.router, tags=["Employee"])
app.include_router(tasks.router, tags=["Tasks"])


# Error mapping
@app.exception_handler(TaskPortalError)
async def task_portal_error_handler(request: Request, exc: TaskPortalError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in error["loc"][1:]), "message": error["msg"]}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"detail": "Invalid request", "errors": errors})


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return await task_portal_error_handler(request, StorageError())


# Startup event
@app.on_event("startup")
def startup_event():
    """Create tables and the default admin when the application starts"""
    logger.info("Starting Task Portal API...")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        CredentialStore(db).ensure_default_admin()
    finally:
        db.close()


# Root route
@app.get("/")
def read_root():
    return {"message": "Task Portal API"}

@app.get("/health")
def health():
    return {"status": "ok"}
