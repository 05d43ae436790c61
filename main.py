"""
Medication Reminder - FastAPI Application Entry Point

A local, single-user service for a personal medication catalogue and
scheduled dose reminders.
"""

from contextlib import asynccontextmanager
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from core.config import settings
from core.logging import setup_logging
from core.database import SessionLocal, init_db
from core.exceptions import (
    FlowStateError,
    MedicationReminderError,
    NotFoundError,
    ValidationError,
)
from api.deps import notification_center, seed_catalogue
from api.v1 import doses, flows, medications, notifications
from schemas.responses import AboutResponse, StandardErrorResponse
from services.catalogue import CatalogueStore
from services.dose_ledger import DoseLedger
from services.dose_scheduler import DoseScheduler

# Setup logging
logger = setup_logging()

DISCLAIMER = (
    "本应用仅用于个人用药记录与提醒，不构成任何医疗建议或诊断。"
    "用药请遵循专业医生或药师的指导，如有不适请及时就医。"
)


def prepare_store() -> None:
    """Create the schema, seed the catalogue and re-arm pending reminders."""
    init_db()
    with SessionLocal() as db:
        seed_catalogue(CatalogueStore(db))
        scheduler = DoseScheduler(DoseLedger(db, notification_center), notification_center)
        scheduler.restore_pending_reminders()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting Medication Reminder...", env=settings.ENV)
    prepare_store()
    notification_center.start()

    yield

    notification_center.shutdown()
    logger.info("Shutting down Medication Reminder...")


app = FastAPI(
    title="Medication Reminder API",
    description="Personal medication catalogue and dose reminders",
    version=settings.VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(request: Request, status_code: int, message: str, detail=None) -> JSONResponse:
    logger.error(
        f"{message} | "
        f"Path: {request.url.path} | "
        f"Method: {request.method}"
    )
    return JSONResponse(
        status_code=status_code,
        content=StandardErrorResponse(message=message, detail=detail).model_dump(),
    )


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request body/query validation exceptions."""
    user_message = exc.errors()[0].get("msg", "Invalid input data")
    return _error_response(
        request, status.HTTP_422_UNPROCESSABLE_ENTITY, user_message, jsonable_errors(exc)
    )


@app.exception_handler(MedicationReminderError)
async def service_exception_handler(request: Request, exc: MedicationReminderError):
    if isinstance(exc, ValidationError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, FlowStateError):
        code = status.HTTP_409_CONFLICT
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return _error_response(request, code, str(exc), type(exc).__name__)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return _error_response(request, exc.status_code, str(exc.detail), str(exc))


@app.get("/api/v1/about", response_model=AboutResponse, tags=["About"])
def about():
    return AboutResponse(app_name=settings.APP_NAME, version=settings.VERSION, disclaimer=DISCLAIMER)


# Include API routers
app.include_router(medications.router, prefix="/api/v1/medications", tags=["Medications"])
app.include_router(doses.router, prefix="/api/v1/doses", tags=["Doses"])
app.include_router(flows.router, prefix="/api/v1/flows", tags=["Selection Flow"])
app.include_router(notifications.router, prefix="/api/v1/notifications", tags=["Notifications"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
