from fastapi import FastAPI, Depends, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from sqlalchemy.orm import Session

import crud
from config import settings
from database import get_db, check_connection, create_tables, dispose_engine
from errors import MISSING_FIELDS_MESSAGE, ReadingServiceError, ValidationError
from logger import get_logger
from schemas import (
    MoistureReadingIn, ReadingOut, PotSummary, ReadingCreated, PotHistory,
    ReadingList, PotList, CleanupResult, HealthStatus, ErrorBody,
)
from utils import iso_now, format_days

console = get_logger("waterboy")

app = FastAPI(title="Waterboy API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # sensors and dashboards post from anywhere on the LAN
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_RESPONSES = {500: {"model": ErrorBody}}


# ---------- Lifecycle ----------
@app.on_event("startup")
def on_startup():
    console.info("=================================")
    console.info("Waterboy API Server")
    console.info("=================================")
    console.info(f"Server running on port {settings.port}")
    console.info(f"Environment: {settings.app_env}")
    console.info(f"Health check: http://localhost:{settings.port}/health")
    console.info("=================================")
    if check_connection() and settings.db_create_tables:
        create_tables()
        console.info("Ensured readings table exists")


@app.on_event("shutdown")
def on_shutdown():
    dispose_engine()


# ---------- Error boundary ----------
@app.exception_handler(ReadingServiceError)
async def reading_service_error_handler(request: Request, exc: ReadingServiceError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    problems = exc.errors()
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in problems
    )
    if any(err["loc"] and err["loc"][0] == "body" for err in problems):
        err = ValidationError(MISSING_FIELDS_MESSAGE, details)
    else:
        err = ValidationError("Invalid query parameters", details)
    console.warning(f"Rejected {request.method} {request.url.path}: {details}")
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    console.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    err = ReadingServiceError(details=str(exc))
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


# ---------- Health ----------
@app.get("/health", response_model=HealthStatus)
def health():
    return HealthStatus(status="ok", timestamp=iso_now())


# ---------- Readings ----------
FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def reading_payload(request: Request) -> MoistureReadingIn:
    """Accept the reading as JSON or as a form post (some boards only speak forms)."""
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith(FORM_CONTENT_TYPES):
            raw = dict(await request.form())
        else:
            raw = await request.json()
    except ValueError as e:
        raise RequestValidationError(
            [{"type": "body_invalid", "loc": ("body",), "msg": str(e), "input": None}]
        ) from e
    try:
        return MoistureReadingIn.model_validate(raw)
    except PydanticValidationError as e:
        raise RequestValidationError(
            [{**err, "loc": ("body", *err["loc"])} for err in e.errors()]
        ) from e


_reading_schema = MoistureReadingIn.model_json_schema()


@app.post(
    "/api/moisture",
    response_model=ReadingCreated,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorBody}, **ERROR_RESPONSES},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": _reading_schema},
                "application/x-www-form-urlencoded": {"schema": _reading_schema},
            },
        }
    },
)
def submit_reading(body: MoistureReadingIn = Depends(reading_payload), db: Session = Depends(get_db)):
    console.info(f"Received data: {body.model_dump()}")
    reading = crud.create_reading(
        db,
        pot_id=body.pot_id,
        location=body.location,
        raw_value=body.raw_value,
        moisture_percent=body.moisture_percent,
    )
    return ReadingCreated(data=ReadingOut.model_validate(reading))


@app.get("/api/moisture/{pot_id}", response_model=PotHistory, responses=ERROR_RESPONSES)
def pot_history(pot_id: str, limit: int = Query(100), db: Session = Depends(get_db)):
    readings = crud.get_pot_history(db, pot_id, limit)
    return PotHistory(
        pot_id=pot_id,
        count=len(readings),
        data=[ReadingOut.model_validate(r) for r in readings],
    )


# ---------- Pots ----------
@app.get("/api/pots/latest", response_model=ReadingList, responses=ERROR_RESPONSES)
def latest_per_pot(db: Session = Depends(get_db)):
    readings = crud.get_latest_per_pot(db)
    return ReadingList(count=len(readings), data=[ReadingOut.model_validate(r) for r in readings])


@app.get("/api/pots", response_model=PotList, responses=ERROR_RESPONSES)
def list_pots(db: Session = Depends(get_db)):
    rows = crud.list_pots(db)
    return PotList(count=len(rows), data=[PotSummary.model_validate(r) for r in rows])


# ---------- Maintenance ----------
@app.delete("/api/readings/cleanup", response_model=CleanupResult, responses=ERROR_RESPONSES)
def cleanup_readings(days: float = Query(30, allow_inf_nan=False), db: Session = Depends(get_db)):
    deleted = crud.delete_readings_older_than(db, days)
    return CleanupResult(
        deleted=deleted,
        message=f"Deleted readings older than {format_days(days)} days",
    )


def main():
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
