"""FastAPI application factory."""

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from roomkeeper.domain.errors import DataFetchError, InvalidRangeError, StatusWriteError
from roomkeeper.domain.room_conflict import RoomConflictError
from roomkeeper.observability.correlation import (
    CORRELATION_ID_HEADER,
    generate_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from roomkeeper.observability.logging import configure_logging

from .routers import public


def create_app() -> FastAPI:
    """Create the FastAPI app with availability and room routes mounted."""
    configure_logging()

    app = FastAPI(
        title="Roomkeeper",
        docs_url=None,
        redoc_url=None,
    )

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        cid = request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id()
        token = set_correlation_id(cid)
        try:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response
        finally:
            reset_correlation_id(token)

    # Store failures are shown as retryable messages; the UI must treat the
    # room as unavailable until a read succeeds.
    @app.exception_handler(DataFetchError)
    async def data_fetch_error_handler(request: Request, exc: DataFetchError) -> JSONResponse:
        return JSONResponse(
            status_code=503,
            content={"detail": "Availability could not be loaded, please retry", "retryable": True},
        )

    @app.exception_handler(StatusWriteError)
    async def status_write_error_handler(request: Request, exc: StatusWriteError) -> JSONResponse:
        return JSONResponse(
            status_code=502,
            content={"detail": "Room status could not be saved, please retry", "retryable": True},
        )

    @app.exception_handler(InvalidRangeError)
    async def invalid_range_handler(request: Request, exc: InvalidRangeError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(RoomConflictError)
    async def room_conflict_handler(request: Request, exc: RoomConflictError) -> JSONResponse:
        return JSONResponse(
            status_code=409,
            content={
                "detail": "Room has a conflicting reservation",
                "conflicting_reservation_id": exc.conflicting_reservation_id,
                "existing_checkin": exc.existing_checkin.isoformat(),
                "existing_checkout": exc.existing_checkout.isoformat(),
            },
        )

    app.include_router(public.router)

    return app
