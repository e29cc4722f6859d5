"""Public-facing routes."""

from fastapi import APIRouter

from roomkeeper.api.routes import availability, rooms

router = APIRouter()


@router.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


router.include_router(availability.router)
router.include_router(rooms.router)
