# drivers.py

from fastapi import APIRouter, Body, Depends, HTTPException
from typing import Any, Dict, Optional

from database.connection import get_store
from database.store import DocumentStore, Failure, FailureKind
from models.common import CreatedResponse, UpdatedResponse
from models.driver import AvailabilityUpdate

router = APIRouter(prefix="/drivers", tags=["drivers"])


@router.post("/register", response_model=CreatedResponse, status_code=201)
async def register_driver(driver: Dict[str, Any] = Body(...), store: DocumentStore = Depends(get_store)):
    result = await store.insert_one("drivers", driver)
    if isinstance(result, Failure):
        raise HTTPException(status_code=400, detail="Invalid driver data")
    return {"id": result.value}


@router.patch("/{driver_id}/availability", response_model=UpdatedResponse)
async def update_driver_availability(
    driver_id: str,
    update: Optional[AvailabilityUpdate] = None,
    store: DocumentStore = Depends(get_store)
):
    """Sets the driver's `available` flag. A missing flag is stored as null."""
    update = update or AvailabilityUpdate()
    result = await store.set_field("drivers", driver_id, "available", update.available)
    if isinstance(result, Failure):
        if result.kind == FailureKind.INVALID_ID:
            raise HTTPException(status_code=400, detail="Invalid Driver ID")
        raise HTTPException(status_code=500, detail="Cannot update driver availability")
    if result.value.matched == 0:
        raise HTTPException(status_code=404, detail="Driver not found")
    return {"updated": result.value.modified}


@router.post("/accept", response_model=CreatedResponse, status_code=201)
async def accept_booking(booking: Dict[str, Any] = Body(...), store: DocumentStore = Depends(get_store)):
    """Records an accepted booking as a new ride."""
    result = await store.insert_one("rides", booking)
    if isinstance(result, Failure):
        raise HTTPException(status_code=400, detail="Invalid booking data")
    return {"id": result.value}
