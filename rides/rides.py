# rides.py

from fastapi import APIRouter, Depends, HTTPException
from typing import Any, Dict, List

from database.connection import get_store
from database.store import DocumentStore, Failure
from models.common import DeletedResponse

router = APIRouter(prefix="/rides", tags=["rides"])


@router.get("", response_model=List[Dict[str, Any]])
async def list_rides(store: DocumentStore = Depends(get_store)):
    result = await store.find_all("rides")
    if isinstance(result, Failure):
        raise HTTPException(status_code=500, detail="Cannot fetch rides")
    return result.value


@router.delete("/{ride_id}", response_model=DeletedResponse)
async def cancel_ride(ride_id: str, store: DocumentStore = Depends(get_store)):
    """Cancels a ride by removing its document."""
    result = await store.delete_one("rides", ride_id)
    if isinstance(result, Failure):
        raise HTTPException(status_code=400, detail="Invalid Ride ID")
    if result.value == 0:
        raise HTTPException(status_code=404, detail="Ride not found")
    return {"deleted": result.value}
