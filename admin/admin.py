# admin.py

from fastapi import APIRouter, Depends, HTTPException
from typing import Any, Dict, List

from database.connection import get_store
from database.store import DocumentStore, Failure
from models.common import DeletedResponse

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=List[Dict[str, Any]])
async def list_users(store: DocumentStore = Depends(get_store)):
    result = await store.find_all("users")
    if isinstance(result, Failure):
        raise HTTPException(status_code=500, detail="Cannot fetch users")
    return result.value


@router.delete("/users/{user_id}", response_model=DeletedResponse)
async def block_user(user_id: str, store: DocumentStore = Depends(get_store)):
    """Blocks a user. Blocking is a hard delete; there is no flag."""
    result = await store.delete_one("users", user_id)
    if isinstance(result, Failure):
        raise HTTPException(status_code=400, detail="Invalid User ID")
    if result.value == 0:
        raise HTTPException(status_code=404, detail="User not found")
    return {"deleted": result.value}


@router.get("/drivers", response_model=List[Dict[str, Any]])
async def list_drivers(store: DocumentStore = Depends(get_store)):
    result = await store.find_all("drivers")
    if isinstance(result, Failure):
        raise HTTPException(status_code=500, detail="Cannot fetch drivers")
    return result.value
