from fastapi import APIRouter, Body, Depends, HTTPException
from typing import Any, Dict, Optional

from database.connection import get_store
from database.store import DocumentStore, Failure, FailureKind
from models.common import CreatedResponse, UpdatedResponse
from models.driver import RatingUpdate
from models.user import LoginCredentials, LoginResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=CreatedResponse, status_code=201)
async def register_user(user: Dict[str, Any] = Body(...), store: DocumentStore = Depends(get_store)):
    result = await store.insert_one("users", user)
    if isinstance(result, Failure):
        raise HTTPException(status_code=400, detail="Invalid user data")
    return {"id": result.value}


@router.post("/book", response_model=CreatedResponse, status_code=201)
async def book_ride(ride: Dict[str, Any] = Body(...), store: DocumentStore = Depends(get_store)):
    result = await store.insert_one("rides", ride)
    if isinstance(result, Failure):
        raise HTTPException(status_code=400, detail="Invalid ride booking data")
    return {"id": result.value}


@router.post("/login", response_model=LoginResponse)
async def login_user(credentials: Optional[LoginCredentials] = None, store: DocumentStore = Depends(get_store)):
    credentials = credentials or LoginCredentials()
    if not credentials.email or not credentials.password:
        raise HTTPException(status_code=400, detail="Email and password required")

    # Passwords are stored and compared in plaintext.
    result = await store.find_one("users", {"email": credentials.email, "password": credentials.password})
    if isinstance(result, Failure):
        raise HTTPException(status_code=500, detail="Login failed")

    user = result.value
    if user is None:
        raise HTTPException(status_code=401, detail="Incorrect email or password")
    return {"_id": user["_id"], "name": user.get("name"), "email": credentials.email}


@router.patch("/rate/{driver_id}", response_model=UpdatedResponse)
async def rate_driver(
    driver_id: str,
    update: Optional[RatingUpdate] = None,
    store: DocumentStore = Depends(get_store)
):
    """Overwrites the driver's rating with the submitted value."""
    update = update or RatingUpdate()
    result = await store.set_field("drivers", driver_id, "rating", update.rating)
    if isinstance(result, Failure):
        if result.kind == FailureKind.INVALID_ID:
            raise HTTPException(status_code=400, detail="Invalid Driver ID")
        raise HTTPException(status_code=400, detail="Invalid Driver ID or data")
    if result.value.matched == 0:
        raise HTTPException(status_code=404, detail="Driver not found")
    return {"updated": result.value.modified}
