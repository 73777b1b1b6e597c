# Users router — household members and per-user PIN verification.
# Created: 2026-10-04

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from homeboard.api.deps import get_pin_limiter, get_store
from homeboard.api.v1.schemas.pin import VerifyPinResponse, VerifyUserPinRequest
from homeboard.api.v1.schemas.users import CreateUserRequest, UpdateUserRequest, UserPublic
from homeboard.models import User
from homeboard.security.pin_limiter import PinAttemptLimiter
from homeboard.security.verification import hash_pin_async, verify_user_pin
from homeboard.store import FileHouseholdStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Users"])


@router.get("/users", response_model=list[UserPublic])
async def list_users(store: FileHouseholdStore = Depends(get_store)):
    return [UserPublic.from_user(u) for u in await store.list_users()]


@router.post("/users", response_model=UserPublic)
async def create_user(body: CreateUserRequest, store: FileHouseholdStore = Depends(get_store)):
    users = await store.list_users()
    user = User(
        name=body.name,
        color=body.color,
        avatar=body.avatar,
        role=body.role,
        order=len(users),
        pin=await hash_pin_async(body.pin) if body.pin else None,
    )
    await store.save_user(user)
    return UserPublic.from_user(user)


@router.post("/users/verify-pin", response_model=VerifyPinResponse)
async def verify_pin(
    body: VerifyUserPinRequest,
    store: FileHouseholdStore = Depends(get_store),
    limiter: PinAttemptLimiter = Depends(get_pin_limiter),
):
    """Check a member's PIN, falling back to the household adult PIN."""
    key = f"user:{body.user_id}"
    limiter.check(key)

    user = await store.get_user(body.user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    valid = await verify_user_pin(store, user, body.pin)
    if valid:
        limiter.clear(key)
    else:
        limiter.record_failure(key)
    return VerifyPinResponse(valid=valid)


@router.get("/users/{user_id}", response_model=UserPublic)
async def get_user(user_id: str, store: FileHouseholdStore = Depends(get_store)):
    user = await store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return UserPublic.from_user(user)


@router.put("/users/{user_id}", response_model=UserPublic)
async def update_user(
    user_id: str,
    body: UpdateUserRequest,
    store: FileHouseholdStore = Depends(get_store),
):
    """Update a member. ``pin: ""`` removes the PIN; a new PIN is stored hashed."""
    user = await store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")

    changes = body.model_dump(exclude_unset=True)
    if "name" in changes and body.name is not None:
        user.name = body.name
    if "color" in changes:
        user.color = body.color
    if "avatar" in changes:
        user.avatar = body.avatar
    if "role" in changes and body.role is not None:
        user.role = body.role
    if "pin" in changes:
        user.pin = await hash_pin_async(body.pin) if body.pin else None

    await store.save_user(user)
    return UserPublic.from_user(user)


@router.delete("/users/{user_id}")
async def delete_user(user_id: str, store: FileHouseholdStore = Depends(get_store)):
    if not await store.delete_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return {"success": True}
