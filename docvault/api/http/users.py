from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from docvault.core.db import get_db
from docvault.db.base import MAX_ID
from docvault.domains.identity.schemas import (
    UserCreate, UserUpdate, UserLogin, UserResponse, UserRegistered,
    UserMessageResponse, MessageResponse, UserStatsResponse
)
from docvault.domains.identity.services import IdentityService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("/register", response_model=UserRegistered, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """Register a new user"""
    user = await IdentityService(db).create_user(user_data)

    return UserRegistered(
        message="User registered successfully",
        user_id=user.id,
        username=user.username
    )


@router.get("", response_model=List[UserResponse])
async def get_all_users(db: AsyncSession = Depends(get_db)):
    """List every user"""
    users = await IdentityService(db).list_users()
    return [UserResponse.from_entity(user) for user in users]


@router.get("/username/{username}", response_model=UserResponse)
async def get_user_by_username(
    username: str,
    db: AsyncSession = Depends(get_db)
):
    user = await IdentityService(db).get_user_by_username(username)
    return UserResponse.from_entity(user)


@router.post("/login", response_model=UserMessageResponse)
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Check credentials and return the account. No token is issued."""
    user = await IdentityService(db).authenticate(credentials.username, credentials.password)

    return UserMessageResponse(message="Login successful", user=UserResponse.from_entity(user))


# Admin endpoints
@router.post("/admin/login", response_model=UserMessageResponse)
async def admin_login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    user = await IdentityService(db).authenticate_admin(credentials.username, credentials.password)

    return UserMessageResponse(message="Admin login successful", user=UserResponse.from_entity(user))


@router.put("/admin/toggle-status/{user_id}", response_model=UserMessageResponse)
async def toggle_user_status(
    user_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db)
):
    """Flip is_active"""
    user = await IdentityService(db).toggle_active(user_id)

    return UserMessageResponse(
        message="User status updated successfully",
        user=UserResponse.from_entity(user)
    )


@router.put("/admin/toggle-admin/{user_id}", response_model=UserMessageResponse)
async def toggle_admin_status(
    user_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db)
):
    """Flip is_admin"""
    user = await IdentityService(db).toggle_admin(user_id)

    return UserMessageResponse(
        message="Admin status updated successfully",
        user=UserResponse.from_entity(user)
    )


@router.get("/admin/stats", response_model=UserStatsResponse)
async def get_admin_stats(db: AsyncSession = Depends(get_db)):
    """User counts for the admin dashboard"""
    stats = await IdentityService(db).get_stats()
    return UserStatsResponse(**stats)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db)
):
    user = await IdentityService(db).get_user_by_id(user_id)
    return UserResponse.from_entity(user)


@router.put("/{user_id}", response_model=UserMessageResponse)
async def update_user(
    *,
    user_id: int = Path(..., ge=1, le=MAX_ID),
    update_data: UserUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update the supplied profile fields"""
    user = await IdentityService(db).update_user(user_id, update_data)

    return UserMessageResponse(message="User updated successfully", user=UserResponse.from_entity(user))


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: int = Path(..., ge=1, le=MAX_ID),
    db: AsyncSession = Depends(get_db)
):
    """Delete a user and the documents it owns"""
    await IdentityService(db).delete_user(user_id)
    return MessageResponse(message="User deleted successfully")
