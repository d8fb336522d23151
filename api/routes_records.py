"""
api/routes_records.py — Shared Records API Endpoints

Endpoints:
    GET /api/records/census        → Census figures (all roles)
    GET /api/records/environment   → Environmental readings (all roles)
    GET /api/records/assets        → Asset inventory (all roles)
    GET /api/records/citizens      → Every citizen (staff)
    GET /api/records/employees     → Panchayat employees (staff)
    GET /api/records/monitors      → Government monitors (staff)
    GET /api/records/me            → My profile, with my role details
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_user, require_roles
from core.roles import STAFF_ROLES
from db.session import get_db
from modules import directory, statistics
from modules.accounts import CurrentUser

router = APIRouter()

staff_only = require_roles(*STAFF_ROLES)


@router.get("/census")
async def census(user: CurrentUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await statistics.list_census(db)


@router.get("/environment")
async def environment(user: CurrentUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await statistics.list_environmental(db)


@router.get("/assets")
async def assets(user: CurrentUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await statistics.list_assets(db)


@router.get("/citizens")
async def citizens(user: CurrentUser = Depends(staff_only), db: AsyncSession = Depends(get_db)):
    return await directory.list_citizens(db)


@router.get("/employees")
async def employees(user: CurrentUser = Depends(staff_only), db: AsyncSession = Depends(get_db)):
    return await directory.list_employees(db)


@router.get("/monitors")
async def monitors(user: CurrentUser = Depends(staff_only), db: AsyncSession = Depends(get_db)):
    return await directory.list_monitors(db)


@router.get("/me")
async def my_profile(user: CurrentUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await directory.personal_profile(db, user)
