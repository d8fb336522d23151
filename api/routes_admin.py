"""
api/routes_admin.py — Administrator API Endpoints

Endpoints:
    POST /api/admin/addemployee   → Register a panchayat employee
    POST /api/admin/addmonitor    → Register a government monitor
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import Field
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import require_roles
from api.routes_auth import SignupRequest
from core.roles import Role
from db.session import get_db
from modules.accounts import CurrentUser, register_account

router = APIRouter()


class StaffSignupRequest(SignupRequest):
    position: Optional[str] = None
    salary: float = Field(ge=0)


@router.post("/addemployee", status_code=201)
async def add_employee(
    body: StaffSignupRequest,
    admin: CurrentUser = Depends(require_roles(Role.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    return await register_account(db, Role.EMPLOYEE, **body.account_fields())


@router.post("/addmonitor", status_code=201)
async def add_monitor(
    body: StaffSignupRequest,
    admin: CurrentUser = Depends(require_roles(Role.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    return await register_account(db, Role.MONITOR, **body.account_fields())
