"""
api/routes_monitors.py — Government Monitor API Endpoints

Endpoints:
    POST /api/monitors/update   → Edit a monitor's record and salary (employee / admin)
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import AADHAR_PATTERN, require_roles
from core.roles import Role
from db.session import get_db
from modules.accounts import CurrentUser, update_staff

router = APIRouter()


class MonitorUpdateRequest(BaseModel):
    aadhar_id: str = Field(pattern=AADHAR_PATTERN)
    name: str = Field(min_length=2)
    contact_number: str = Field(min_length=10)
    educational_qualification: str
    salary: float = Field(ge=0)


@router.post("/update")
async def update_monitor(
    body: MonitorUpdateRequest,
    user: CurrentUser = Depends(require_roles(Role.EMPLOYEE, Role.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    return await update_staff(db, Role.MONITOR, **body.model_dump())
