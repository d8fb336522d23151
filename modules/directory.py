"""
modules/directory.py — People Directory Module
================================================
Read-only listings of citizens and staff, and the caller's own profile.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from core.roles import Role, ROLE_OCCUPATIONS
from db.models import Citizen, EmployeeProfile, MonitorProfile
from modules.accounts import CurrentUser, ROLE_PROFILES

logger = logging.getLogger("panchayat.modules.directory")


async def list_citizens(db: AsyncSession) -> list:
    result = await db.execute(select(Citizen).order_by(Citizen.citizen_id))
    return [c.to_dict() for c in result.scalars().all()]


async def _list_staff(db: AsyncSession, role: Role, profile_cls) -> list:
    result = await db.execute(
        select(Citizen, profile_cls)
        .join(profile_cls, Citizen.citizen_id == profile_cls.citizen_id)
        .where(Citizen.occupation == ROLE_OCCUPATIONS[role])
        .order_by(Citizen.citizen_id)
    )
    return [{**profile.to_dict(), **citizen.to_dict()} for citizen, profile in result.all()]


async def list_employees(db: AsyncSession) -> list:
    return await _list_staff(db, Role.EMPLOYEE, EmployeeProfile)


async def list_monitors(db: AsyncSession) -> list:
    return await _list_staff(db, Role.MONITOR, MonitorProfile)


async def personal_profile(db: AsyncSession, user: CurrentUser) -> dict:
    """The caller's citizen row merged with their role row, if they have one."""
    profile = user.citizen.to_dict()
    profile_cls = ROLE_PROFILES.get(user.role)
    if profile_cls is not None:
        result = await db.execute(select(profile_cls).where(profile_cls.citizen_id == user.citizen_id))
        row = result.scalars().first()
        if row:
            profile = {**row.to_dict(), **profile}
    profile["role"] = user.role.value
    return profile
