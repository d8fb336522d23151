"""
modules/accounts.py — Accounts, Sign-in & Citizen Records
===========================================================
Business logic for signing up, signing in, resolving the caller of a request,
and editing or removing citizen records.

Signup flow (all-or-nothing):
    duplicate check → insert citizen → insert login → insert role row → commit
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.crypto import crypto_engine
from core.roles import Role, role_for_occupation, occupation_for_role
from db.models import (
    Citizen, Login, AdminProfile, EmployeeProfile, MonitorProfile,
    SchemeEnrollment, Tax, CitizenAgri, Certificate, Vaccination,
    CensusData, EnvironmentalData, Asset,
)

logger = logging.getLogger("panchayat.modules.accounts")

ROLE_PROFILES = {
    Role.ADMIN: AdminProfile,
    Role.EMPLOYEE: EmployeeProfile,
    Role.MONITOR: MonitorProfile,
}


@dataclass
class CurrentUser:
    """The signed-in caller: their citizen row and the role it grants."""
    citizen: Citizen
    role: Role

    @property
    def citizen_id(self) -> int:
        return self.citizen.citizen_id

    @property
    def aadhar_id(self) -> str:
        return self.citizen.aadhar_id


# ── Sign-in ───────────────────────────────────────────────────────────────────
async def authorize(db: AsyncSession, username: str, password: str) -> Optional[dict]:
    """
    Credentials check. Returns the session principal {id, username}
    (id = citizen_id) or None when the user is unknown or the password is wrong.
    """
    if not username or not password:
        logger.info("Sign-in attempt with missing credentials")
        return None

    result = await db.execute(select(Login).where(Login.username == username))
    login = result.scalars().first()
    if not login:
        logger.warning(f"Sign-in failed: unknown user {username}")
        return None
    if not crypto_engine.verify_password(password, login.password):
        logger.warning(f"Sign-in failed: wrong password for {username}")
        return None
    return {"id": login.citizen_id, "username": login.username}


def issue_session(principal: dict) -> str:
    return crypto_engine.create_access_token(
        str(principal["id"]), {"username": principal["username"]}
    )


async def resolve_user(db: AsyncSession, citizen_id: int) -> Optional[CurrentUser]:
    """Re-query the citizen row behind a session principal."""
    citizen = await db.get(Citizen, citizen_id)
    if not citizen:
        return None
    return CurrentUser(citizen=citizen, role=role_for_occupation(citizen.occupation))


async def get_citizen_by_aadhar(db: AsyncSession, aadhar_id: str) -> Optional[Citizen]:
    result = await db.execute(select(Citizen).where(Citizen.aadhar_id == aadhar_id))
    return result.scalars().first()


async def require_citizen_by_aadhar(db: AsyncSession, aadhar_id: str) -> Citizen:
    citizen = await get_citizen_by_aadhar(db, aadhar_id)
    if not citizen:
        raise HTTPException(status_code=404, detail="No citizen found")
    return citizen


# ── Signup ────────────────────────────────────────────────────────────────────
async def register_account(
    db: AsyncSession,
    role: Role,
    name: str,
    aadhar: str,
    password: str,
    contact_number: str = None,
    gender: str = None,
    dob: date = None,
    age: int = None,
    educational_qualification: str = None,
    occupation: str = None,
    email: str = None,
    date_of_joining: date = None,
    position: str = None,
    salary: float = None,
) -> dict:
    """
    Create a citizen, their login and (for staff roles) their role row.
    Either all three rows are committed or none are.
    """
    existing = await db.execute(select(Login).where(Login.username == aadhar))
    if existing.scalars().first() or await get_citizen_by_aadhar(db, aadhar):
        logger.warning(f"Signup refused: {aadhar} already registered")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

    if role == Role.CITIZEN and role_for_occupation(occupation) != Role.CITIZEN:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Staff accounts cannot be created through citizen signup",
        )

    occupation = occupation_for_role(role, occupation)
    citizen = Citizen(
        name=name,
        gender=gender,
        dob=dob,
        contact_number=contact_number,
        aadhar_id=aadhar,
        occupation=occupation,
        age=age,
        educational_qualification=educational_qualification,
    )
    try:
        db.add(citizen)
        await db.flush()   # get the citizen_id before the dependent inserts

        db.add(Login(
            username=aadhar,
            password=crypto_engine.hash_password(password),
            user_type=occupation,
            citizen_id=citizen.citizen_id,
        ))
        await db.flush()
    except IntegrityError:
        # a concurrent signup for the same Aadhar ID got there first
        await db.rollback()
        logger.warning(f"Signup refused: {aadhar} registered concurrently")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

    await _create_role_profile(
        db, role, citizen.citizen_id,
        email=email, date_of_joining=date_of_joining, position=position, salary=salary,
    )
    await db.commit()

    logger.info(f"Registered {role.value} account for citizen {citizen.citizen_id}")
    return {"message": "User created successfully", "citizen_id": citizen.citizen_id}


async def _create_role_profile(db: AsyncSession, role: Role, citizen_id: int, **fields):
    profile_cls = ROLE_PROFILES.get(role)
    if profile_cls is None:
        return None
    columns = {c.key for c in profile_cls.__table__.columns}
    profile = profile_cls(
        citizen_id=citizen_id,
        **{k: v for k, v in fields.items() if k in columns},
    )
    db.add(profile)
    await db.flush()
    return profile


# ── Edits ─────────────────────────────────────────────────────────────────────
async def update_citizen(db: AsyncSession, actor: CurrentUser, aadhar_id: str, changes: dict) -> dict:
    """Edit a citizen's record. Employees and admins may edit anyone, others only themselves."""
    if actor.role not in (Role.EMPLOYEE, Role.ADMIN) and actor.aadhar_id != aadhar_id:
        raise HTTPException(status_code=403, detail="You can only edit your own record.")

    citizen = await require_citizen_by_aadhar(db, aadhar_id)

    occupation = changes.get("occupation")
    if occupation is not None and role_for_occupation(occupation) != role_for_occupation(citizen.occupation):
        raise HTTPException(status_code=400, detail="Occupation change would change the user's role")

    for field, value in changes.items():
        if value is not None:
            setattr(citizen, field, value)
    await db.commit()

    logger.info(f"Citizen {citizen.citizen_id} updated by {actor.citizen_id}")
    return {"message": "Citizen updated successfully", "citizen_id": citizen.citizen_id}


async def update_staff(
    db: AsyncSession,
    role: Role,
    aadhar_id: str,
    name: str,
    contact_number: str,
    educational_qualification: str,
    salary: float,
    position: str = None,
) -> dict:
    """Update a staff member's citizen row and their role row together."""
    citizen = await get_citizen_by_aadhar(db, aadhar_id)
    if not citizen:
        raise HTTPException(status_code=404, detail="Citizen not found")

    citizen.name = name
    citizen.contact_number = contact_number
    citizen.educational_qualification = educational_qualification

    profile_cls = ROLE_PROFILES[role]
    result = await db.execute(select(profile_cls).where(profile_cls.citizen_id == citizen.citizen_id))
    profile = result.scalars().first()
    if not profile:
        raise HTTPException(status_code=404, detail=f"No {role.value} record for this citizen")

    profile.salary = salary
    if position is not None and hasattr(profile, "position"):
        profile.position = position
    await db.commit()

    logger.info(f"{role.value.capitalize()} {citizen.citizen_id} updated")
    return {"message": "Citizen updated successfully", "citizen_id": citizen.citizen_id}


async def delete_citizen(db: AsyncSession, actor: CurrentUser, aadhar_id: str) -> dict:
    """Remove a citizen and every row that belongs to them, in one transaction."""
    citizen = await require_citizen_by_aadhar(db, aadhar_id)
    if citizen.citizen_id == actor.citizen_id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account.")
    target_role = role_for_occupation(citizen.occupation)
    if target_role == Role.ADMIN and actor.role != Role.ADMIN:
        raise HTTPException(status_code=403, detail="Only an administrator can remove an administrator.")

    cid = citizen.citizen_id
    members = select(EmployeeProfile.member_id).where(EmployeeProfile.citizen_id == cid)
    for model in (CensusData, EnvironmentalData, Asset):
        await db.execute(
            update(model).where(model.member_id.in_(members)).values(member_id=None)
        )
    for model in (Login, AdminProfile, EmployeeProfile, MonitorProfile,
                  SchemeEnrollment, Tax, CitizenAgri, Certificate, Vaccination):
        await db.execute(delete(model).where(model.citizen_id == cid))
    await db.execute(delete(Citizen).where(Citizen.citizen_id == cid))
    await db.commit()

    logger.info(f"Citizen {cid} deleted by {actor.citizen_id}")
    return {"message": "Citizen deleted successfully"}
