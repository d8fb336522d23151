"""
modules/schemes.py — Welfare Scheme Module
============================================
Business logic for welfare schemes and the citizen enrollment workflow.

Flow:
    employee creates scheme → citizen applies (pending)
        → employee approves / rejects → citizen sees the status
"""

import logging
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from fastapi import HTTPException

from config import settings
from core.lifecycle import (
    PENDING, normalize_scheme_status, normalize_decision,
    check_can_apply, check_can_decide,
)
from db.models import WelfareScheme, SchemeEnrollment, Citizen

logger = logging.getLogger("panchayat.modules.schemes")


async def create_scheme(
    db: AsyncSession,
    scheme_name: str,
    starting_date: date,
    budget: float,
    description: str,
    status: str,
) -> dict:
    scheme = WelfareScheme(
        scheme_name=scheme_name,
        starting_date=starting_date,
        budget=budget,
        description=description,
        status=normalize_scheme_status(status),
    )
    db.add(scheme)
    await db.flush()
    await db.commit()

    logger.info(f"Scheme {scheme.scheme_id} '{scheme_name}' created")
    return {"message": "Scheme added successfully", "scheme_id": scheme.scheme_id}


async def edit_scheme(
    db: AsyncSession,
    scheme_id: int,
    scheme_name: str,
    starting_date: date,
    budget: float,
    description: str,
    status: str,
) -> dict:
    scheme = await db.get(WelfareScheme, scheme_id)
    if not scheme:
        raise HTTPException(status_code=404, detail="Scheme not found")

    scheme.scheme_name = scheme_name
    scheme.starting_date = starting_date
    scheme.budget = budget
    scheme.description = description
    scheme.status = normalize_scheme_status(status)
    await db.commit()

    logger.info(f"Scheme {scheme_id} updated (status={scheme.status})")
    return {"message": "Scheme updated successfully", "scheme_id": scheme_id}


async def apply_for_scheme(
    db: AsyncSession,
    citizen_id: int,
    scheme_id: int,
    reason: str,
    annual_income: float,
    date_of_enrollment: date = None,
) -> dict:
    """
    File a citizen's application. It always starts out pending.
    Whether closed schemes and repeat applications are refused is decided by
    ENFORCE_ACTIVE_SCHEME / ENFORCE_SINGLE_ENROLLMENT.
    """
    scheme = await db.get(WelfareScheme, scheme_id)
    if not scheme:
        raise HTTPException(status_code=404, detail="Scheme not found")

    existing = await db.execute(
        select(SchemeEnrollment.enrollment_id).where(
            SchemeEnrollment.citizen_id == citizen_id,
            SchemeEnrollment.scheme_id == scheme_id,
        )
    )
    check_can_apply(
        scheme.status,
        already_enrolled=existing.first() is not None,
        enforce_active=settings.ENFORCE_ACTIVE_SCHEME,
        enforce_single=settings.ENFORCE_SINGLE_ENROLLMENT,
    )

    enrollment = SchemeEnrollment(
        citizen_id=citizen_id,
        scheme_id=scheme_id,
        reason=reason,
        annual_income=annual_income,
        date_of_enrollment=date_of_enrollment or date.today(),
        status=PENDING,
    )
    db.add(enrollment)
    await db.flush()
    await db.commit()

    logger.info(f"Citizen {citizen_id} applied to scheme {scheme_id} (enrollment {enrollment.enrollment_id})")
    return {"message": "Scheme applied successfully", "enrollment_id": enrollment.enrollment_id}


async def decide_enrollment(db: AsyncSession, enrollment_id: int, decision: str, decided_by: int) -> dict:
    """
    Move a pending enrollment to accepted or rejected.
    The UPDATE only matches a still-pending row, so two employees deciding the
    same application at once cannot both succeed.
    """
    new_status = normalize_decision(decision)

    enrollment = await db.get(SchemeEnrollment, enrollment_id)
    if not enrollment:
        raise HTTPException(status_code=404, detail="Scheme enrollment not found")
    check_can_decide(enrollment.status)

    result = await db.execute(
        update(SchemeEnrollment)
        .where(
            SchemeEnrollment.enrollment_id == enrollment_id,
            SchemeEnrollment.status == PENDING,
        )
        .values(status=new_status)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.refresh(enrollment)
        check_can_decide(enrollment.status)
    await db.commit()

    logger.info(f"Enrollment {enrollment_id} {new_status} by citizen {decided_by}")
    return {"message": "Scheme enrollment updated successfully", "enrollment_id": enrollment_id,
            "status": new_status}


# ── Reads ─────────────────────────────────────────────────────────────────────
async def list_schemes_for_citizen(db: AsyncSession, citizen_id: int) -> list:
    """Every scheme, with the caller's application status where they applied."""
    result = await db.execute(
        select(WelfareScheme, SchemeEnrollment.status.label("application_status"))
        .outerjoin(
            SchemeEnrollment,
            (SchemeEnrollment.scheme_id == WelfareScheme.scheme_id)
            & (SchemeEnrollment.citizen_id == citizen_id),
        )
        .order_by(WelfareScheme.scheme_id)
    )
    return [
        {**scheme.to_dict(), "application_status": application_status}
        for scheme, application_status in result.all()
    ]


async def list_applications(db: AsyncSession) -> list:
    """All enrollments with applicant and scheme details, for the employee review table."""
    result = await db.execute(
        select(
            SchemeEnrollment,
            Citizen.name,
            Citizen.aadhar_id,
            Citizen.dob,
            WelfareScheme.scheme_name,
        )
        .join(Citizen, SchemeEnrollment.citizen_id == Citizen.citizen_id)
        .join(WelfareScheme, SchemeEnrollment.scheme_id == WelfareScheme.scheme_id)
        .order_by(SchemeEnrollment.enrollment_id)
    )
    return [
        {
            "enrollment_id": e.enrollment_id,
            "status": e.status,
            "scheme_id": e.scheme_id,
            "reason": e.reason,
            "annual_income": e.annual_income,
            "date_of_enrollment": e.date_of_enrollment,
            "name": name,
            "aadhar_id": aadhar_id,
            "dob": dob,
            "scheme_name": scheme_name,
        }
        for e, name, aadhar_id, dob, scheme_name in result.all()
    ]
