"""
modules/certificates.py — Certificates & Vaccinations Module
==============================================================
Per-citizen documents: issued certificates and vaccination doses.
"""

import logging
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException

from db.models import Certificate, Vaccination, Citizen
from modules.accounts import require_citizen_by_aadhar

logger = logging.getLogger("panchayat.modules.certificates")

CERTIFICATE_TYPES = (
    "Birth Certificate",
    "Marriage Certificate",
    "Death Certificate",
    "Citizenship Certificate",
    "Residence Certificate",
    "Tax Clearance Certificate",
)


async def add_certificate(
    db: AsyncSession,
    citizen_id: int,
    certificate_type: str,
    issue_date: date,
    validity_period: date,
) -> dict:
    if certificate_type not in CERTIFICATE_TYPES:
        raise HTTPException(status_code=400, detail=f"Certificate type must be one of {list(CERTIFICATE_TYPES)}")
    if validity_period < issue_date:
        raise HTTPException(status_code=400, detail="Certificate cannot expire before it is issued")

    certificate = Certificate(
        certificate_type=certificate_type,
        issue_date=issue_date,
        validity_period=validity_period,
        citizen_id=citizen_id,
    )
    db.add(certificate)
    await db.flush()
    await db.commit()

    logger.info(f"{certificate_type} {certificate.certificate_id} added for citizen {citizen_id}")
    return {"message": "Certificate added successfully", "certificate_id": certificate.certificate_id}


async def list_certificates(db: AsyncSession, citizen_id: int) -> list:
    result = await db.execute(
        select(Certificate).where(Certificate.citizen_id == citizen_id).order_by(Certificate.issue_date)
    )
    today = date.today()
    return [
        {**c.to_dict(), "status": "Valid" if c.validity_period > today else "Expired"}
        for c in result.scalars().all()
    ]


# ── Vaccinations ──────────────────────────────────────────────────────────────
async def add_vaccination(
    db: AsyncSession,
    vaccine_type: str,
    date_administered: date,
    dose_number: int,
    citizen_aadhar: str,
) -> dict:
    citizen = await require_citizen_by_aadhar(db, citizen_aadhar)

    vaccination = Vaccination(
        vaccine_type=vaccine_type,
        date_administered=date_administered,
        dose_number=dose_number,
        citizen_id=citizen.citizen_id,
    )
    db.add(vaccination)
    await db.flush()
    await db.commit()

    logger.info(f"Vaccination {vaccination.vaccine_id} (dose {dose_number}) recorded for citizen {citizen.citizen_id}")
    return {"message": "Vaccination added successfully", "vaccine_id": vaccination.vaccine_id}


async def list_vaccinations(db: AsyncSession, citizen_id: int = None) -> list:
    """Vaccinations with the recipient's Aadhar ID; all of them when citizen_id is None."""
    query = (
        select(Vaccination, Citizen.aadhar_id)
        .join(Citizen, Vaccination.citizen_id == Citizen.citizen_id)
        .order_by(Vaccination.date_administered, Vaccination.vaccine_id)
    )
    if citizen_id is not None:
        query = query.where(Citizen.citizen_id == citizen_id)
    result = await db.execute(query)
    return [{**v.to_dict(), "citizen_aadhar": aadhar} for v, aadhar in result.all()]
