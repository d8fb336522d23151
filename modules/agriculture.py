"""
modules/agriculture.py — Agricultural Land Module
===================================================
Land records and the citizens who own them. A record can have several
owners through the citizen_agri join table.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException

from core.roles import Role
from db.models import AgriculturalData, CitizenAgri, Citizen
from modules.accounts import CurrentUser

logger = logging.getLogger("panchayat.modules.agriculture")


async def add_agri_record(
    db: AsyncSession,
    land_area: float,
    crop_type: str,
    valuation: float,
    crop_yield: float,
    owner_aadhar: str = None,
    owner_name: str = None,
) -> dict:
    """Create a land record and link it to its owner in one transaction."""
    query = select(Citizen)
    if owner_aadhar:
        query = query.where(Citizen.aadhar_id == owner_aadhar)
    else:
        query = query.where(Citizen.name == owner_name)
    result = await db.execute(query.order_by(Citizen.citizen_id))
    owner = result.scalars().first()
    if not owner:
        raise HTTPException(status_code=404, detail="No citizen found")

    record = AgriculturalData(
        land_area=land_area,
        crop_type=crop_type,
        valuation=valuation,
        yield_=crop_yield,
    )
    db.add(record)
    await db.flush()
    db.add(CitizenAgri(record_id=record.record_id, citizen_id=owner.citizen_id))
    await db.commit()

    logger.info(f"Land record {record.record_id} added for citizen {owner.citizen_id}")
    return {"message": "Data added successfully", "record_id": record.record_id}


async def update_agri_record(
    db: AsyncSession,
    user: CurrentUser,
    record_id: int,
    land_area: float,
    crop_type: str,
    valuation: float,
    crop_yield: float,
) -> dict:
    """Owners and employees may revise a land record."""
    record = await db.get(AgriculturalData, record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Record not found")

    if user.role != Role.EMPLOYEE:
        owner = await db.get(CitizenAgri, (record_id, user.citizen_id))
        if not owner:
            raise HTTPException(status_code=404, detail="Record not found")

    record.land_area = land_area
    record.crop_type = crop_type
    record.valuation = valuation
    record.yield_ = crop_yield
    await db.commit()

    logger.info(f"Land record {record_id} updated by citizen {user.citizen_id}")
    return {"message": "Data updated successfully", "record_id": record_id}


async def get_agri_for_citizen(db: AsyncSession, citizen_id: int) -> list:
    result = await db.execute(
        select(AgriculturalData)
        .join(CitizenAgri, AgriculturalData.record_id == CitizenAgri.record_id)
        .where(CitizenAgri.citizen_id == citizen_id)
        .order_by(AgriculturalData.record_id)
    )
    return [r.to_dict() for r in result.scalars().all()]


async def get_all_agri(db: AsyncSession) -> list:
    result = await db.execute(select(AgriculturalData).order_by(AgriculturalData.record_id))
    return [r.to_dict() for r in result.scalars().all()]
