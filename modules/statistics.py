"""
modules/statistics.py — Village Statistics Module
===================================================
Census figures, environmental readings and the asset inventory.
These rows are shared by the whole panchayat: employees add them, every
role reads them. Each row remembers which employee recorded it.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from fastapi import HTTPException

from db.models import CensusData, EnvironmentalData, Asset, EmployeeProfile

logger = logging.getLogger("panchayat.modules.statistics")


async def get_member_id(db: AsyncSession, citizen_id: int) -> int:
    """The members row of the employee recording the data."""
    result = await db.execute(
        select(EmployeeProfile.member_id).where(EmployeeProfile.citizen_id == citizen_id)
    )
    member_id = result.scalars().first()
    if member_id is None:
        raise HTTPException(status_code=404, detail="No member found")
    return member_id


async def _add_row(db: AsyncSession, model, recorded_by: int, fields: dict, label: str):
    row = model(member_id=await get_member_id(db, recorded_by), **fields)
    db.add(row)
    await db.flush()
    await db.commit()
    logger.info(f"{label} recorded by citizen {recorded_by}")
    return row


async def add_census(db: AsyncSession, recorded_by: int, **fields) -> dict:
    row = await _add_row(db, CensusData, recorded_by, fields, f"Census data for {fields.get('year')}")
    return {"message": "Census data added successfully", "census_id": row.census_id}


async def add_environmental(db: AsyncSession, recorded_by: int, **fields) -> dict:
    row = await _add_row(db, EnvironmentalData, recorded_by, fields,
                         f"Environmental data for {fields.get('year')}")
    return {"message": "Environmental data added successfully", "data_id": row.data_id}


async def add_asset(db: AsyncSession, recorded_by: int, **fields) -> dict:
    row = await _add_row(db, Asset, recorded_by, fields, f"Asset '{fields.get('asset_name')}'")
    return {"message": "Asset added successfully", "asset_id": row.asset_id}


async def list_census(db: AsyncSession) -> list:
    result = await db.execute(select(CensusData).order_by(CensusData.year))
    return [r.to_dict() for r in result.scalars().all()]


async def list_environmental(db: AsyncSession) -> list:
    result = await db.execute(select(EnvironmentalData).order_by(EnvironmentalData.year))
    return [r.to_dict() for r in result.scalars().all()]


async def list_assets(db: AsyncSession) -> list:
    result = await db.execute(select(Asset).order_by(Asset.asset_id))
    return [r.to_dict() for r in result.scalars().all()]
