"""
modules/taxes.py — Tax Module
===============================
An employee allocates a tax charge to a citizen (by Aadhar ID); the citizen
pays it. A paid tax stays paid.
"""

import logging
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from fastapi import HTTPException

from core.lifecycle import check_can_pay, is_paid
from db.models import Tax, Citizen
from modules.accounts import require_citizen_by_aadhar

logger = logging.getLogger("panchayat.modules.taxes")


async def allocate_tax(
    db: AsyncSession,
    tax_type: str,
    amount: float,
    aadhar_id: str,
    due_date: date,
) -> dict:
    citizen = await require_citizen_by_aadhar(db, aadhar_id)

    tax = Tax(
        tax_type=tax_type,
        amount=amount,
        due_date=due_date,
        allocated_on=date.today(),
        citizen_id=citizen.citizen_id,
    )
    db.add(tax)
    await db.flush()
    await db.commit()

    logger.info(f"Tax {tax.tax_id} ({tax_type}, {amount}) allocated to citizen {citizen.citizen_id}")
    return {"message": "Tax added successfully", "tax_id": tax.tax_id}


async def pay_tax(db: AsyncSession, citizen_id: int, tax_id: int, payment_date: date = None) -> dict:
    """
    Mark one of the caller's taxes as paid.
    The UPDATE only matches an unpaid row, so a payment can never be undone
    or overwritten by a second request.
    """
    tax = await db.get(Tax, tax_id)
    if not tax or tax.citizen_id != citizen_id:
        raise HTTPException(status_code=404, detail="Record not found")

    payment_date = payment_date or date.today()
    check_can_pay(tax.payment_date, tax.allocated_on, payment_date)

    result = await db.execute(
        update(Tax)
        .where(Tax.tax_id == tax_id, Tax.payment_date.is_(None))
        .values(payment_date=payment_date)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.refresh(tax)
        check_can_pay(tax.payment_date, tax.allocated_on, payment_date)
    await db.commit()

    logger.info(f"Tax {tax_id} paid by citizen {citizen_id} on {payment_date}")
    return {"message": "Tax paid successfully", "tax_id": tax_id, "payment_date": payment_date}


# ── Reads ─────────────────────────────────────────────────────────────────────
def _tax_row(tax: Tax, **extra) -> dict:
    return {**tax.to_dict(), "status": "paid" if is_paid(tax.payment_date) else "unpaid", **extra}


async def list_citizen_taxes(db: AsyncSession, citizen_id: int) -> list:
    result = await db.execute(
        select(Tax).where(Tax.citizen_id == citizen_id).order_by(Tax.due_date)
    )
    return [_tax_row(t) for t in result.scalars().all()]


async def list_all_taxes(db: AsyncSession) -> list:
    result = await db.execute(
        select(Tax, Citizen.name)
        .join(Citizen, Tax.citizen_id == Citizen.citizen_id)
        .order_by(Tax.tax_id)
    )
    return [_tax_row(t, name=name) for t, name in result.all()]
