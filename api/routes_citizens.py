"""
api/routes_citizens.py — Citizen API Endpoints
================================================
What a signed-in citizen does for themselves, plus citizen record edits.

Endpoints:
    GET  /api/citizens/me/taxes           → My taxes (paid and unpaid)
    GET  /api/citizens/me/schemes         → All schemes with my application status
    GET  /api/citizens/me/certificates    → My certificates
    GET  /api/citizens/me/vaccinations    → My vaccinations
    GET  /api/citizens/me/agriculture     → Land records I own
    POST /api/citizens/applyscheme        → Apply to a welfare scheme
    POST /api/citizens/paytax             → Pay one of my taxes
    POST /api/citizens/addcertificate     → Add a certificate to my record
    POST /api/citizens/updateagri         → Revise one of my land records
    POST /api/citizens/update             → Edit a citizen record (self or staff)
    POST /api/citizens/delete             → Remove a citizen (employee / admin)
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import AliasChoices, BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import AADHAR_PATTERN, get_current_user, require_roles
from core.roles import Role
from db.session import get_db
from modules import accounts, agriculture, certificates, schemes, taxes
from modules.accounts import CurrentUser

router = APIRouter()


class ApplySchemeRequest(BaseModel):
    scheme_id: int
    reason: str = Field(min_length=1)
    annual_income: float = Field(ge=0)
    date_of_enrollment: Optional[date] = None


class PayTaxRequest(BaseModel):
    tax_id: int
    payment_date: Optional[date] = None


class AddCertificateRequest(BaseModel):
    certificate_type: str
    issue_date: date
    validity_period: date
    citizen_id: Optional[int] = None


class UpdateAgriRequest(BaseModel):
    record_id: int
    land_area: float = Field(gt=0)
    crop_type: str = Field(min_length=1)
    valuation: float = Field(ge=0)
    crop_yield: float = Field(ge=0, validation_alias=AliasChoices("crop_yield", "_yield", "yield"))


class UpdateCitizenRequest(BaseModel):
    aadhar_id: str = Field(pattern=AADHAR_PATTERN)
    name: Optional[str] = Field(None, min_length=2)
    gender: Optional[str] = None
    dob: Optional[date] = None
    contact_number: Optional[str] = Field(None, min_length=10)
    occupation: Optional[str] = None
    age: Optional[int] = Field(None, ge=0, le=120)
    educational_qualification: Optional[str] = None


class DeleteCitizenRequest(BaseModel):
    aadhar_id: str


# ── Reads ─────────────────────────────────────────────────────────────────────
@router.get("/me/taxes")
async def my_taxes(user: CurrentUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await taxes.list_citizen_taxes(db, user.citizen_id)


@router.get("/me/schemes")
async def my_schemes(user: CurrentUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await schemes.list_schemes_for_citizen(db, user.citizen_id)


@router.get("/me/certificates")
async def my_certificates(user: CurrentUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await certificates.list_certificates(db, user.citizen_id)


@router.get("/me/vaccinations")
async def my_vaccinations(user: CurrentUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await certificates.list_vaccinations(db, user.citizen_id)


@router.get("/me/agriculture")
async def my_land(user: CurrentUser = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    return await agriculture.get_agri_for_citizen(db, user.citizen_id)


# ── Writes ────────────────────────────────────────────────────────────────────
@router.post("/applyscheme")
async def apply_scheme(
    body: ApplySchemeRequest,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await schemes.apply_for_scheme(
        db=db,
        citizen_id=user.citizen_id,
        scheme_id=body.scheme_id,
        reason=body.reason,
        annual_income=body.annual_income,
        date_of_enrollment=body.date_of_enrollment,
    )


@router.post("/paytax")
async def pay_tax(
    body: PayTaxRequest,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await taxes.pay_tax(db, user.citizen_id, body.tax_id, body.payment_date)


@router.post("/addcertificate")
async def add_certificate(
    body: AddCertificateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if body.citizen_id is not None and body.citizen_id != user.citizen_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return await certificates.add_certificate(
        db, user.citizen_id, body.certificate_type, body.issue_date, body.validity_period
    )


@router.post("/updateagri")
async def update_agri(
    body: UpdateAgriRequest,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await agriculture.update_agri_record(
        db, user, body.record_id, body.land_area, body.crop_type, body.valuation, body.crop_yield
    )


@router.post("/update")
async def update_citizen(
    body: UpdateCitizenRequest,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    changes = body.model_dump(exclude={"aadhar_id"}, exclude_none=True)
    return await accounts.update_citizen(db, user, body.aadhar_id, changes)


@router.post("/delete")
async def delete_citizen(
    body: DeleteCitizenRequest,
    user: CurrentUser = Depends(require_roles(Role.EMPLOYEE, Role.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    return await accounts.delete_citizen(db, user, body.aadhar_id)
