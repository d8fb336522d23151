"""
api/routes_employees.py — Panchayat Employee API Endpoints
============================================================
Everything here requires the employee role; staff record edits also admit admins.

Endpoints:
    POST /api/employees/addscheme        → Create a welfare scheme
    POST /api/employees/editscheme       → Edit a welfare scheme
    POST /api/employees/approvescheme    → Accept / reject a pending application
    POST /api/employees/allocatetax      → Charge a tax to a citizen (by Aadhar ID)
    POST /api/employees/addagri          → Add a land record for an owner
    POST /api/employees/addcensus        → Record census figures
    POST /api/employees/addenvdata       → Record environmental readings
    POST /api/employees/addasset         → Record a panchayat asset
    POST /api/employees/addvaccination   → Record a vaccination dose
    POST /api/employees/update           → Edit an employee's record and salary
    GET  /api/employees/applications     → All scheme applications
    GET  /api/employees/taxes            → All taxes with the payer's name
    GET  /api/employees/vaccinations     → All vaccinations
    GET  /api/employees/agriculture      → All land records
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import AliasChoices, BaseModel, Field, model_validator
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import AADHAR_PATTERN, require_roles
from core.roles import Role
from db.session import get_db
from modules import accounts, agriculture, certificates, schemes, statistics, taxes
from modules.accounts import CurrentUser

router = APIRouter()

employee_only = require_roles(Role.EMPLOYEE)


# ── Request schemas ───────────────────────────────────────────────────────────
class SchemeRequest(BaseModel):
    scheme_name: str = Field(min_length=1)
    starting_date: date
    budget: float = Field(gt=0)
    description: str = Field(min_length=1)
    status: str


class EditSchemeRequest(SchemeRequest):
    scheme_id: int


class ApproveSchemeRequest(BaseModel):
    enrollment_id: int
    status: str                 # accepted | approved | rejected


class AllocateTaxRequest(BaseModel):
    tax_type: str = Field(min_length=1)
    amount: float = Field(gt=0)
    aadhar_id: str = Field(pattern=AADHAR_PATTERN)
    due_date: date


class AddAgriRequest(BaseModel):
    land_area: float = Field(gt=0)
    crop_type: str = Field(min_length=1)
    valuation: float = Field(ge=0)
    crop_yield: float = Field(ge=0, validation_alias=AliasChoices("crop_yield", "_yield", "yield"))
    owner_aadhar: Optional[str] = Field(None, pattern=AADHAR_PATTERN)
    owner_name: Optional[str] = None

    @model_validator(mode="after")
    def owner_given(self):
        if not self.owner_aadhar and not self.owner_name:
            raise ValueError("owner_aadhar or owner_name is required")
        return self


class CensusRequest(BaseModel):
    year: int = Field(ge=1900)
    total_population: int = Field(ge=0)
    male_population: int = Field(ge=0)
    female_population: int = Field(ge=0)
    literacy_rate: float = Field(ge=0, le=100)
    birth_rate: float = Field(ge=0)
    death_rate: float = Field(ge=0)

    @model_validator(mode="after")
    def population_adds_up(self):
        if self.male_population + self.female_population > self.total_population:
            raise ValueError("male and female population exceed the total")
        return self


class EnvironmentRequest(BaseModel):
    year: int = Field(ge=1900)
    air_quality_index: float = Field(ge=0)
    water_quality_index: float = Field(ge=0)
    rainfall: float = Field(ge=0)
    forest_cover: float = Field(ge=0, le=100)


class AssetRequest(BaseModel):
    asset_name: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    locality: str = Field(min_length=1)
    installation_year: int = Field(ge=1900)
    amount_spent: float = Field(ge=0)


class VaccinationRequest(BaseModel):
    vaccine_type: str = Field(min_length=1)
    date_administered: date
    dose_number: int = Field(gt=0)
    citizen_aadhar: str = Field(pattern=AADHAR_PATTERN)


class StaffUpdateRequest(BaseModel):
    aadhar_id: str = Field(pattern=AADHAR_PATTERN)
    name: str = Field(min_length=2)
    contact_number: str = Field(min_length=10)
    educational_qualification: str
    salary: float = Field(ge=0)
    position: Optional[str] = None


# ── Schemes ───────────────────────────────────────────────────────────────────
@router.post("/addscheme")
async def add_scheme(
    body: SchemeRequest,
    user: CurrentUser = Depends(employee_only),
    db: AsyncSession = Depends(get_db),
):
    return await schemes.create_scheme(db, **body.model_dump())


@router.post("/editscheme")
async def edit_scheme(
    body: EditSchemeRequest,
    user: CurrentUser = Depends(employee_only),
    db: AsyncSession = Depends(get_db),
):
    return await schemes.edit_scheme(db, **body.model_dump())


@router.post("/approvescheme")
async def approve_scheme(
    body: ApproveSchemeRequest,
    user: CurrentUser = Depends(employee_only),
    db: AsyncSession = Depends(get_db),
):
    return await schemes.decide_enrollment(db, body.enrollment_id, body.status, decided_by=user.citizen_id)


@router.get("/applications")
async def all_applications(user: CurrentUser = Depends(employee_only), db: AsyncSession = Depends(get_db)):
    return await schemes.list_applications(db)


# ── Taxes ─────────────────────────────────────────────────────────────────────
@router.post("/allocatetax")
async def allocate_tax(
    body: AllocateTaxRequest,
    user: CurrentUser = Depends(employee_only),
    db: AsyncSession = Depends(get_db),
):
    return await taxes.allocate_tax(db, body.tax_type, body.amount, body.aadhar_id, body.due_date)


@router.get("/taxes")
async def all_taxes(user: CurrentUser = Depends(employee_only), db: AsyncSession = Depends(get_db)):
    return await taxes.list_all_taxes(db)


# ── Agriculture ───────────────────────────────────────────────────────────────
@router.post("/addagri")
async def add_agri(
    body: AddAgriRequest,
    user: CurrentUser = Depends(employee_only),
    db: AsyncSession = Depends(get_db),
):
    return await agriculture.add_agri_record(
        db,
        land_area=body.land_area,
        crop_type=body.crop_type,
        valuation=body.valuation,
        crop_yield=body.crop_yield,
        owner_aadhar=body.owner_aadhar,
        owner_name=body.owner_name,
    )


@router.get("/agriculture")
async def all_agriculture(user: CurrentUser = Depends(employee_only), db: AsyncSession = Depends(get_db)):
    return await agriculture.get_all_agri(db)


# ── Village statistics ────────────────────────────────────────────────────────
@router.post("/addcensus")
async def add_census(
    body: CensusRequest,
    user: CurrentUser = Depends(employee_only),
    db: AsyncSession = Depends(get_db),
):
    return await statistics.add_census(db, user.citizen_id, **body.model_dump())


@router.post("/addenvdata")
async def add_environmental_data(
    body: EnvironmentRequest,
    user: CurrentUser = Depends(employee_only),
    db: AsyncSession = Depends(get_db),
):
    return await statistics.add_environmental(db, user.citizen_id, **body.model_dump())


@router.post("/addasset")
async def add_asset(
    body: AssetRequest,
    user: CurrentUser = Depends(employee_only),
    db: AsyncSession = Depends(get_db),
):
    return await statistics.add_asset(db, user.citizen_id, **body.model_dump())


# ── Vaccinations ──────────────────────────────────────────────────────────────
@router.post("/addvaccination")
async def add_vaccination(
    body: VaccinationRequest,
    user: CurrentUser = Depends(employee_only),
    db: AsyncSession = Depends(get_db),
):
    return await certificates.add_vaccination(
        db, body.vaccine_type, body.date_administered, body.dose_number, body.citizen_aadhar
    )


@router.get("/vaccinations")
async def all_vaccinations(user: CurrentUser = Depends(employee_only), db: AsyncSession = Depends(get_db)):
    return await certificates.list_vaccinations(db)


# ── Staff records ─────────────────────────────────────────────────────────────
@router.post("/update")
async def update_employee(
    body: StaffUpdateRequest,
    user: CurrentUser = Depends(require_roles(Role.EMPLOYEE, Role.ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    return await accounts.update_staff(db, Role.EMPLOYEE, **body.model_dump())
