"""
api/routes_auth.py — Sign-in & Signup API Endpoints
=====================================================
Endpoints:
    POST /api/auth/signin           → Exchange Aadhar ID + password for a session token
    GET  /api/auth/session          → Who am I (principal + citizen row)
    POST /api/auth/signup/citizen   → Register a citizen account
    POST /api/auth/signup/admin     → Register a system administrator
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field, model_validator
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import AADHAR_PATTERN, get_current_user
from core.roles import Role
from db.session import get_db
from modules.accounts import CurrentUser, authorize, issue_session, register_account

router = APIRouter()


# ── Request schemas ───────────────────────────────────────────────────────────
class SignInRequest(BaseModel):
    username: str               # Aadhar ID
    password: str


class SignupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=2)
    aadhar: str = Field(pattern=AADHAR_PATTERN)
    password: str = Field(min_length=8)
    confirm_password: Optional[str] = Field(None, alias="confirmPassword")
    contact_number: str = Field(alias="contactNumber", min_length=10)
    gender: str
    dob: date
    age: Optional[int] = Field(None, ge=0, le=120)
    educational_qualification: Optional[str] = Field(None, alias="educationalQualifications")
    occupation: Optional[str] = None
    email: Optional[str] = None
    date_of_joining: Optional[date] = Field(None, alias="dateofjoining")

    @model_validator(mode="after")
    def passwords_match(self):
        if self.confirm_password is not None and self.confirm_password != self.password:
            raise ValueError("Passwords do not match.")
        return self

    def account_fields(self) -> dict:
        return self.model_dump(exclude={"confirm_password"})


# ── Endpoints ─────────────────────────────────────────────────────────────────
@router.post("/signin")
async def sign_in(body: SignInRequest, db: AsyncSession = Depends(get_db)):
    principal = await authorize(db, body.username, body.password)
    if principal is None:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    return {
        "access_token": issue_session(principal),
        "token_type": "bearer",
        "user": principal,
    }


@router.get("/session")
async def current_session(user: CurrentUser = Depends(get_current_user)):
    return {
        "user": {"id": user.citizen_id, "username": user.aadhar_id, "role": user.role.value},
        "citizen": user.citizen.to_dict(),
    }


@router.post("/signup/citizen", status_code=201)
async def signup_citizen(body: SignupRequest, db: AsyncSession = Depends(get_db)):
    fields = body.account_fields()
    return await register_account(db, Role.CITIZEN, **fields)


@router.post("/signup/admin", status_code=201)
async def signup_admin(body: SignupRequest, db: AsyncSession = Depends(get_db)):
    return await register_account(db, Role.ADMIN, **body.account_fields())
