"""
db/models.py — Database Table Definitions
==========================================
Each class = one table in the portal's relational store.
Every row except the four statistical tables (census, environment, assets,
agricultural land) is scoped to exactly one citizen via citizen_id.
"""

from datetime import date
from sqlalchemy import String, Date, Float, Text, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from db.session import Base


# ── 1. Identity ───────────────────────────────────────────────────────────────
class Citizen(Base):
    __tablename__ = "citizen"

    citizen_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    gender: Mapped[str] = mapped_column(String(20), nullable=True)
    dob: Mapped[date] = mapped_column(Date, nullable=True)
    contact_number: Mapped[str] = mapped_column(String(20), nullable=True)
    aadhar_id: Mapped[str] = mapped_column(String(12), unique=True, nullable=False)
    occupation: Mapped[str] = mapped_column(String(100), nullable=True)
    age: Mapped[int] = mapped_column(Integer, nullable=True)
    educational_qualification: Mapped[str] = mapped_column(String(100), nullable=True)


class Login(Base):
    __tablename__ = "login"

    username: Mapped[str] = mapped_column(String(12), primary_key=True)    # = aadhar_id
    password: Mapped[str] = mapped_column(String(255), nullable=False)     # pbkdf2_sha256$... hash
    user_type: Mapped[str] = mapped_column(String(100), nullable=False)    # same occupation string as the citizen row
    citizen_id: Mapped[int] = mapped_column(ForeignKey("citizen.citizen_id"), unique=True, nullable=False)


# ── 2. Role-extension rows ────────────────────────────────────────────────────
class AdminProfile(Base):
    __tablename__ = "admin"

    admin_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    citizen_id: Mapped[int] = mapped_column(ForeignKey("citizen.citizen_id"), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=True)
    date_of_joining: Mapped[date] = mapped_column(Date, nullable=True)


class EmployeeProfile(Base):
    __tablename__ = "members"

    member_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    citizen_id: Mapped[int] = mapped_column(ForeignKey("citizen.citizen_id"), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=True)
    date_of_joining: Mapped[date] = mapped_column(Date, nullable=True)
    position: Mapped[str] = mapped_column(String(100), nullable=True)
    salary: Mapped[float] = mapped_column(Float, nullable=True)


class MonitorProfile(Base):
    __tablename__ = "monitors"

    monitor_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    citizen_id: Mapped[int] = mapped_column(ForeignKey("citizen.citizen_id"), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=True)
    date_of_joining: Mapped[date] = mapped_column(Date, nullable=True)
    salary: Mapped[float] = mapped_column(Float, nullable=True)


# ── 3. Welfare schemes ────────────────────────────────────────────────────────
class WelfareScheme(Base):
    __tablename__ = "welfare_scheme"

    scheme_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    scheme_name: Mapped[str] = mapped_column(String(255), nullable=False)
    starting_date: Mapped[date] = mapped_column(Date, nullable=False)
    budget: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)       # active | pending | completed | cancelled


class SchemeEnrollment(Base):
    __tablename__ = "scheme_enrollments"

    enrollment_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    citizen_id: Mapped[int] = mapped_column(ForeignKey("citizen.citizen_id"), nullable=False)
    scheme_id: Mapped[int] = mapped_column(ForeignKey("welfare_scheme.scheme_id"), nullable=False)
    date_of_enrollment: Mapped[date] = mapped_column(Date, nullable=False)
    annual_income: Mapped[float] = mapped_column(Float, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")  # pending | accepted | rejected


# ── 4. Taxes ──────────────────────────────────────────────────────────────────
class Tax(Base):
    __tablename__ = "tax"

    tax_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tax_type: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    payment_date: Mapped[date] = mapped_column(Date, nullable=True)      # null = unpaid
    allocated_on: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    citizen_id: Mapped[int] = mapped_column(ForeignKey("citizen.citizen_id"), nullable=False)


# ── 5. Agriculture ────────────────────────────────────────────────────────────
class AgriculturalData(Base):
    __tablename__ = "agricultural_data"

    record_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    land_area: Mapped[float] = mapped_column(Float, nullable=False)
    crop_type: Mapped[str] = mapped_column(String(100), nullable=False)
    valuation: Mapped[float] = mapped_column(Float, nullable=False)
    yield_: Mapped[float] = mapped_column("yield", Float, nullable=False)


class CitizenAgri(Base):
    __tablename__ = "citizen_agri"

    record_id: Mapped[int] = mapped_column(ForeignKey("agricultural_data.record_id"), primary_key=True)
    citizen_id: Mapped[int] = mapped_column(ForeignKey("citizen.citizen_id"), primary_key=True)


# ── 6. Shared statistics ──────────────────────────────────────────────────────
class CensusData(Base):
    __tablename__ = "census_data"

    census_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    total_population: Mapped[int] = mapped_column(Integer, nullable=False)
    male_population: Mapped[int] = mapped_column(Integer, nullable=False)
    female_population: Mapped[int] = mapped_column(Integer, nullable=False)
    literacy_rate: Mapped[float] = mapped_column(Float, nullable=False)
    birth_rate: Mapped[float] = mapped_column(Float, nullable=False)
    death_rate: Mapped[float] = mapped_column(Float, nullable=False)
    member_id: Mapped[int] = mapped_column(ForeignKey("members.member_id"), nullable=True)   # recorded by


class EnvironmentalData(Base):
    __tablename__ = "environmental_data"

    data_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    air_quality_index: Mapped[float] = mapped_column(Float, nullable=False)
    water_quality_index: Mapped[float] = mapped_column(Float, nullable=False)
    rainfall: Mapped[float] = mapped_column(Float, nullable=False)
    forest_cover: Mapped[float] = mapped_column(Float, nullable=False)
    member_id: Mapped[int] = mapped_column(ForeignKey("members.member_id"), nullable=True)


class Asset(Base):
    __tablename__ = "asset"

    asset_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    asset_name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    locality: Mapped[str] = mapped_column(String(255), nullable=False)
    installation_year: Mapped[int] = mapped_column(Integer, nullable=False)
    amount_spent: Mapped[float] = mapped_column(Float, nullable=False)
    member_id: Mapped[int] = mapped_column(ForeignKey("members.member_id"), nullable=True)


# ── 7. Certificates & vaccinations ────────────────────────────────────────────
class Certificate(Base):
    __tablename__ = "certificate"

    certificate_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    certificate_type: Mapped[str] = mapped_column(String(100), nullable=False)
    issue_date: Mapped[date] = mapped_column(Date, nullable=False)
    validity_period: Mapped[date] = mapped_column(Date, nullable=False)  # valid until
    citizen_id: Mapped[int] = mapped_column(ForeignKey("citizen.citizen_id"), nullable=False)


class Vaccination(Base):
    __tablename__ = "vaccination"

    vaccine_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vaccine_type: Mapped[str] = mapped_column(String(100), nullable=False)
    date_administered: Mapped[date] = mapped_column(Date, nullable=False)
    dose_number: Mapped[int] = mapped_column(Integer, nullable=False)
    citizen_id: Mapped[int] = mapped_column(ForeignKey("citizen.citizen_id"), nullable=False)
