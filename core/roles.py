"""
core/roles.py — Roles & Permission Gate
=========================================
The security gate. Called by every role-restricted route before any data access.

Roles:
    admin    — System Administrator: manages citizens, employees and monitors
    employee — Panchayat Employee: runs schemes, taxes and village statistics
    monitor  — Government Monitor: reads statistics and staff records
    citizen  — everyone else: sees only their own records

A citizen's role follows from the occupation on their citizen row.
"""

import logging
from enum import Enum
from fastapi import HTTPException, status

logger = logging.getLogger("panchayat.roles")


class Role(str, Enum):
    CITIZEN = "citizen"
    EMPLOYEE = "employee"
    MONITOR = "monitor"
    ADMIN = "admin"


# Occupation strings stored on the citizen row for the privileged roles
ROLE_OCCUPATIONS = {
    Role.ADMIN: "System Administrator",
    Role.EMPLOYEE: "Panchayat Employee",
    Role.MONITOR: "Government Monitor",
}

OCCUPATION_ROLES = {occupation: role for role, occupation in ROLE_OCCUPATIONS.items()}

STAFF_ROLES = (Role.EMPLOYEE, Role.MONITOR, Role.ADMIN)


def role_for_occupation(occupation: str) -> Role:
    """Map a citizen's occupation to the role whose dashboard they get."""
    return OCCUPATION_ROLES.get(occupation or "", Role.CITIZEN)


def occupation_for_role(role: Role, fallback: str = None) -> str:
    """The occupation a new account of this role is registered with."""
    return ROLE_OCCUPATIONS.get(role, fallback or "other")


def check_role(role: Role, allowed: tuple) -> bool:
    """Returns True if the role may call an endpoint restricted to `allowed`."""
    return role in allowed


def require_role(citizen_id: int, role: Role, allowed: tuple):
    """
    Same as check_role but raises HTTP 403 instead of returning False.
    Use this as a guard in route handlers:

        require_role(user.citizen_id, user.role, (Role.EMPLOYEE,))
        # execution continues only if permitted
    """
    if not check_role(role, allowed):
        logger.warning(f"Access DENIED: citizen {citizen_id} ({role.value}) needs one of "
                       f"{[r.value for r in allowed]}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not allowed to perform this action.",
        )
