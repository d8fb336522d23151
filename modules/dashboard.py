"""
modules/dashboard.py — Dashboard Panel Data
=============================================
Loads the data behind each dashboard panel for the signed-in user.
Which panels a role sees is defined in core/dashboards.py.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from core.dashboards import panels_for, default_panel, resolve_panel
from modules import agriculture, certificates, directory, schemes, statistics, taxes
from modules.accounts import CurrentUser
from core.roles import Role


async def _taxes(db, user: CurrentUser):
    if user.role == Role.EMPLOYEE:
        return await taxes.list_all_taxes(db)
    return await taxes.list_citizen_taxes(db, user.citizen_id)


async def _agriculture(db, user: CurrentUser):
    if user.role == Role.CITIZEN:
        return await agriculture.get_agri_for_citizen(db, user.citizen_id)
    return await agriculture.get_all_agri(db)


async def _vaccinations(db, user: CurrentUser):
    if user.role == Role.EMPLOYEE:
        return await certificates.list_vaccinations(db)
    return await certificates.list_vaccinations(db, user.citizen_id)


LOADERS = {
    "taxes": _taxes,
    "schemes": lambda db, user: schemes.list_schemes_for_citizen(db, user.citizen_id),
    "applications": lambda db, user: schemes.list_applications(db),
    "certificates": lambda db, user: certificates.list_certificates(db, user.citizen_id),
    "vaccinations": _vaccinations,
    "agriculture": _agriculture,
    "environment": lambda db, user: statistics.list_environmental(db),
    "census": lambda db, user: statistics.list_census(db),
    "assets": lambda db, user: statistics.list_assets(db),
    "citizens": lambda db, user: directory.list_citizens(db),
    "employees": lambda db, user: directory.list_employees(db),
    "monitors": lambda db, user: directory.list_monitors(db),
    "profile": directory.personal_profile,
}


def describe_dashboard(user: CurrentUser) -> dict:
    return {
        "role": user.role.value,
        "default": default_panel(user.role).id,
        "panels": [{"id": p.id, "label": p.label} for p in panels_for(user.role)],
    }


async def load_panel(db: AsyncSession, user: CurrentUser, selection: str = None) -> dict:
    panel = resolve_panel(user.role, selection)
    data = await LOADERS[panel.id](db, user)
    return {"role": user.role.value, "panel": panel.id, "label": panel.label, "data": data}
