"""
core/dashboards.py — Role Dashboard Panels
============================================
Each role's dashboard is a sidebar of panels; selecting one shows its data.
The first panel of each list is the one shown when nothing (or something
unknown) is selected.
"""

from typing import List, NamedTuple

from core.roles import Role


class Panel(NamedTuple):
    id: str
    label: str


TAXES = Panel("taxes", "Tax Details")
SCHEMES = Panel("schemes", "Welfare Schemes")
APPLICATIONS = Panel("applications", "Scheme Applications")
CERTIFICATES = Panel("certificates", "Certificates")
VACCINATIONS = Panel("vaccinations", "Vaccinations")
AGRICULTURE = Panel("agriculture", "Agriculture Statistics")
ENVIRONMENT = Panel("environment", "Environmental Data")
CENSUS = Panel("census", "Census Data")
ASSETS = Panel("assets", "Asset Management")
CITIZENS = Panel("citizens", "Citizen")
EMPLOYEES = Panel("employees", "Panchayat Employee")
MONITORS = Panel("monitors", "Government Monitors")
PROFILE = Panel("profile", "Personal Info")

DASHBOARDS = {
    Role.CITIZEN: [TAXES, SCHEMES, CERTIFICATES, VACCINATIONS, AGRICULTURE,
                   ENVIRONMENT, CENSUS, ASSETS, PROFILE],
    Role.EMPLOYEE: [CITIZENS, EMPLOYEES, MONITORS, APPLICATIONS, TAXES, AGRICULTURE,
                    VACCINATIONS, ENVIRONMENT, CENSUS, ASSETS, PROFILE],
    Role.MONITOR: [EMPLOYEES, AGRICULTURE, ENVIRONMENT, CENSUS, ASSETS, PROFILE],
    Role.ADMIN: [CITIZENS, EMPLOYEES, MONITORS, PROFILE],
}


def panels_for(role: Role) -> List[Panel]:
    return DASHBOARDS[role]


def default_panel(role: Role) -> Panel:
    return DASHBOARDS[role][0]


def resolve_panel(role: Role, selection: str = None) -> Panel:
    """Return the selected panel, or the role's default for anything it doesn't have."""
    for panel in DASHBOARDS[role]:
        if panel.id == selection:
            return panel
    return default_panel(role)
