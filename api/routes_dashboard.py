"""
api/routes_dashboard.py — Dashboard API Endpoints

Endpoints:
    GET /api/dashboard            → My role's panels and the default one
    GET /api/dashboard/{panel}    → Data for one panel (unknown panels show the default)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_user
from db.session import get_db
from modules.accounts import CurrentUser
from modules.dashboard import describe_dashboard, load_panel

router = APIRouter()


@router.get("")
async def dashboard(user: CurrentUser = Depends(get_current_user)):
    return describe_dashboard(user)


@router.get("/{panel}")
async def dashboard_panel(
    panel: str,
    user: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await load_panel(db, user, panel)
