"""Admin storefront router: catalog analytics."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from libs.auth.dependencies import require_admin
from libs.auth.models import AuthUser
from libs.db.session import get_async_db
from services.storefront_service.schemas import AnalyticsStatsResponse
from services.storefront_service.services.analytics import get_analytics_stats
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["admin-storefront"])


@router.get("/stats", response_model=AnalyticsStatsResponse)
async def get_stats(
    days: Optional[int] = Query(None, ge=1, le=365),
    current_user: AuthUser = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Views, add-to-cart clicks and top viewed products (last 30 days by default)."""
    return await get_analytics_stats(db, window_days=days)
