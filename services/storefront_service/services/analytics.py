"""Catalog analytics: anonymous event tracking and admin reporting."""

import uuid
from typing import Optional

from libs.common.config import get_settings
from libs.common.datetime_utils import days_ago
from libs.common.logging import get_logger
from services.storefront_service.models import AnalyticsEvent, AnalyticsEventType, Product
from services.storefront_service.schemas import AnalyticsStatsResponse, TopViewedProduct
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

MISSING_PRODUCT_NAME = "—"


async def track_event(
    db: AsyncSession,
    event_type: AnalyticsEventType,
    session_id: str,
    product_id: Optional[uuid.UUID] = None,
) -> bool:
    """Record an event. Never raises: analytics must not affect the shopper.

    Returns whether the event was stored.
    """
    try:
        db.add(
            AnalyticsEvent(
                event_type=event_type, product_id=product_id, session_id=session_id
            )
        )
        await db.commit()
        return True
    except Exception as e:
        logger.debug(f"Dropped analytics event {event_type.value}: {e}")
        try:
            await db.rollback()
        except Exception as rollback_error:
            logger.debug(f"Rollback after dropped analytics event failed: {rollback_error}")
        return False


async def _count_events(db: AsyncSession, event_type: AnalyticsEventType, since) -> int:
    result = await db.execute(
        select(func.count(AnalyticsEvent.id)).where(
            AnalyticsEvent.event_type == event_type,
            AnalyticsEvent.created_at >= since,
        )
    )
    return result.scalar() or 0


async def get_analytics_stats(
    db: AsyncSession,
    window_days: Optional[int] = None,
    top_n: Optional[int] = None,
) -> AnalyticsStatsResponse:
    """Views, add-to-cart clicks and most viewed products over a trailing window."""
    settings = get_settings()
    since = days_ago(window_days or settings.ANALYTICS_WINDOW_DAYS)
    top_n = top_n or settings.ANALYTICS_TOP_PRODUCTS

    total_views = await _count_events(db, AnalyticsEventType.PRODUCT_VIEW, since)
    total_clicks = await _count_events(db, AnalyticsEventType.ADD_TO_CART_CLICK, since)

    view_count = func.count(AnalyticsEvent.id).label("view_count")
    top_result = await db.execute(
        select(AnalyticsEvent.product_id, view_count)
        .where(
            AnalyticsEvent.event_type == AnalyticsEventType.PRODUCT_VIEW,
            AnalyticsEvent.product_id.is_not(None),
            AnalyticsEvent.created_at >= since,
        )
        .group_by(AnalyticsEvent.product_id)
        .order_by(view_count.desc())
        .limit(top_n)
    )
    top_rows = top_result.all()

    top_viewed: list[TopViewedProduct] = []
    if top_rows:
        product_ids = [row.product_id for row in top_rows]
        products = await db.execute(
            select(Product.id, Product.name, Product.sku).where(
                Product.id.in_(product_ids)
            )
        )
        by_id = {row.id: row for row in products.all()}
        for row in top_rows:
            product = by_id.get(row.product_id)
            top_viewed.append(
                TopViewedProduct(
                    product_id=row.product_id,
                    name=product.name if product else MISSING_PRODUCT_NAME,
                    sku=product.sku if product else None,
                    view_count=row.view_count,
                )
            )

    return AnalyticsStatsResponse(
        total_product_views=total_views,
        total_add_to_cart_clicks=total_clicks,
        top_viewed_products=top_viewed,
    )
