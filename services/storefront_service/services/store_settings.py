"""Store settings accessors (single-row table)."""

from typing import Any, Optional

from libs.auth.models import AuthUser
from libs.common.logging import get_logger
from services.storefront_service.models import StoreSettings
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

MASTER_ONLY_FIELDS = ("footer_credits", "developer_logo_url")


async def get_store_settings(db: AsyncSession) -> Optional[StoreSettings]:
    result = await db.execute(select(StoreSettings).limit(1))
    return result.scalars().first()


async def upsert_store_settings(
    db: AsyncSession, changes: dict[str, Any], user: AuthUser
) -> StoreSettings:
    """Update the settings row, creating it on first save.

    Branding fields are silently kept as they are unless ``user`` is master.
    """
    changes = dict(changes)
    if not user.is_master:
        dropped = [f for f in MASTER_ONLY_FIELDS if changes.pop(f, None) is not None]
        if dropped:
            logger.info("Ignoring master-only fields %s from %s", dropped, user.user_id)

    settings = await get_store_settings(db)
    if settings is None:
        settings = StoreSettings(**changes)
        db.add(settings)
    else:
        for field, value in changes.items():
            setattr(settings, field, value)

    await db.commit()
    await db.refresh(settings)
    return settings
