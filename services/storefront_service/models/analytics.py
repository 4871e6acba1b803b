"""Anonymous catalog analytics events."""

import uuid
from datetime import datetime
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.storefront_service.models.enums import AnalyticsEventType, enum_values
from sqlalchemy import DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column


class AnalyticsEvent(Base):
    __tablename__ = "analytics_events"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    event_type: Mapped[AnalyticsEventType] = mapped_column(
        SAEnum(
            AnalyticsEventType,
            values_callable=enum_values,
            name="analytics_event_type_enum",
        ),
        nullable=False,
    )
    # No FK: events outlive deleted products
    product_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    session_id: Mapped[str] = mapped_column(String(64), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, index=True
    )
