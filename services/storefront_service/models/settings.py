"""Store-wide settings (single row)."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from sqlalchemy import DateTime, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column


class StoreSettings(Base):
    __tablename__ = "store_settings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    shop_name: Mapped[str] = mapped_column(String(120), default="", server_default="")
    shop_logo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    exchange_rate: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(14, 4), nullable=True
    )

    contact_whatsapp: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    contact_instagram: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # White-label branding, master role only
    footer_credits: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    developer_logo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    theme: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    def __repr__(self):
        return f"<StoreSettings {self.shop_name}>"
