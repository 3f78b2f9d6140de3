from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.core.models import Base, TimestampMixin


class Setting(TimestampMixin, Base):
    """Значение настройки в разрезе магазина (store_id=0 - общее значение)."""

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False, default="")
    store_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index(
            "ix_setting_name_store",
            "name",
            "store_id",
            unique=True,
        ),
    )
