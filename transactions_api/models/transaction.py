"""Transaction model module."""
from datetime import datetime

from sqlalchemy import String, Text, Integer, DateTime, Float, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from transactions_api.database.database import Base


class Transaction(Base):
    """Product transaction record seeded from the external source."""

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    image: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    sold: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    date_of_sale: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
