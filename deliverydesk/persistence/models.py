from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import JSON


def _json_type():
    return JSON().with_variant(JSONB(astext_type=Text()), "postgresql")


class Base(DeclarativeBase):
    pass


class ProductModel(Base):
    __tablename__ = "products"

    product_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    code: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    description: Mapped[str] = mapped_column(String(256), default="", nullable=False)
    unit: Mapped[str] = mapped_column(String(32), default="unidad", nullable=False)
    pack_size: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    # price list -> decimal string
    prices: Mapped[dict] = mapped_column(_json_type(), default=dict, nullable=False)
    stock: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    min_stock: Mapped[int] = mapped_column(Integer, default=0, nullable=False)


class OrderDraftModel(Base):
    __tablename__ = "order_drafts"

    order_id: Mapped[str] = mapped_column(String(36), primary_key=True)
    client_ref: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)
    price_list: Mapped[str] = mapped_column(String(16), default="lista_a", nullable=False)
    order_type: Mapped[str] = mapped_column(String(16), default="normal", nullable=False)
    status: Mapped[str] = mapped_column(String(32), default="pendiente", nullable=False)
    discount_percent: Mapped[str] = mapped_column(String(16), default="0", nullable=False)
    line_items: Mapped[list] = mapped_column(_json_type(), default=list, nullable=False)
    payment_status: Mapped[str] = mapped_column(String(16), default="pendiente", nullable=False)
    payment_method: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    paid_amount: Mapped[str] = mapped_column(String(32), default="0", nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
