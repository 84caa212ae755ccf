"""SQLAlchemy models for the outdoor vertical.

Column names match the hosted schema so the SQL and REST backends produce
identical rows. The to_dict() method provides the row interface used by
repositories.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from core.models.base import Base, TimestampMixin


class Brand(TimestampMixin, Base):
    """A storefront brand (tenant)."""

    __tablename__ = "brands"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    short_name: Mapped[str] = mapped_column(String(100), nullable=False)
    tagline: Mapped[str] = mapped_column(String(300), nullable=False, default="")
    theme: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    logo_icon: Mapped[str] = mapped_column(String(20), nullable=False, default="mountain")
    domains: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "short_name": self.short_name,
            "tagline": self.tagline,
            "theme": self.theme,
            "logo_icon": self.logo_icon,
            "domains": self.domains,
        }


class Product(TimestampMixin, Base):
    """A catalog item with per-brand price and stock maps."""

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(300), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    price_sale: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    price_rent_per_day: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    stock: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "image": self.image,
            "price_sale": self.price_sale,
            "price_rent_per_day": self.price_rent_per_day,
            "stock": self.stock,
        }


class Transaction(TimestampMixin, Base):
    """A sale, rental or laundry order recorded at one branch."""

    __tablename__ = "transactions"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    branch: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    total_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    details: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    def to_dict(self) -> dict:
        date = self.date
        if date is not None and date.tzinfo is None:
            # SQLite drops the offset
            date = date.replace(tzinfo=timezone.utc)
        return {
            "id": self.id,
            "branch": self.branch,
            "date": date.isoformat() if date else None,
            "type": self.type,
            "total_amount": self.total_amount,
            "customer_name": self.customer_name,
            "details": self.details,
        }


class DomainBinding(TimestampMixin, Base):
    """A hostname or alias pinned to a brand."""

    __tablename__ = "domain_bindings"

    host: Mapped[str] = mapped_column(String(255), primary_key=True)
    branch: Mapped[str] = mapped_column(String(64), nullable=False)

    def to_dict(self) -> dict:
        return {"host": self.host, "branch": self.branch}
