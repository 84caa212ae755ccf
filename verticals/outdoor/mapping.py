"""Row <-> domain object mapping.

Table columns are snake_case and mirror the hosted schema. Some hosted
clients hand JSON columns back as strings; those are decoded here. Brand
rows written by the web client may carry camelCase keys.
"""

import json
from typing import Any

from verticals.outdoor.backend import Row
from verticals.outdoor.models.schemas import BrandProfile, Product, Transaction


def _json(value: Any, default: Any) -> Any:
    if value is None:
        return default
    if isinstance(value, str):
        return json.loads(value)
    return value


# -- Brands --

def brand_to_row(brand: BrandProfile) -> Row:
    return {
        "id": brand.id,
        "name": brand.name,
        "short_name": brand.short_name,
        "tagline": brand.tagline,
        "theme": brand.theme.model_dump(),
        "logo_icon": brand.logo_icon,
        "domains": list(brand.domains),
    }


def row_to_brand(row: Row) -> BrandProfile:
    return BrandProfile(
        id=row["id"],
        name=row["name"],
        short_name=row.get("short_name") or row.get("shortName") or row["name"],
        tagline=row.get("tagline") or "",
        theme=_json(row.get("theme"), {}),
        logo_icon=row.get("logo_icon") or row.get("logoIcon") or "mountain",
        domains=_json(row.get("domains"), []),
    )


# -- Products --

def product_to_row(product: Product) -> Row:
    return {
        "id": product.id,
        "name": product.name,
        "category": product.category,
        "image": product.image,
        "price_sale": dict(product.price_sale),
        "price_rent_per_day": dict(product.price_rent_per_day),
        "stock": dict(product.stock),
    }


def row_to_product(row: Row) -> Product:
    return Product(
        id=str(row["id"]),
        name=row["name"],
        category=row.get("category") or "",
        image=row.get("image"),
        price_sale=_json(row.get("price_sale"), {}),
        price_rent_per_day=_json(row.get("price_rent_per_day"), {}),
        stock=_json(row.get("stock"), {}),
    )


# -- Transactions --

def transaction_to_row(tx: Transaction) -> Row:
    return {
        "id": tx.id,
        "branch": tx.branch,
        "date": tx.date.isoformat(),
        "type": tx.type.value,
        "total_amount": tx.total_amount,
        "customer_name": tx.customer_name,
        "details": tx.details,
    }


def row_to_transaction(row: Row) -> Transaction:
    return Transaction(
        id=row["id"],
        branch=row["branch"],
        date=row["date"],
        type=row["type"],
        total_amount=row.get("total_amount") or 0,
        customer_name=row.get("customer_name") or "",
        details=_json(row.get("details"), {}),
    )
