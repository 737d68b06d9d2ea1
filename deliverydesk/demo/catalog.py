from __future__ import annotations

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from deliverydesk.domain.catalog import Product
from deliverydesk.persistence.models import ProductModel
from deliverydesk.persistence.repository import upsert_product


def _prices(a: int, b: int, c: int) -> dict[str, Decimal]:
    return {"lista_a": Decimal(a), "lista_b": Decimal(b), "lista_c": Decimal(c)}


DEMO_PRODUCTS: tuple[Product, ...] = (
    Product(1, "SPEED-250", "Speed 250ml", "energizantes", _prices(1200, 1080, 1020), "lata", 24, 245, 50, "Bebida energizante 250ml"),
    Product(2, "SPEED-473", "Speed XL 473ml", "energizantes", _prices(1800, 1620, 1530), "lata", 24, 180, 40, "Bebida energizante XL 473ml"),
    Product(3, "SPEED-COLA", "Speed Cola", "bebidas", _prices(1200, 1080, 1020), "lata", 24, 150, 40, "Speed Cola 350ml"),
    Product(4, "AGUA-500", "Agua BLOCK 500ml", "aguas", _prices(800, 720, 680), "botella", 12, 89, 30, "Agua mineral 500ml"),
    Product(5, "CHAMP", "Champagne", "alcoholes", _prices(3900, 3510, 3315), "botella", 6, 45, 10, "Champagne 750ml"),
    Product(6, "HOLM-LIC", "Holmöser Licor 750ml", "licores", _prices(4200, 3780, 3570), "botella", 6, 32, 10, "Holmöser Licor 750ml"),
    Product(7, "HOLM-PET", "Holmöser Petaca 200ml", "licores", _prices(1500, 1350, 1275), "petaca", 12, 68, 20, "Holmöser Petaca 200ml"),
    Product(8, "SMIRN", "Smirnoff 750ml", "alcoholes", _prices(5500, 4950, 4675), "botella", 6, 28, 10, "Smirnoff Vodka 750ml"),
    Product(9, "FERNET", "Fernet 750ml", "alcoholes", _prices(4800, 4320, 4080), "botella", 12, 2, 15, "Fernet 750ml"),
)


def seed_demo_catalog(session: Session) -> dict:
    existing = session.scalar(select(func.count()).select_from(ProductModel)) or 0
    if existing:
        return {"products": existing, "seeded_now": False}
    for product in DEMO_PRODUCTS:
        upsert_product(session, product)
    session.flush()
    return {"products": len(DEMO_PRODUCTS), "seeded_now": True}
