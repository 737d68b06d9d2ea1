from deliverydesk.demo.catalog import DEMO_PRODUCTS, seed_demo_catalog

__all__ = ["DEMO_PRODUCTS", "seed_demo_catalog"]
