#!/usr/bin/env python3
"""
Walkthrough of the data layer: create a customer for the demo user, then read
back every customer of that user together with their projects.
Run from the backend directory: python demo_script.py
"""
import json
import logging

from freelancer_hub.core.database import SessionLocal, init_db
from freelancer_hub.core.errors import DataLayerError
from freelancer_hub.core.logging import configure_logging
from freelancer_hub.schemas import CustomerWithProjectsOut
from freelancer_hub.services.customer_service import create_customer, list_customers_for_user
from freelancer_hub.services.seed import seed_demo


logger = logging.getLogger("demo_script")


def main() -> int:
    init_db()
    db = SessionLocal()
    try:
        user = seed_demo(db)
        customer = create_customer(db, user.id, {
            "name": "Northwind Studio",
            "email": "hello@northwind.example.com",
        })
        logger.info("Created customer %s for user %s", customer.id, user.id)

        customers = list_customers_for_user(db, user.id, include_projects=True)
        payload = [CustomerWithProjectsOut.model_validate(c).model_dump(mode="json") for c in customers]
        print(json.dumps(payload, indent=2))
        return 0
    except DataLayerError as e:
        logger.error("Demo failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    configure_logging()
    raise SystemExit(main())
