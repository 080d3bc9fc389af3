"""
Script to recreate the database with the current schema and demo data.
"""
import logging

from freelancer_hub.core.config import settings
from freelancer_hub.core.database import SessionLocal, drop_db, init_db, engine
from freelancer_hub.core.logging import configure_logging
from freelancer_hub.services.seed import seed_demo


logger = logging.getLogger("recreate_db")


def recreate_db():
    logger.info("Recreating database at %s", engine.url.render_as_string(hide_password=True))

    drop_db(engine)
    init_db(engine)

    db = SessionLocal()
    try:
        user = seed_demo(db)
    finally:
        db.close()

    logger.info("Database recreated. Demo user: %s (id=%s)", settings.demo_user_email, user.id)


if __name__ == "__main__":
    configure_logging()
    recreate_db()
