import logging
from typing import Optional

from freelancer_hub.core.config import settings


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # SQLAlchemy logs every statement at INFO when echo is on
    if not settings.echo_sql:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
