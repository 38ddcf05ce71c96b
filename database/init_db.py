import logging

from database.db import Base, engine

logger = logging.getLogger(__name__)


def init_db(bind=None):
    """Create every table that does not exist yet."""
    # model modules register themselves on Base.metadata when imported
    from models import (  # noqa: F401
        config_entries,
        evaluations,
        profiles,
        student_evaluation_lists,
        teacher_assignments,
        teachers,
    )

    target = bind if bind is not None else engine
    Base.metadata.create_all(bind=target)
    logger.info(f"Schema ready: {', '.join(sorted(Base.metadata.tables))}")
