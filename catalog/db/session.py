# catalog/db/session.py
from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from catalog.core.config import settings
from catalog.core.logging import get_logger

logger = get_logger(__name__)

_connect_args = {}
if make_url(settings.DATABASE_URL).get_backend_name() == "sqlite":
    _connect_args["check_same_thread"] = False

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.SQL_ECHO,
    connect_args=_connect_args,
)

logger.info(
    "database engine created",
    database=make_url(settings.DATABASE_URL).render_as_string(hide_password=True),
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
