from __future__ import annotations

import logging
import os
from pathlib import Path

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from score_engine.db import tables  # noqa: F401  registers every table on SQLModel.metadata
from score_engine.db.session import get_engine

logger = logging.getLogger(__name__)


def _find_alembic_dir() -> Path | None:
    """Locate the Alembic migrations directory.

    Checks ``ALEMBIC_DIR`` first, then the repo-root layout
    (``<repo>/score_engine/db/init_db.py`` → ``<repo>/alembic/``).
    """
    def _is_valid(p: Path) -> bool:
        return p.is_dir() and (p / "env.py").exists() and (p / "versions").is_dir()

    env_dir = os.getenv("ALEMBIC_DIR")
    if env_dir and _is_valid(Path(env_dir)):
        return Path(env_dir)

    repo_dir = Path(__file__).resolve().parent.parent.parent / "alembic"
    if _is_valid(repo_dir):
        return repo_dir

    return None


def create_tables(engine: Engine | None = None) -> None:
    """Create missing tables straight from SQLModel metadata."""
    SQLModel.metadata.create_all(engine or get_engine())


def migrate(engine: Engine | None = None) -> None:
    """Run Alembic migrations, falling back to ``create_all`` without them.

    Safe to run on every boot; never drops data.
    """
    engine = engine or get_engine()
    alembic_dir = _find_alembic_dir()
    if alembic_dir is None:
        logger.warning("Alembic migrations directory not found, using create_all()")
        create_tables(engine)
        return

    from alembic import command
    from alembic.config import Config

    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(alembic_dir))
    alembic_cfg.set_main_option("sqlalchemy.url", engine.url.render_as_string(hide_password=False))
    logger.info("Running Alembic migrations from %s", alembic_dir)
    command.upgrade(alembic_cfg, "head")
