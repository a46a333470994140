import os

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect, text

from partcatalog.core.db import Base, engine

BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _alembic_config():
    cfg = Config(os.path.join(BACKEND_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(BACKEND_DIR, "alembic"))
    cfg.attributes["configure_logger"] = False
    return cfg


def test_upgrade_and_downgrade_use_the_catalog_version_table(db):
    Base.metadata.drop_all(bind=engine)
    cfg = _alembic_config()

    command.upgrade(cfg, "head")

    tables = set(inspect(engine).get_table_names())
    assert set(Base.metadata.tables) <= tables
    assert "alembic_version_catalog" in tables
    assert "alembic_version" not in tables
    with engine.connect() as conn:
        assert conn.execute(text("SELECT version_num FROM alembic_version_catalog")).scalar() == "5c1e0a7d2b90"

    command.downgrade(cfg, "base")

    tables = set(inspect(engine).get_table_names())
    assert not set(Base.metadata.tables) & tables
