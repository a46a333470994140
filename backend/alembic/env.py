# backend/alembic/env.py
from logging.config import fileConfig
import os, sys
from alembic import context

# --- Proje kökünü PYTHONPATH'e ekle (.. = backend) ---
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BASE_DIR not in sys.path:
    sys.path.insert(0, BASE_DIR)

# Katalog engine & metadata (DATABASE_URL / MSSQL_DSN)
from partcatalog.core.db import engine as app_engine, Base
# (Modeller import edilince metadata dolu olur)
from partcatalog import models  # noqa: F401

# Alembic config & logging (testler configure_logger=False verir, uygulama loglarına dokunmaz)
config = context.config
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# Katalog, portalın diğer modülleriyle aynı veritabanını paylaşır: kendi sürüm tablosu
VERSION_TABLE = "alembic_version_catalog"


def include_object(obj, name, type_, reflected, compare_to):
    # Katalog metadata'sında olmayan tablolar başka modüllerin; autogenerate onları silmeye kalkmasın
    if type_ == "table" and reflected and compare_to is None:
        return False
    return True


def run_migrations_offline():
    """Run migrations in 'offline' mode."""
    url = str(app_engine.url)
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        compare_server_default=False,
        render_as_batch=(app_engine.dialect.name == "sqlite"),
        version_table=VERSION_TABLE,
        include_object=include_object,
    )
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    """Run migrations in 'online' mode."""
    connectable = app_engine
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=False,
            render_as_batch=(app_engine.dialect.name == "sqlite"),
            version_table=VERSION_TABLE,
            include_object=include_object,
        )
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
