import os
import sys
from logging.config import fileConfig
from sqlalchemy import engine_from_config, make_url
from sqlalchemy import pool
from alembic import context

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from app.db.base import Base
from app.models.qr import qr_code  # noqa: F401  registers the table on Base.metadata
from app.core.config import settings

# this is the Alembic Config object
config = context.config

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Set the SQLAlchemy URL from settings; migrations run on the sync driver
if not config.get_main_option("sqlalchemy.url"):
    database_url = settings.DATABASE_URL.replace("+asyncpg", "").replace("+aiosqlite", "")
    # configparser treats "%" as interpolation
    config.set_main_option("sqlalchemy.url", make_url(database_url).render_as_string(hide_password=False).replace("%", "%%"))

print("🔍 Alembic is using DB URL:", make_url(config.get_main_option("sqlalchemy.url")))


target_metadata = Base.metadata

def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    # Safety check for production environment
    environment = os.getenv("ENVIRONMENT", "development").lower()

    if environment == "production":
        print("🚨 PRODUCTION ENVIRONMENT DETECTED")
        if "downgrade" in sys.argv:
            raise RuntimeError("🚫 Downgrades are blocked in production!")

    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection, target_metadata=target_metadata
        )

        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
