"""
============================================================
CRC CARD (Class / Responsibilities / Collaborators)
============================================================
Class: alembic/env.py (Alembic Environment Configuration)

Responsibilities:
  - Run the electoral schema migrations (online/offline).
  - Resolve the database URL the same way the API does (DATABASE_URL,
    then .env through Settings) and pin the psycopg 3 driver.

Collaborators:
  - Alembic (context, config)
  - SQLAlchemy Engine (engine_from_config)
  - electoral.crosscutting.config.get_settings

Policy:
  - Migrations are hand-written (no ORM metadata, no autogenerate).
  - An empty URL is an error here; the API falls back to in-memory stores,
    migrations cannot.
============================================================
"""

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine import Connection

from electoral.crosscutting.config import get_settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

_PSYCOPG_SCHEMES = ("postgresql://", "postgres://")


def _with_psycopg_driver(raw_url: str) -> str:
    for scheme in _PSYCOPG_SCHEMES:
        if raw_url.startswith(scheme):
            return "postgresql+psycopg://" + raw_url[len(scheme) :]
    return raw_url


def database_url() -> str:
    raw_url = (os.environ.get("DATABASE_URL") or get_settings().database_url).strip()
    if not raw_url:
        raise RuntimeError(
            "DATABASE_URL is empty: set it to the election database before "
            "running migrations."
        )
    return _with_psycopg_driver(raw_url)


def _configure(connection: Connection | None = None) -> None:
    options = {"target_metadata": None, "version_table": "alembic_version"}
    if connection is None:
        context.configure(
            url=database_url(),
            literal_binds=True,
            dialect_opts={"paramstyle": "named"},
            **options,
        )
    else:
        context.configure(connection=connection, **options)


def run_migrations_offline() -> None:
    _configure()
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section) or {}
    section["sqlalchemy.url"] = database_url()

    engine = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)
    with engine.connect() as connection:
        _configure(connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
