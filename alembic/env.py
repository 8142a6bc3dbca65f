"""Migration runner for the store rating schema; the URL comes from app settings."""

from logging.config import fileConfig

from alembic import context

from app.core.config import get_settings
from app.core.database import build_engine
from app.models import Base

config = context.config
if config.config_file_name is not None:
    # alembic.ini carries the logging sections.
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline(url: str) -> None:
    """Emit SQL for the pending revisions without connecting."""
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online(url: str) -> None:
    # build_engine switches on SQLite foreign keys so cascades hold during migrations too.
    engine = build_engine(url)
    try:
        with engine.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=target_metadata,
                compare_type=True,
                render_as_batch=connection.dialect.name == "sqlite",
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


database_url = config.get_main_option("sqlalchemy.url") or get_settings().DATABASE_URL
if context.is_offline_mode():
    run_migrations_offline(database_url)
else:
    run_migrations_online(database_url)
