from alembic import context
from sqlmodel import SQLModel
from vocab_trainer.core.config import settings
from vocab_trainer.core.database import create_db_engine, normalize_database_url

# Import all models here so Alembic can detect them
from vocab_trainer.models.models import (  # noqa: F401
    User,
    WordSet,
    Card,
    Progress,
)

# this is the Alembic Config object
config = context.config

if not settings.database_url:
    raise RuntimeError("DATABASE_URL must be set to run migrations")

config.set_main_option("sqlalchemy.url", normalize_database_url(settings.database_url))

# Import metadata for autogenerate
target_metadata = SQLModel.metadata


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
    connectable = create_db_engine(settings.database_url)

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
