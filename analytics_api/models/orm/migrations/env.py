"""env.py.

Alembic ENV module isort:skip_file
"""

######################## --- MODELS FOR MIGRATIONS --- ########################
from analytics_api.models.orm.base import Model

# To include a model in migrations, add a line here.
from analytics_api.models.orm.activity import Activity  # noqa: F401
from analytics_api.models.orm.data import DataRow  # noqa: F401
from analytics_api.models.orm.dataloads import Dataload  # noqa: F401
from analytics_api.models.orm.datasets import Dataset  # noqa: F401
from analytics_api.models.orm.shares import Share  # noqa: F401
from analytics_api.models.orm.thresholds import Threshold  # noqa: F401

###############################################################################

# Third party packages
from alembic import context
from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool


# App imports
from analytics_api.settings.globals import ALEMBIC_CONFIG


config = context.config
fileConfig(config.config_file_name)
target_metadata = Model.metadata


def exclude_tables_from_config(config_):
    tables = list()
    tables_ = config_.get("tables", None) if config_ else None
    if tables_:
        tables = tables_.split(",")
    return tables


exclude_tables = exclude_tables_from_config(config.get_section("alembic:exclude"))


def include_object(obj, name, type_, reflected, compare_to):
    if type_ == "table" and name in exclude_tables:
        return False
    else:
        return True


def alembic_url() -> str:
    return ALEMBIC_CONFIG.url.render_as_string(hide_password=False)


def run_migrations_offline():
    """Run migrations in 'offline' mode, emitting SQL to the script
    output."""
    context.configure(
        url=alembic_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        include_object=include_object,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    """Run migrations in 'online' mode against the writer database."""
    connectable = engine_from_config(
        {"sqlalchemy.url": alembic_url()},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            include_object=include_object,
        )

        with context.begin_transaction() as transaction:
            context.run_migrations()
            if "dry-run" in context.get_x_argument():
                print("Dry-run succeeded; now rolling back transaction")
                transaction.rollback()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
