"""Alembic environment for the users/products schema; the URL comes from storefront settings."""

from alembic import context
from sqlalchemy import engine_from_config, pool

from storefront.core.config import get_settings
from storefront.models import Base

config = context.config
# ConfigParser interpolation treats "%" specially.
config.set_main_option("sqlalchemy.url", get_settings().DATABASE_URL.replace("%", "%%"))


def _configure(**kwargs: object) -> None:
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        target_metadata=Base.metadata,
        # SQLite cannot ALTER most constraints in place.
        render_as_batch=url.startswith("sqlite"),
        **kwargs,
    )
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    _configure(url=config.get_main_option("sqlalchemy.url"), literal_binds=True)
else:
    engine = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        _configure(connection=connection)
