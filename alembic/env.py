# alembic/env.py
# Ambiente de migrações do catálogo. A URL do banco e os metadados vêm do pacote catalogo.

import os
import sys
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

# Raiz do projeto no sys.path para importar 'catalogo' ao rodar `alembic` a partir da raiz
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from catalogo.config import config as app_config  # noqa: E402
from catalogo.database.base import Base  # noqa: E402
import catalogo.domain  # noqa: E402,F401  registra os modelos em Base.metadata

alembic_cfg = context.config

if alembic_cfg.config_file_name is not None:
    fileConfig(alembic_cfg.config_file_name)

target_metadata = Base.metadata

database_uri = app_config.SQLALCHEMY_DATABASE_URI
if not database_uri:
    sys.exit("Erro: SQLALCHEMY_DATABASE_URI não está configurado (verifique DB_TYPE e as variáveis do banco no .env).")
if database_uri == "sqlite://":
    sys.exit("Erro: DB_TYPE=MEMORY não suporta migrações; use SQLITE ou POSTGRES.")
alembic_cfg.set_main_option('sqlalchemy.url', database_uri.replace('%', '%%'))


def _configure_options(**kwargs):
    return dict(
        target_metadata=target_metadata,
        compare_type=True,
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Gera o SQL das migrações sem conectar ao banco."""
    context.configure(**_configure_options(
        url=alembic_cfg.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    ))
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Aplica as migrações numa conexão real."""
    connectable = engine_from_config(
        alembic_cfg.get_section(alembic_cfg.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        # SQLite não suporta ALTER TABLE completo
        context.configure(**_configure_options(
            connection=connection,
            render_as_batch=connection.dialect.name == "sqlite",
        ))
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
