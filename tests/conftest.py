"""Shared fixtures: a Flask app over a fresh in-memory SQLite database per test."""

import pytest

from catalogo.app import create_app
from catalogo.config import Config
from catalogo.database import dispose_sqlalchemy_engine


@pytest.fixture
def app(tmp_path):
    config = Config(
        DB_TYPE="MEMORY",
        SEED_DATA=False,
        LOG_LEVEL="WARNING",
        LOG_DIRECTORY=str(tmp_path),
        CORS_ORIGINS=["*"],
    )
    app = create_app(config)
    app.config["TESTING"] = True
    yield app
    dispose_sqlalchemy_engine()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def produto_service(app):
    return app.config["produto_service"]


@pytest.fixture
def categoria_service(app):
    return app.config["categoria_service"]


@pytest.fixture
def fornecedor_service(app):
    return app.config["fornecedor_service"]

