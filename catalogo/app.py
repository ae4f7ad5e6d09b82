# catalogo/app.py
from flask import Flask, jsonify
from flask_cors import CORS
import atexit
from sqlalchemy.exc import SQLAlchemyError

from catalogo.config import Config, describe_config
from catalogo.api import register_blueprints
from catalogo.api.errors import register_error_handlers, ConfigurationError, DatabaseError
from catalogo.database import (
    get_db_session,
    init_sqlalchemy,
    dispose_sqlalchemy_engine,
)
from catalogo.database.produto_repository import ProdutoRepository
from catalogo.database.categoria_repository import CategoriaRepository
from catalogo.database.fornecedor_repository import FornecedorRepository
from catalogo.services import ProdutoService, CategoriaService, FornecedorService
from catalogo.utils.logger import logger, configure_logger
from catalogo.utils.produto_query import HEADER_TOTAL_COUNT, HEADER_TOTAL_PAGES, HEADER_PAGE, HEADER_PAGE_SIZE

def create_app(config_object: Config) -> Flask:
    """
    Factory function to create and configure the Flask application with SQLAlchemy.

    Args:
        config_object: The configuration object for the application.

    Returns:
        The configured Flask application instance.

    Raises:
        ConfigurationError / DatabaseError: If the database cannot be initialized.
    """
    app = Flask("Catalogo-API")
    app.config.from_object(config_object)
    app.json.sort_keys = False

    # --- Logging ---
    configure_logger(config_object.LOG_LEVEL)
    logger.info("Iniciando a aplicação Flask do catálogo de produtos.")
    for linha in describe_config(config_object):
        logger.info(f"Config - {linha}")

    # --- CORS Configuration ---
    CORS(
        app,
        resources={r"/api/*": {"origins": config_object.CORS_ORIGINS}},
        expose_headers=[HEADER_TOTAL_COUNT, HEADER_TOTAL_PAGES, HEADER_PAGE, HEADER_PAGE_SIZE],
    )
    logger.info(f"CORS configurado para as origens: {config_object.CORS_ORIGINS}")

    # --- Database Initialization (SQLAlchemy) ---
    try:
        db_uri = config_object.SQLALCHEMY_DATABASE_URI
        if not db_uri:
            raise ConfigurationError("SQLALCHEMY_DATABASE_URI não está configurado.")

        db_engine = init_sqlalchemy(db_uri, seed_data=config_object.SEED_DATA)
        logger.info("Motor SQLAlchemy e fábrica de sessões inicializados com sucesso.")

        atexit.register(dispose_sqlalchemy_engine)
        logger.debug("Registrado descarte do motor SQLAlchemy para saída da aplicação.")

    except (DatabaseError, ConfigurationError, SQLAlchemyError) as db_init_err:
        logger.critical(f"Falha ao inicializar o banco de dados: {db_init_err}", exc_info=True)
        raise

    # --- Dependency Injection (Service Instantiation) ---
    logger.info("Instanciando repositórios e serviços...")
    produto_repo = ProdutoRepository(db_engine)
    categoria_repo = CategoriaRepository(db_engine)
    fornecedor_repo = FornecedorRepository(db_engine)

    app.config['produto_repository'] = produto_repo
    app.config['categoria_repository'] = categoria_repo
    app.config['fornecedor_repository'] = fornecedor_repo

    app.config['produto_service'] = ProdutoService(produto_repo, categoria_repo, fornecedor_repo)
    app.config['categoria_service'] = CategoriaService(categoria_repo)
    app.config['fornecedor_service'] = FornecedorService(fornecedor_repo)
    logger.info("Serviços instanciados e adicionados à configuração do aplicativo.")

    # --- Register Blueprints (API Routes) ---
    register_blueprints(app)

    # --- Register Error Handlers ---
    register_error_handlers(app)

    # --- Simple Health Check Endpoint ---
    @app.route('/health', methods=['GET'])
    def health_check():
        db_status = "ok"
        db_error = None
        total_produtos = None
        try:
            with get_db_session(read_only=True) as db:
                total_produtos = produto_repo.count(db)
        except (DatabaseError, SQLAlchemyError, RuntimeError) as e:
            logger.error(f"Verificação de saúde da sessão do banco de dados falhou: {e}")
            db_status = "error"
            db_error = str(e)

        return jsonify({
            "status": "ok" if db_status == "ok" else "degraded",
            "database": db_status,
            "database_error": db_error,
            "produtos": total_produtos,
        }), 200 if db_status == "ok" else 503

    logger.info("Aplicação do catálogo configurada com sucesso.")
    return app

