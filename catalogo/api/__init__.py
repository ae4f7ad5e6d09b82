# catalogo/api/__init__.py
# Initializes the API layer and registers blueprints.
# Blueprints are imported inside register_blueprints: the domain layer imports
# catalogo.api.errors, and the route modules import the domain layer.

from flask import Flask

from catalogo.utils.logger import logger

def register_blueprints(app: Flask):
    """
    Registers all defined blueprints with the Flask application.

    Args:
        app: The Flask application instance.
    """
    from .routes.produtos import produtos_bp
    from .routes.categorias import categorias_bp
    from .routes.fornecedores import fornecedores_bp

    blueprints = [
        (produtos_bp, '/api/produtos'),
        (categorias_bp, '/api/categorias'),
        (fornecedores_bp, '/api/fornecedores'),
    ]

    logger.info("Registering API blueprints...")
    for bp, prefix in blueprints:
        app.register_blueprint(bp, url_prefix=prefix)
        logger.debug(f"Blueprint '{bp.name}' registered with prefix '{prefix}'.")
    logger.info("All API blueprints registered.")

__all__ = ["register_blueprints"]
