# catalogo/api/routes/categorias.py
# API endpoints for product categories.

from flask import Blueprint, request, jsonify, current_app

from catalogo.services.categoria_service import CategoriaService
from catalogo.domain.schemas import CategoriaCreate, validar_payload
from catalogo.api.errors import ApiError, ServiceError
from catalogo.utils.logger import logger

def _get_categoria_service() -> CategoriaService:
    service = current_app.config.get('categoria_service')
    if not service:
        logger.critical("CategoriaService not found in application config!")
        raise ServiceError("Serviço de categorias indisponível.", 503)
    return service

categorias_bp = Blueprint('categorias', __name__)

@categorias_bp.route('', methods=['GET'])
def listar_categorias():
    try:
        categorias = _get_categoria_service().listar()
        return jsonify([c.to_dict() for c in categorias]), 200
    except ApiError as e:
        logger.error(f"Falha ao listar categorias: {e}", exc_info=True)
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"Erro inesperado. Falha ao listar categorias: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@categorias_bp.route('/<int:categoria_id>', methods=['GET'])
def buscar_categoria(categoria_id: int):
    try:
        categoria = _get_categoria_service().buscar_por_id(categoria_id)
        return jsonify(categoria.to_dict()), 200
    except ApiError as e:
        logger.warning(f"Falha ao buscar categoria ID {categoria_id}: {e}")
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"Erro inesperado. Falha ao buscar categoria ID {categoria_id}: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@categorias_bp.route('', methods=['POST'])
def criar_categoria():
    """Creates a category. Names are unique (409 on duplicates)."""
    try:
        dados = validar_payload(CategoriaCreate, request.get_json(silent=True))
        categoria = _get_categoria_service().criar(dados)
        return jsonify(categoria.to_dict()), 201
    except ApiError as e:
        logger.warning(f"Falha ao criar categoria: {e}")
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"Erro inesperado. Falha ao criar categoria: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@categorias_bp.route('/<int:categoria_id>', methods=['DELETE'])
def deletar_categoria(categoria_id: int):
    try:
        _get_categoria_service().deletar(categoria_id)
        return '', 204
    except ApiError as e:
        logger.warning(f"Falha ao remover categoria ID {categoria_id}: {e}")
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"Erro inesperado. Falha ao remover categoria ID {categoria_id}: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500
