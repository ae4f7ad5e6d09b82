# catalogo/api/routes/fornecedores.py
# API endpoints for suppliers.

from flask import Blueprint, request, jsonify, current_app

from catalogo.services.fornecedor_service import FornecedorService
from catalogo.domain.schemas import FornecedorCreate, validar_payload
from catalogo.api.errors import ApiError, ServiceError
from catalogo.utils.logger import logger

def _get_fornecedor_service() -> FornecedorService:
    service = current_app.config.get('fornecedor_service')
    if not service:
        logger.critical("FornecedorService not found in application config!")
        raise ServiceError("Serviço de fornecedores indisponível.", 503)
    return service

fornecedores_bp = Blueprint('fornecedores', __name__)

@fornecedores_bp.route('', methods=['GET'])
def listar_fornecedores():
    try:
        fornecedores = _get_fornecedor_service().listar()
        return jsonify([f.to_dict() for f in fornecedores]), 200
    except ApiError as e:
        logger.error(f"Falha ao listar fornecedores: {e}", exc_info=True)
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"Erro inesperado. Falha ao listar fornecedores: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@fornecedores_bp.route('/<int:fornecedor_id>', methods=['GET'])
def buscar_fornecedor(fornecedor_id: int):
    try:
        fornecedor = _get_fornecedor_service().buscar_por_id(fornecedor_id)
        return jsonify(fornecedor.to_dict()), 200
    except ApiError as e:
        logger.warning(f"Falha ao buscar fornecedor ID {fornecedor_id}: {e}")
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"Erro inesperado. Falha ao buscar fornecedor ID {fornecedor_id}: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@fornecedores_bp.route('', methods=['POST'])
def criar_fornecedor():
    try:
        dados = validar_payload(FornecedorCreate, request.get_json(silent=True))
        fornecedor = _get_fornecedor_service().criar(dados)
        return jsonify(fornecedor.to_dict()), 201
    except ApiError as e:
        logger.warning(f"Falha ao criar fornecedor: {e}")
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"Erro inesperado. Falha ao criar fornecedor: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@fornecedores_bp.route('/<int:fornecedor_id>', methods=['DELETE'])
def deletar_fornecedor(fornecedor_id: int):
    """Removes the supplier and its links to products."""
    try:
        _get_fornecedor_service().deletar(fornecedor_id)
        return '', 204
    except ApiError as e:
        logger.warning(f"Falha ao remover fornecedor ID {fornecedor_id}: {e}")
        return jsonify(e.to_dict()), e.status_code
    except Exception as e:
        logger.error(f"Erro inesperado. Falha ao remover fornecedor ID {fornecedor_id}: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500
