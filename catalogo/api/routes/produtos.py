# catalogo/api/routes/produtos.py
# API endpoints for the product catalog: CRUD, listing pipeline and relationships.

import math
from typing import Optional
from flask import Blueprint, request, jsonify, current_app

from catalogo.services.produto_service import ProdutoService
from catalogo.domain.schemas import ProdutoCreate, ProdutoUpdate, ProdutoDetalheInput, validar_payload
from catalogo.api.errors import ApiError, NotFoundError, ValidationError, ServiceError
from catalogo.utils.logger import logger

# --- Get Service Instance ---
def _get_produto_service() -> ProdutoService:
    service = current_app.config.get('produto_service')
    if not service:
        logger.critical("ProdutoService not found in application config!")
        raise ServiceError("Serviço de produtos indisponível.", 503)
    return service

# --- Query parameter helpers ---
def _int_param(nome: str) -> Optional[int]:
    valor = request.args.get(nome)
    if valor is None or valor == '':
        return None
    try:
        return int(valor)
    except ValueError:
        raise ValidationError(f"O parâmetro '{nome}' deve ser um número inteiro.") from None

def _float_param(nome: str) -> Optional[float]:
    valor = request.args.get(nome)
    if valor is None or valor == '':
        return None
    try:
        numero = float(valor)
    except ValueError:
        raise ValidationError(f"O parâmetro '{nome}' deve ser numérico.") from None
    if not math.isfinite(numero):
        raise ValidationError(f"O parâmetro '{nome}' deve ser numérico.")
    return numero

def _required(valor, nome: str):
    if valor is None:
        raise ValidationError(f"O parâmetro '{nome}' é obrigatório.")
    return valor

def _error_response(e: ApiError, contexto: str):
    if isinstance(e, (ValidationError, NotFoundError)):
        logger.warning(f"{contexto}: {e}")
    else:
        logger.error(f"{contexto}: {e}", exc_info=True)
    return jsonify(e.to_dict()), e.status_code

# --- Blueprint Definition ---
produtos_bp = Blueprint('produtos', __name__)

# --- CRUD ---

@produtos_bp.route('', methods=['GET'])
def listar_produtos():
    """
    Lists products with optional filter, sort and pagination.
    ---
    tags:
      - Produtos
    parameters:
      - {in: query, name: nome, type: string, description: Substring of the name, case-insensitive.}
      - {in: query, name: precoMinimo, type: number, description: Inclusive minimum price.}
      - {in: query, name: categoria, type: string, description: Tag; may repeat, matches any.}
      - {in: query, name: ordenarPor, type: string, description: "id, nome, preco or estoque (default nome)."}
      - {in: query, name: ordem, type: string, description: "asc (default) or desc."}
      - {in: query, name: pagina, type: integer, description: Zero-based page, used with tamanho.}
      - {in: query, name: tamanho, type: integer, description: Page size, used with pagina.}
    responses:
      200:
        description: Product list. X-Total-Count, X-Total-Pages, X-Page and X-Page-Size headers when paginated.
      400:
        description: Invalid query parameter.
    """
    try:
        nome = request.args.get('nome')
        preco_minimo = _float_param('precoMinimo')
        categorias = [c for c in request.args.getlist('categoria') if c]
        ordenar_por = request.args.get('ordenarPor', 'nome')
        ordem = request.args.get('ordem', 'asc')
        pagina = _int_param('pagina')
        tamanho = _int_param('tamanho')

        logger.debug(
            f"Listagem de produtos: nome={nome!r}, precoMinimo={preco_minimo}, categorias={categorias}, "
            f"ordenarPor={ordenar_por}, ordem={ordem}, pagina={pagina}, tamanho={tamanho}"
        )
        itens, pagina_info = _get_produto_service().buscar_produtos(
            nome=nome,
            preco_minimo=preco_minimo,
            categorias=categorias or None,
            ordenar_por=ordenar_por,
            ordem=ordem,
            pagina=pagina,
            tamanho=tamanho,
        )
        response = jsonify([p.to_dict() for p in itens])
        if pagina_info is not None:
            response.headers.update(pagina_info.to_headers())
        return response, 200

    except ApiError as e:
        return _error_response(e, "Falha ao listar produtos")
    except Exception as e:
        logger.error(f"Unexpected error listing products: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@produtos_bp.route('/<int:produto_id>', methods=['GET'])
def buscar_produto(produto_id: int):
    """Returns a single product by ID."""
    try:
        produto = _get_produto_service().buscar_por_id(produto_id)
        return jsonify(produto.to_dict()), 200
    except ApiError as e:
        return _error_response(e, f"Falha ao buscar produto ID {produto_id}")
    except Exception as e:
        logger.error(f"Unexpected error fetching product {produto_id}: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@produtos_bp.route('', methods=['POST'])
def criar_produto():
    """Creates a product. Any 'id' in the body is ignored."""
    try:
        dados = validar_payload(ProdutoCreate, request.get_json(silent=True))
        produto = _get_produto_service().criar(dados)
        return jsonify(produto.to_dict()), 201
    except ApiError as e:
        return _error_response(e, "Falha ao criar produto")
    except Exception as e:
        logger.error(f"Unexpected error creating product: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@produtos_bp.route('/<int:produto_id>', methods=['PUT'])
def atualizar_produto(produto_id: int):
    """Full update: nome, preco, estoque and categorias are replaced."""
    try:
        dados = validar_payload(ProdutoUpdate, request.get_json(silent=True))
        produto = _get_produto_service().atualizar(produto_id, dados)
        return jsonify(produto.to_dict()), 200
    except ApiError as e:
        return _error_response(e, f"Falha ao atualizar produto ID {produto_id}")
    except Exception as e:
        logger.error(f"Unexpected error updating product {produto_id}: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@produtos_bp.route('/<int:produto_id>', methods=['PATCH'])
def atualizar_produto_parcialmente(produto_id: int):
    """
    Partial update. Accepted fields: nome, preco, categorias.
    Any invalid field rejects the whole request and the product is left unchanged.
    """
    try:
        campos = request.get_json(silent=True)
        produto = _get_produto_service().atualizar_parcialmente(produto_id, campos)
        return jsonify(produto.to_dict()), 200
    except ApiError as e:
        return _error_response(e, f"Falha na atualização parcial do produto ID {produto_id}")
    except Exception as e:
        logger.error(f"Unexpected error patching product {produto_id}: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@produtos_bp.route('/<int:produto_id>', methods=['DELETE'])
def deletar_produto(produto_id: int):
    try:
        _get_produto_service().deletar(produto_id)
        return '', 204
    except ApiError as e:
        return _error_response(e, f"Falha ao remover produto ID {produto_id}")
    except Exception as e:
        logger.error(f"Unexpected error deleting product {produto_id}: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500

# --- Derived lookups ---

@produtos_bp.route('/busca/nome', methods=['GET'])
def buscar_por_nome():
    try:
        valor = _required(request.args.get('valor'), 'valor')
        produtos = _get_produto_service().buscar_por_nome(valor)
        return jsonify([p.to_dict() for p in produtos]), 200
    except ApiError as e:
        return _error_response(e, "Falha na busca de produtos por nome")
    except Exception as e:
        logger.error(f"Erro inesperado. Falha na busca de produtos por nome: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@produtos_bp.route('/busca/preco-maximo', methods=['GET'])
def buscar_por_preco_maximo():
    try:
        valor = _required(_float_param('valor'), 'valor')
        produtos = _get_produto_service().buscar_por_preco_maximo(valor)
        return jsonify([p.to_dict() for p in produtos]), 200
    except ApiError as e:
        return _error_response(e, "Falha na busca de produtos por preço máximo")
    except Exception as e:
        logger.error(f"Erro inesperado. Falha na busca de produtos por preço máximo: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@produtos_bp.route('/busca/estoque-minimo', methods=['GET'])
def buscar_por_estoque_minimo():
    try:
        valor = _required(_int_param('valor'), 'valor')
        produtos = _get_produto_service().buscar_por_estoque_minimo(valor)
        return jsonify([p.to_dict() for p in produtos]), 200
    except ApiError as e:
        return _error_response(e, "Falha na busca de produtos por estoque mínimo")
    except Exception as e:
        logger.error(f"Erro inesperado. Falha na busca de produtos por estoque mínimo: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500

# --- Relationships ---

@produtos_bp.route('/<int:produto_id>/fornecedores/<int:fornecedor_id>', methods=['POST'])
def adicionar_fornecedor(produto_id: int, fornecedor_id: int):
    try:
        produto = _get_produto_service().adicionar_fornecedor(produto_id, fornecedor_id)
        return jsonify(produto.to_dict()), 200
    except ApiError as e:
        return _error_response(e, f"Falha ao associar fornecedor {fornecedor_id} ao produto {produto_id}")
    except Exception as e:
        logger.error(f"Erro inesperado. Falha ao associar fornecedor {fornecedor_id} ao produto {produto_id}: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@produtos_bp.route('/<int:produto_id>/fornecedores/<int:fornecedor_id>', methods=['DELETE'])
def remover_fornecedor(produto_id: int, fornecedor_id: int):
    try:
        produto = _get_produto_service().remover_fornecedor(produto_id, fornecedor_id)
        return jsonify(produto.to_dict()), 200
    except ApiError as e:
        return _error_response(e, f"Falha ao desassociar fornecedor {fornecedor_id} do produto {produto_id}")
    except Exception as e:
        logger.error(f"Erro inesperado. Falha ao desassociar fornecedor {fornecedor_id} do produto {produto_id}: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@produtos_bp.route('/<int:produto_id>/detalhes', methods=['POST'])
def salvar_detalhe(produto_id: int):
    """Creates (201) or replaces (200) the product detail."""
    try:
        dados = validar_payload(ProdutoDetalheInput, request.get_json(silent=True))
        detalhe, criado = _get_produto_service().salvar_detalhe(produto_id, dados)
        return jsonify(detalhe.to_dict()), 201 if criado else 200
    except ApiError as e:
        return _error_response(e, f"Falha ao salvar detalhe do produto {produto_id}")
    except Exception as e:
        logger.error(f"Erro inesperado. Falha ao salvar detalhe do produto {produto_id}: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@produtos_bp.route('/categoria/<int:categoria_id>', methods=['GET'])
def listar_por_categoria(categoria_id: int):
    try:
        produtos = _get_produto_service().buscar_por_categoria(categoria_id)
        return jsonify([p.to_dict() for p in produtos]), 200
    except ApiError as e:
        return _error_response(e, f"Falha ao listar produtos da categoria {categoria_id}")
    except Exception as e:
        logger.error(f"Erro inesperado. Falha ao listar produtos da categoria {categoria_id}: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500


@produtos_bp.route('/fornecedor/<int:fornecedor_id>', methods=['GET'])
def listar_por_fornecedor(fornecedor_id: int):
    try:
        produtos = _get_produto_service().buscar_por_fornecedor(fornecedor_id)
        return jsonify([p.to_dict() for p in produtos]), 200
    except ApiError as e:
        return _error_response(e, f"Falha ao listar produtos do fornecedor {fornecedor_id}")
    except Exception as e:
        logger.error(f"Erro inesperado. Falha ao listar produtos do fornecedor {fornecedor_id}: {e}", exc_info=True)
        return jsonify({"error": "An unexpected error occurred."}), 500
