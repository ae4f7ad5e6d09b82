# catalogo/domain/__init__.py
# Makes 'domain' a package. Exports ORM models and input schemas.

# --- ORM Models ---
from .categoria import Categoria
from .fornecedor import Fornecedor
from .produto_detalhe import ProdutoDetalhe
from .produto import Produto, produto_fornecedor

# --- Input schemas / partial update ---
from .schemas import (
    ProdutoCreate, ProdutoUpdate, ProdutoDetalheInput,
    CategoriaCreate, FornecedorCreate, validar_payload
)
from .alteracao_parcial import CampoProduto, validar_alteracoes, aplicar_alteracoes

__all__ = [
    # ORM Models
    "Produto", "produto_fornecedor",
    "Categoria",
    "Fornecedor",
    "ProdutoDetalhe",

    # Schemas
    "ProdutoCreate", "ProdutoUpdate", "ProdutoDetalheInput",
    "CategoriaCreate", "FornecedorCreate", "validar_payload",

    # Partial update
    "CampoProduto", "validar_alteracoes", "aplicar_alteracoes",
]
