# catalogo/services/__init__.py
# Makes 'services' a package. Exports service classes.

from .produto_service import ProdutoService
from .categoria_service import CategoriaService
from .fornecedor_service import FornecedorService

# Instances are created in the app factory and stored in app.config.

__all__ = [
    "ProdutoService",
    "CategoriaService",
    "FornecedorService",
]
