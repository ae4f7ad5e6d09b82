# catalogo/utils/__init__.py
# Makes 'utils' a package. Exports utility functions/classes.

from .logger import logger
from .produto_query import Pagina, filtrar_produtos, ordenar_produtos, paginar_produtos

__all__ = [
    "logger",
    "Pagina",
    "filtrar_produtos",
    "ordenar_produtos",
    "paginar_produtos",
]
