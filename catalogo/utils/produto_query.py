# catalogo/utils/produto_query.py
# Filtro, ordenação e paginação de listas de produtos a partir dos parâmetros da listagem.

import math
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Sequence, Callable, TYPE_CHECKING
from .logger import logger

if TYPE_CHECKING:
    from catalogo.domain.produto import Produto

HEADER_TOTAL_COUNT = "X-Total-Count"
HEADER_TOTAL_PAGES = "X-Total-Pages"
HEADER_PAGE = "X-Page"
HEADER_PAGE_SIZE = "X-Page-Size"

ORDEM_ASC = "asc"
ORDEM_DESC = "desc"

# Chave de ordenação -> função que extrai o valor comparável
_CHAVES_ORDENACAO: Dict[str, Callable[['Produto'], Any]] = {
    "id": lambda p: p.id,
    "nome": lambda p: p.nome.lower(),
    "preco": lambda p: p.preco,
    "estoque": lambda p: p.estoque,
}
_ALIASES_ORDENACAO = {"name": "nome", "price": "preco", "stock": "estoque"}


@dataclass
class Pagina:
    """Fatia de uma lista paginada e os totais que vão nos cabeçalhos da resposta."""
    itens: List['Produto'] = field(default_factory=list)
    total_registros: int = 0
    total_paginas: int = 0
    pagina: int = 0
    tamanho: int = 0

    def to_headers(self) -> Dict[str, str]:
        return {
            HEADER_TOTAL_COUNT: str(self.total_registros),
            HEADER_TOTAL_PAGES: str(self.total_paginas),
            HEADER_PAGE: str(self.pagina),
            HEADER_PAGE_SIZE: str(self.tamanho),
        }


def filtrar_produtos(
    produtos: Sequence['Produto'],
    nome: Optional[str] = None,
    preco_minimo: Optional[float] = None,
    categorias: Optional[Sequence[str]] = None,
) -> List['Produto']:
    """
    Filtra produtos por nome (contém, sem diferenciar maiúsculas), preço mínimo (inclusivo)
    e categorias (qualquer uma das informadas, sem diferenciar maiúsculas).
    Critérios ausentes não restringem o resultado.
    """
    nome_lower = nome.lower() if nome is not None else None
    categorias_lower = {c.lower() for c in categorias} if categorias else None

    def _aceita(produto: 'Produto') -> bool:
        if nome_lower is not None and nome_lower not in produto.nome.lower():
            return False
        if preco_minimo is not None and produto.preco < preco_minimo:
            return False
        if categorias_lower is not None and not any(
            c.lower() in categorias_lower for c in (produto.categorias or [])
        ):
            return False
        return True

    filtrados = [p for p in produtos if _aceita(p)]
    logger.debug(
        f"Filtro de produtos (nome={nome!r}, preco_minimo={preco_minimo}, categorias={categorias}): "
        f"{len(filtrados)} de {len(produtos)} itens."
    )
    return filtrados


def ordenar_produtos(produtos: Sequence['Produto'], ordenar_por: Optional[str], ordem: Optional[str] = ORDEM_ASC) -> List['Produto']:
    """
    Retorna uma nova lista ordenada pelo campo informado.

    Chaves desconhecidas mantêm a ordem original. A ordenação é estável nas duas
    direções: em 'desc' a comparação é invertida, e itens com a mesma chave
    continuam na ordem de entrada.
    """
    chave = _ALIASES_ORDENACAO.get(ordenar_por, ordenar_por) if ordenar_por else None
    extrator = _CHAVES_ORDENACAO.get(chave) if chave else None
    if extrator is None:
        logger.debug(f"Chave de ordenação não reconhecida: {ordenar_por!r}. Ordem original mantida.")
        return list(produtos)

    decrescente = (ordem or ORDEM_ASC).lower() == ORDEM_DESC
    return sorted(produtos, key=extrator, reverse=decrescente)


def paginar_produtos(produtos: Sequence['Produto'], pagina: int, tamanho: int) -> Pagina:
    """
    Recorta a página `pagina` (base zero) de tamanho `tamanho`.
    Páginas além do fim retornam lista vazia, mantendo os totais.
    """
    if pagina < 0:
        raise ValueError("O número da página deve ser maior ou igual a zero.")
    if tamanho < 1:
        raise ValueError("O tamanho da página deve ser maior que zero.")

    total_registros = len(produtos)
    total_paginas = math.ceil(total_registros / tamanho)
    inicio = pagina * tamanho
    fim = min(inicio + tamanho, total_registros)

    itens = list(produtos[inicio:fim]) if inicio < total_registros else []
    return Pagina(
        itens=itens,
        total_registros=total_registros,
        total_paginas=total_paginas,
        pagina=pagina,
        tamanho=tamanho,
    )
