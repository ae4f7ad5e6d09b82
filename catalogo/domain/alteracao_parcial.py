# catalogo/domain/alteracao_parcial.py
# Enumeração explícita dos campos aceitos na atualização parcial (PATCH) de Produto.

from enum import Enum
from numbers import Real
from typing import Any, Dict, List, Tuple
import math

from catalogo.api.errors import CampoInvalidoError
from catalogo.domain.produto import Produto, NOME_MIN, NOME_MAX


class CampoProduto(str, Enum):
    """
    Campos de Produto que podem ser alterados parcialmente.
    NOME: texto não vazio com 3 a 50 caracteres
    PRECO: número maior ou igual a zero
    CATEGORIAS: lista de textos
    """

    NOME = "nome"
    PRECO = "preco"
    CATEGORIAS = "categorias"


Alteracao = Tuple[CampoProduto, Any]


def _validar_nome(valor: Any) -> str:
    if not isinstance(valor, str):
        raise CampoInvalidoError("nome", "O campo 'nome' deve ser uma String.")
    if not valor.strip():
        raise CampoInvalidoError("nome", "O nome não pode ser vazio.")
    if not NOME_MIN <= len(valor) <= NOME_MAX:
        raise CampoInvalidoError("nome", f"O nome deve ter entre {NOME_MIN} e {NOME_MAX} caracteres.")
    return valor


def _validar_preco(valor: Any) -> float:
    # bool é subclasse de int, mas não é um preço
    if isinstance(valor, bool) or not isinstance(valor, Real):
        raise CampoInvalidoError("preco", "O campo 'preco' deve ser numérico.")
    try:
        preco = float(valor)
    except OverflowError:
        raise CampoInvalidoError("preco", "O valor do campo 'preco' está fora do intervalo permitido.") from None
    if math.isnan(preco) or math.isinf(preco) or preco < 0:
        raise CampoInvalidoError("preco", "O preço deve ser maior ou igual a zero.")
    return preco


def _validar_categorias(valor: Any) -> List[str]:
    if not isinstance(valor, list) or not all(isinstance(c, str) for c in valor):
        raise CampoInvalidoError("categorias", "O campo 'categorias' deve ser uma lista de Strings.")
    return list(valor)


_VALIDADORES = {
    CampoProduto.NOME: _validar_nome,
    CampoProduto.PRECO: _validar_preco,
    CampoProduto.CATEGORIAS: _validar_categorias,
}


def validar_alteracoes(campos: Dict[str, Any]) -> List[Alteracao]:
    """
    Valida todos os campos recebidos antes de qualquer alteração.

    Args:
        campos: Mapa nome do campo -> novo valor, como recebido no corpo do PATCH.

    Returns:
        Lista de (CampoProduto, valor convertido) na ordem recebida.

    Raises:
        CampoInvalidoError: No primeiro campo desconhecido, nulo ou com tipo incorreto.
    """
    alteracoes: List[Alteracao] = []
    for chave, valor in campos.items():
        try:
            campo = CampoProduto(chave)
        except ValueError:
            raise CampoInvalidoError(chave, f"Campo inválido: {chave}") from None
        if valor is None:
            raise CampoInvalidoError(chave, f"O valor para o campo '{chave}' não pode ser nulo.")
        alteracoes.append((campo, _VALIDADORES[campo](valor)))
    return alteracoes


def aplicar_alteracoes(produto: Produto, alteracoes: List[Alteracao]) -> Produto:
    """Aplica alterações já validadas ao produto."""
    for campo, valor in alteracoes:
        if campo is CampoProduto.NOME:
            produto.nome = valor
        elif campo is CampoProduto.PRECO:
            produto.preco = valor
        elif campo is CampoProduto.CATEGORIAS:
            produto.categorias = valor
    return produto
