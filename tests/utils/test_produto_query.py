"""Tests for the listing pipeline: filter, sort and paginate. No database involved."""

import pytest

from catalogo.domain import Produto
from catalogo.utils.produto_query import (
    Pagina,
    filtrar_produtos,
    ordenar_produtos,
    paginar_produtos,
)


def _produto(id, nome, preco=10.0, estoque=1, categorias=None):
    return Produto(id=id, nome=nome, preco=preco, estoque=estoque, categorias=list(categorias or []))


@pytest.fixture
def produtos():
    return [
        _produto(1, "iPhone 14", 7999.0, 50, ["Eletrônicos", "Smartphones"]),
        _produto(2, "Samsung Galaxy S23", 6999.0, 30, ["Eletrônicos", "Smartphones"]),
        _produto(3, "Notebook Dell Inspiron", 4999.0, 20, ["Eletrônicos", "Computadores"]),
        _produto(4, "Cadeira Gamer", 1299.0, 5, ["Móveis"]),
        _produto(5, "Mouse sem fio", 99.9, 200, []),
    ]


def _ids(produtos):
    return [p.id for p in produtos]


class TestFiltrarProdutos:

    def test_sem_criterios_retorna_todos_na_mesma_ordem(self, produtos):
        assert _ids(filtrar_produtos(produtos)) == [1, 2, 3, 4, 5]

    def test_lista_de_categorias_vazia_nao_restringe(self, produtos):
        assert _ids(filtrar_produtos(produtos, categorias=[])) == [1, 2, 3, 4, 5]

    def test_nome_contem_sem_diferenciar_maiusculas(self, produtos):
        assert _ids(filtrar_produtos(produtos, nome="SAMSUNG")) == [2]
        assert _ids(filtrar_produtos(produtos, nome="o")) == [1, 3, 5]

    def test_preco_minimo_inclusivo(self, produtos):
        assert _ids(filtrar_produtos(produtos, preco_minimo=6999.0)) == [1, 2]

    def test_categorias_aceita_qualquer_uma(self, produtos):
        resultado = filtrar_produtos(produtos, categorias=["móveis", "COMPUTADORES"])
        assert _ids(resultado) == [3, 4]

    def test_criterios_combinados_com_e(self, produtos):
        resultado = filtrar_produtos(produtos, nome="s", preco_minimo=5000, categorias=["smartphones"])
        assert _ids(resultado) == [2]

    def test_produto_sem_categorias_nao_passa_filtro_de_categoria(self, produtos):
        assert 5 not in _ids(filtrar_produtos(produtos, categorias=["Eletrônicos"]))


class TestOrdenarProdutos:

    def test_ordena_por_preco_asc_e_desc(self, produtos):
        assert _ids(ordenar_produtos(produtos, "preco", "asc")) == [5, 4, 3, 2, 1]
        assert _ids(ordenar_produtos(produtos, "preco", "desc")) == [1, 2, 3, 4, 5]

    def test_ordena_por_nome_sem_diferenciar_maiusculas(self):
        lista = [_produto(1, "banana"), _produto(2, "Abacate"), _produto(3, "cereja")]
        assert _ids(ordenar_produtos(lista, "nome")) == [2, 1, 3]

    def test_ordem_case_insensitive(self, produtos):
        assert _ids(ordenar_produtos(produtos, "estoque", "DESC")) == [5, 1, 2, 3, 4]

    def test_empates_mantem_ordem_de_entrada_nas_duas_direcoes(self):
        lista = [
            _produto(1, "A", preco=10.0),
            _produto(2, "B", preco=5.0),
            _produto(3, "C", preco=10.0),
            _produto(4, "D", preco=5.0),
        ]
        assert _ids(ordenar_produtos(lista, "preco", "asc")) == [2, 4, 1, 3]
        assert _ids(ordenar_produtos(lista, "preco", "desc")) == [1, 3, 2, 4]

    def test_chave_desconhecida_mantem_ordem(self, produtos):
        assert _ids(ordenar_produtos(list(reversed(produtos)), "fabricante")) == [5, 4, 3, 2, 1]

    def test_aliases_em_ingles(self, produtos):
        assert _ids(ordenar_produtos(produtos, "price")) == _ids(ordenar_produtos(produtos, "preco"))

    def test_nao_altera_a_lista_original(self, produtos):
        ordenar_produtos(produtos, "preco")
        assert _ids(produtos) == [1, 2, 3, 4, 5]


class TestPaginarProdutos:

    def test_cinco_itens_tamanho_dois(self, produtos):
        assert _ids(paginar_produtos(produtos, 0, 2).itens) == [1, 2]
        assert _ids(paginar_produtos(produtos, 2, 2).itens) == [5]

        alem_do_fim = paginar_produtos(produtos, 3, 2)
        assert alem_do_fim.itens == []
        assert alem_do_fim.total_paginas == 3
        assert alem_do_fim.total_registros == 5

    def test_lista_vazia(self):
        pagina = paginar_produtos([], 0, 10)
        assert pagina.itens == []
        assert pagina.total_paginas == 0

    def test_cabecalhos(self, produtos):
        headers = paginar_produtos(produtos, 1, 2).to_headers()
        assert headers == {
            "X-Total-Count": "5",
            "X-Total-Pages": "3",
            "X-Page": "1",
            "X-Page-Size": "2",
        }

    @pytest.mark.parametrize("pagina,tamanho", [(-1, 2), (0, 0), (0, -3)])
    def test_parametros_invalidos(self, produtos, pagina, tamanho):
        with pytest.raises(ValueError):
            paginar_produtos(produtos, pagina, tamanho)

    def test_pagina_padrao(self):
        assert Pagina().to_headers()["X-Total-Count"] == "0"
