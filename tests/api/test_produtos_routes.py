"""HTTP tests for /api/produtos: CRUD, listing headers and error bodies."""

import pytest


def _post(client, nome, preco=100.0, estoque=10, categorias=None, **extra):
    body = {"nome": nome, "preco": preco, "estoque": estoque, "categorias": categorias or [], **extra}
    response = client.post("/api/produtos", json=body)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


@pytest.fixture
def produtos(client):
    return [
        _post(client, "iPhone 14", 7999.0, 50, ["Eletrônicos", "Smartphones"]),
        _post(client, "Samsung Galaxy S23", 6999.0, 30, ["Eletrônicos", "Smartphones"]),
        _post(client, "Notebook Dell Inspiron", 4999.0, 20, ["Eletrônicos", "Computadores"]),
        _post(client, "Cadeira Gamer", 1299.0, 5, ["Móveis"]),
        _post(client, "Mouse sem fio", 99.9, 200),
    ]


class TestCriar:

    def test_retorna_201_com_id(self, client):
        body = _post(client, "Monitor 27", 1500, 3, ["Eletrônicos"], id=999)
        assert body["id"] != 999
        assert body["categorias"] == ["Eletrônicos"]
        assert body["categoria"] is None
        assert body["fornecedores"] == []

    @pytest.mark.parametrize("body", [
        {"nome": "TV", "preco": 10, "estoque": 1},
        {"nome": "Televisão", "preco": -5, "estoque": 1},
        {"nome": "", "preco": 10, "estoque": 1},
    ])
    def test_validacao_retorna_400_e_nao_persiste(self, client, body):
        response = client.post("/api/produtos", json=body)
        assert response.status_code == 400
        assert response.get_json()["detalhes"]
        assert client.get("/api/produtos").get_json() == []

    def test_corpo_invalido(self, client):
        response = client.post("/api/produtos", data="nao-e-json", content_type="application/json")
        assert response.status_code == 400


class TestListar:

    def test_ordem_padrao_por_nome(self, client, produtos):
        nomes = [p["nome"] for p in client.get("/api/produtos").get_json()]
        assert nomes == sorted(nomes, key=str.lower)

    def test_sem_paginacao_nao_envia_cabecalhos(self, client, produtos):
        response = client.get("/api/produtos")
        assert "X-Total-Count" not in response.headers

    def test_filtros_combinados(self, client, produtos):
        response = client.get("/api/produtos", query_string={
            "categoria": ["smartphones", "MÓVEIS"],
            "precoMinimo": "1299",
        })
        nomes = {p["nome"] for p in response.get_json()}
        assert nomes == {"iPhone 14", "Samsung Galaxy S23", "Cadeira Gamer"}

    def test_filtro_por_nome(self, client, produtos):
        response = client.get("/api/produtos?nome=NOTEBOOK")
        assert [p["nome"] for p in response.get_json()] == ["Notebook Dell Inspiron"]

    def test_ordenacao_por_preco_desc(self, client, produtos):
        response = client.get("/api/produtos?ordenarPor=preco&ordem=desc")
        precos = [p["preco"] for p in response.get_json()]
        assert precos == [7999.0, 6999.0, 4999.0, 1299.0, 99.9]

    def test_paginacao_com_cabecalhos(self, client, produtos):
        response = client.get("/api/produtos?ordenarPor=id&pagina=2&tamanho=2")
        assert response.status_code == 200
        assert [p["nome"] for p in response.get_json()] == ["Mouse sem fio"]
        assert response.headers["X-Total-Count"] == "5"
        assert response.headers["X-Total-Pages"] == "3"
        assert response.headers["X-Page"] == "2"
        assert response.headers["X-Page-Size"] == "2"

    def test_pagina_alem_do_fim(self, client, produtos):
        response = client.get("/api/produtos?pagina=3&tamanho=2")
        assert response.get_json() == []
        assert response.headers["X-Total-Pages"] == "3"

    @pytest.mark.parametrize("query", [
        "pagina=-1&tamanho=2",
        "pagina=0&tamanho=0",
        "pagina=abc&tamanho=2",
        "precoMinimo=barato",
    ])
    def test_parametros_invalidos(self, client, produtos, query):
        response = client.get(f"/api/produtos?{query}")
        assert response.status_code == 400
        assert "error" in response.get_json()


class TestBuscarAtualizarRemover:

    def test_buscar_por_id(self, client, produtos):
        alvo = produtos[1]
        response = client.get(f"/api/produtos/{alvo['id']}")
        assert response.status_code == 200
        assert response.get_json()["nome"] == "Samsung Galaxy S23"

    def test_buscar_inexistente(self, client):
        response = client.get("/api/produtos/999")
        assert response.status_code == 404
        assert "999" in response.get_json()["error"]

    def test_put(self, client, produtos):
        alvo = produtos[0]
        response = client.put(f"/api/produtos/{alvo['id']}", json={
            "id": 12345, "nome": "iPhone 15", "preco": 8999, "estoque": 7, "categorias": ["Apple"],
        })
        assert response.status_code == 200
        body = response.get_json()
        assert body["id"] == alvo["id"]
        assert (body["nome"], body["preco"], body["estoque"], body["categorias"]) == ("iPhone 15", 8999.0, 7, ["Apple"])

    def test_put_invalido(self, client, produtos):
        response = client.put(f"/api/produtos/{produtos[0]['id']}", json={"nome": "iPhone", "preco": -1, "estoque": 1})
        assert response.status_code == 400

    def test_put_inexistente(self, client):
        response = client.put("/api/produtos/999", json={"nome": "Qualquer", "preco": 1, "estoque": 1})
        assert response.status_code == 404

    def test_patch(self, client, produtos):
        alvo = produtos[3]
        response = client.patch(f"/api/produtos/{alvo['id']}", json={"preco": 999.0, "categorias": ["Escritório"]})
        assert response.status_code == 200
        body = response.get_json()
        assert body["preco"] == 999.0
        assert body["categorias"] == ["Escritório"]
        assert body["nome"] == "Cadeira Gamer"

    @pytest.mark.parametrize("body,campo", [
        ({"cor": "azul"}, "cor"),
        ({"nome": None}, "nome"),
        ({"preco": "caro"}, "preco"),
        ({"nome": "Cadeira Nova", "estoque": 1}, "estoque"),
    ])
    def test_patch_invalido_nao_altera(self, client, produtos, body, campo):
        alvo = produtos[3]
        response = client.patch(f"/api/produtos/{alvo['id']}", json=body)
        assert response.status_code == 400
        assert response.get_json()["campo"] == campo
        assert client.get(f"/api/produtos/{alvo['id']}").get_json() == alvo

    def test_patch_preco_fora_do_intervalo(self, client, produtos):
        alvo = produtos[0]
        response = client.patch(
            f"/api/produtos/{alvo['id']}",
            data="{\"preco\": 1" + "0" * 400 + "}",
            content_type="application/json",
        )
        assert response.status_code == 400
        assert response.get_json()["campo"] == "preco"
        assert client.get(f"/api/produtos/{alvo['id']}").get_json() == alvo

    def test_patch_inexistente(self, client):
        response = client.patch("/api/produtos/999", json={"nome": "Outro nome"})
        assert response.status_code == 404

    def test_delete(self, client, produtos):
        alvo = produtos[4]
        response = client.delete(f"/api/produtos/{alvo['id']}")
        assert response.status_code == 204
        assert response.data == b""
        assert client.get(f"/api/produtos/{alvo['id']}").status_code == 404

    def test_delete_inexistente(self, client):
        assert client.delete("/api/produtos/999").status_code == 404


class TestConsultasDerivadas:

    def test_busca_por_nome(self, client, produtos):
        response = client.get("/api/produtos/busca/nome?valor=galaxy")
        assert [p["nome"] for p in response.get_json()] == ["Samsung Galaxy S23"]

    def test_busca_por_preco_maximo(self, client, produtos):
        response = client.get("/api/produtos/busca/preco-maximo?valor=1299")
        assert [p["nome"] for p in response.get_json()] == ["Cadeira Gamer", "Mouse sem fio"]

    def test_busca_por_estoque_minimo(self, client, produtos):
        response = client.get("/api/produtos/busca/estoque-minimo?valor=30")
        assert [p["nome"] for p in response.get_json()] == ["iPhone 14", "Mouse sem fio"]

    @pytest.mark.parametrize("url", [
        "/api/produtos/busca/nome",
        "/api/produtos/busca/preco-maximo?valor=abc",
        "/api/produtos/busca/estoque-minimo?valor=1.5",
    ])
    def test_valor_obrigatorio_e_tipado(self, client, url):
        assert client.get(url).status_code == 400


class TestInfra:

    def test_health(self, client, produtos):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.get_json()
        assert body["database"] == "ok"
        assert body["produtos"] == 5

    def test_rota_desconhecida_retorna_json(self, client):
        response = client.get("/api/nao-existe")
        assert response.status_code == 404
        assert "error" in response.get_json()

    def test_cors_expoe_cabecalhos_de_paginacao(self, client, produtos):
        response = client.get("/api/produtos?pagina=0&tamanho=2", headers={"Origin": "http://localhost:3000"})
        exposed = response.headers.get("Access-Control-Expose-Headers", "")
        assert "X-Total-Count" in exposed


class TestErrosInesperados:

    @pytest.mark.parametrize("metodo,url", [
        ("buscar_por_nome", "/api/produtos/busca/nome?valor=x"),
        ("buscar_por_preco_maximo", "/api/produtos/busca/preco-maximo?valor=10"),
        ("buscar_por_estoque_minimo", "/api/produtos/busca/estoque-minimo?valor=1"),
        ("buscar_por_categoria", "/api/produtos/categoria/1"),
        ("buscar_por_fornecedor", "/api/produtos/fornecedor/1"),
    ])
    def test_retornam_500_em_json(self, client, produto_service, monkeypatch, metodo, url):
        def falha(*args, **kwargs):
            raise RuntimeError("falha simulada")

        monkeypatch.setattr(produto_service, metodo, falha)
        response = client.get(url)
        assert response.status_code == 500
        assert response.get_json() == {"error": "An unexpected error occurred."}
