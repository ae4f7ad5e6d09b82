"""HTTP tests for categories, suppliers and product relationships."""

import pytest


@pytest.fixture
def produto(client):
    response = client.post("/api/produtos", json={"nome": "Notebook Dell Inspiron", "preco": 4999.0, "estoque": 20})
    return response.get_json()


@pytest.fixture
def categoria(client):
    return client.post("/api/categorias", json={"nome": "Notebooks"}).get_json()


@pytest.fixture
def fornecedor(client):
    response = client.post("/api/fornecedores", json={
        "nome": "Distribuidora Sul", "email": "contato@dsul.com.br", "telefone": "+55 51 3333-0000",
    })
    return response.get_json()


class TestCategorias:

    def test_criar_listar_buscar(self, client, categoria):
        assert categoria["nome"] == "Notebooks"
        assert client.get("/api/categorias").get_json() == [categoria]
        assert client.get(f"/api/categorias/{categoria['id']}").get_json() == categoria

    def test_nome_duplicado_retorna_409(self, client, categoria):
        response = client.post("/api/categorias", json={"nome": "notebooks"})
        assert response.status_code == 409

    @pytest.mark.parametrize("repetido", ["Áudio", "ÁUDIO", "áudio"])
    def test_nome_acentuado_duplicado_retorna_409(self, client, repetido):
        assert client.post("/api/categorias", json={"nome": "Áudio"}).status_code == 201
        response = client.post("/api/categorias", json={"nome": repetido})
        assert response.status_code == 409
        assert repetido in response.get_json()["error"]
        assert len(client.get("/api/categorias").get_json()) == 1

    def test_nome_invalido(self, client):
        assert client.post("/api/categorias", json={"nome": " "}).status_code == 400

    def test_inexistente(self, client):
        assert client.get("/api/categorias/999").status_code == 404
        assert client.delete("/api/categorias/999").status_code == 404

    def test_produto_com_categoria(self, client, categoria):
        response = client.post("/api/produtos", json={
            "nome": "Notebook Lenovo", "preco": 3999, "estoque": 4, "categoria_id": categoria["id"],
        })
        assert response.status_code == 201
        assert response.get_json()["categoria"] == categoria

        listagem = client.get(f"/api/produtos/categoria/{categoria['id']}").get_json()
        assert [p["nome"] for p in listagem] == ["Notebook Lenovo"]

    def test_produto_com_categoria_inexistente(self, client):
        response = client.post("/api/produtos", json={
            "nome": "Notebook Lenovo", "preco": 3999, "estoque": 4, "categoria_id": 999,
        })
        assert response.status_code == 404

    def test_listar_por_categoria_inexistente(self, client):
        assert client.get("/api/produtos/categoria/999").status_code == 404

    def test_remover_categoria(self, client, categoria):
        criado = client.post("/api/produtos", json={
            "nome": "Notebook Lenovo", "preco": 3999, "estoque": 4, "categoria_id": categoria["id"],
        }).get_json()
        assert client.delete(f"/api/categorias/{categoria['id']}").status_code == 204
        assert client.get(f"/api/produtos/{criado['id']}").get_json()["categoria"] is None

    def test_put_troca_categoria(self, client, produto, categoria):
        response = client.put(f"/api/produtos/{produto['id']}", json={
            "nome": produto["nome"], "preco": 4500, "estoque": 20, "categoria_id": categoria["id"],
        })
        assert response.status_code == 200
        assert response.get_json()["categoria"] == categoria


class TestFornecedores:

    def test_criar_listar_buscar(self, client, fornecedor):
        assert fornecedor["email"] == "contato@dsul.com.br"
        assert client.get("/api/fornecedores").get_json() == [fornecedor]
        assert client.get(f"/api/fornecedores/{fornecedor['id']}").get_json() == fornecedor

    def test_email_invalido(self, client):
        response = client.post("/api/fornecedores", json={"nome": "ACME", "email": "acme"})
        assert response.status_code == 400
        assert response.get_json()["detalhes"][0]["campo"] == "email"

    def test_associar_e_desassociar(self, client, produto, fornecedor):
        url = f"/api/produtos/{produto['id']}/fornecedores/{fornecedor['id']}"

        response = client.post(url)
        assert response.status_code == 200
        assert response.get_json()["fornecedores"] == [fornecedor]

        listagem = client.get(f"/api/produtos/fornecedor/{fornecedor['id']}").get_json()
        assert [p["id"] for p in listagem] == [produto["id"]]

        response = client.delete(url)
        assert response.status_code == 200
        assert response.get_json()["fornecedores"] == []
        assert client.delete(url).status_code == 404

    def test_associar_com_ids_inexistentes(self, client, produto, fornecedor):
        assert client.post(f"/api/produtos/999/fornecedores/{fornecedor['id']}").status_code == 404
        assert client.post(f"/api/produtos/{produto['id']}/fornecedores/999").status_code == 404

    def test_remover_fornecedor_desvincula_produtos(self, client, produto, fornecedor):
        client.post(f"/api/produtos/{produto['id']}/fornecedores/{fornecedor['id']}")
        assert client.delete(f"/api/fornecedores/{fornecedor['id']}").status_code == 204
        assert client.get(f"/api/produtos/{produto['id']}").get_json()["fornecedores"] == []
        assert client.get(f"/api/fornecedores/{fornecedor['id']}").status_code == 404


class TestDetalhes:

    def test_criar_e_substituir(self, client, produto):
        url = f"/api/produtos/{produto['id']}/detalhes"

        response = client.post(url, json={"descricao": "Notebook 15 polegadas", "fabricante": "Dell", "garantia_meses": 12})
        assert response.status_code == 201
        detalhe = response.get_json()
        assert detalhe["produto_id"] == produto["id"]

        response = client.post(url, json={"fabricante": "Dell Inc.", "garantia_meses": 24})
        assert response.status_code == 200
        assert response.get_json()["id"] == detalhe["id"]

        atual = client.get(f"/api/produtos/{produto['id']}").get_json()["detalhe"]
        assert atual["fabricante"] == "Dell Inc."
        assert atual["descricao"] is None

    def test_produto_inexistente(self, client):
        assert client.post("/api/produtos/999/detalhes", json={"fabricante": "Dell"}).status_code == 404

    def test_payload_invalido(self, client, produto):
        response = client.post(f"/api/produtos/{produto['id']}/detalhes", json={"garantia_meses": -3})
        assert response.status_code == 400
