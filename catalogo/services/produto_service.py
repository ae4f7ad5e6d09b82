# catalogo/services/produto_service.py
# Contains business logic for the product catalog using ORM sessions.

from typing import List, Dict, Any, Optional, Sequence, Tuple
from sqlalchemy.exc import SQLAlchemyError

from catalogo.database import get_db_session
from catalogo.database.produto_repository import ProdutoRepository
from catalogo.database.categoria_repository import CategoriaRepository
from catalogo.database.fornecedor_repository import FornecedorRepository
from catalogo.domain.produto import Produto
from catalogo.domain.produto_detalhe import ProdutoDetalhe
from catalogo.domain.categoria import Categoria
from catalogo.domain.schemas import ProdutoCreate, ProdutoUpdate, ProdutoDetalheInput
from catalogo.domain.alteracao_parcial import validar_alteracoes, aplicar_alteracoes
from catalogo.utils.produto_query import Pagina, filtrar_produtos, ordenar_produtos, paginar_produtos
from catalogo.utils.logger import logger
from catalogo.api.errors import NotFoundError, ServiceError, ValidationError, DatabaseError

class ProdutoService:
    """
    Camada de serviço do catálogo de produtos.

    Cada método abre sua própria sessão: somente leitura para consultas,
    leitura e escrita (com commit) para alterações.
    """

    def __init__(self, produto_repository: ProdutoRepository,
                 categoria_repository: CategoriaRepository,
                 fornecedor_repository: FornecedorRepository):
        self.produto_repository = produto_repository
        self.categoria_repository = categoria_repository
        self.fornecedor_repository = fornecedor_repository
        logger.info("ProdutoService inicializado (ORM).")

    # --- Helpers ---

    def _obter_produto(self, db, produto_id: int) -> Produto:
        produto = self.produto_repository.find_by_id(db, produto_id)
        if produto is None:
            logger.warning(f"Produto não encontrado com o ID: {produto_id}")
            raise NotFoundError(f"Produto não encontrado com o ID: {produto_id}")
        return produto

    def _obter_categoria(self, db, categoria_id: int) -> Categoria:
        categoria = self.categoria_repository.find_by_id(db, categoria_id)
        if categoria is None:
            logger.warning(f"Categoria não encontrada com o ID: {categoria_id}")
            raise NotFoundError(f"Categoria não encontrada com o ID: {categoria_id}")
        return categoria

    def _obter_fornecedor(self, db, fornecedor_id: int):
        fornecedor = self.fornecedor_repository.find_by_id(db, fornecedor_id)
        if fornecedor is None:
            logger.warning(f"Fornecedor não encontrado com o ID: {fornecedor_id}")
            raise NotFoundError(f"Fornecedor não encontrado com o ID: {fornecedor_id}")
        return fornecedor

    # --- Consultas ---

    def listar_todos(self) -> List[Produto]:
        """Recupera todos os produtos cadastrados."""
        try:
            with get_db_session(read_only=True) as db:
                produtos = self.produto_repository.find_all(db)
            logger.debug(f"Encontrados {len(produtos)} produtos.")
            return produtos
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao listar produtos: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível listar os produtos: {e}") from e

    def buscar_produtos(
        self,
        nome: Optional[str] = None,
        preco_minimo: Optional[float] = None,
        categorias: Optional[Sequence[str]] = None,
        ordenar_por: Optional[str] = "nome",
        ordem: Optional[str] = "asc",
        pagina: Optional[int] = None,
        tamanho: Optional[int] = None,
    ) -> Tuple[List[Produto], Optional[Pagina]]:
        """
        Filtra, ordena e (opcionalmente) pagina a lista de produtos.

        Argumentos:
            nome: Texto contido no nome (sem diferenciar maiúsculas).
            preco_minimo: Preço mínimo, inclusivo.
            categorias: Tags aceitas; basta o produto ter uma delas.
            ordenar_por: 'id', 'nome', 'preco' ou 'estoque'. Outros valores mantêm a ordem.
            ordem: 'asc' ou 'desc'.
            pagina, tamanho: Paginação, aplicada somente quando ambos são informados.

        Retorna:
            (itens, pagina) onde `pagina` é None quando não houve paginação.

        Gera:
            ValidationError: Se a página for negativa ou o tamanho menor que 1.
        """
        if pagina is not None and tamanho is not None:
            if pagina < 0:
                raise ValidationError("O parâmetro 'pagina' deve ser maior ou igual a zero.")
            if tamanho < 1:
                raise ValidationError("O parâmetro 'tamanho' deve ser maior que zero.")

        produtos = self.listar_todos()
        produtos = filtrar_produtos(produtos, nome=nome, preco_minimo=preco_minimo, categorias=categorias)
        produtos = ordenar_produtos(produtos, ordenar_por, ordem)

        if pagina is None or tamanho is None:
            return produtos, None

        resultado = paginar_produtos(produtos, pagina, tamanho)
        logger.debug(f"Página {pagina} (tamanho {tamanho}): {len(resultado.itens)} de {resultado.total_registros} produtos.")
        return resultado.itens, resultado

    def buscar_por_id(self, produto_id: int) -> Produto:
        """Busca um produto pelo ID. Gera NotFoundError se ele não existir."""
        try:
            with get_db_session(read_only=True) as db:
                return self._obter_produto(db, produto_id)
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao buscar produto ID {produto_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível buscar o produto: {e}") from e

    def buscar_por_nome(self, nome: str) -> List[Produto]:
        return self._consulta_derivada("nome", lambda db: self.produto_repository.find_by_nome_containing(db, nome))

    def buscar_por_preco_maximo(self, preco: float) -> List[Produto]:
        return self._consulta_derivada("preço máximo", lambda db: self.produto_repository.find_by_preco_less_than_equal(db, preco))

    def buscar_por_estoque_minimo(self, estoque: int) -> List[Produto]:
        return self._consulta_derivada("estoque mínimo", lambda db: self.produto_repository.find_by_estoque_greater_than(db, estoque))

    def _consulta_derivada(self, descricao: str, consulta) -> List[Produto]:
        try:
            with get_db_session(read_only=True) as db:
                produtos = consulta(db)
            logger.debug(f"Consulta por {descricao}: {len(produtos)} produtos.")
            return produtos
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha na consulta de produtos por {descricao}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível consultar produtos por {descricao}: {e}") from e

    def buscar_por_categoria(self, categoria_id: int) -> List[Produto]:
        """Produtos associados à categoria. Gera NotFoundError se a categoria não existir."""
        try:
            with get_db_session(read_only=True) as db:
                self._obter_categoria(db, categoria_id)
                return self.produto_repository.find_by_categoria_id(db, categoria_id)
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao buscar produtos da categoria ID {categoria_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível buscar produtos da categoria: {e}") from e

    def buscar_por_fornecedor(self, fornecedor_id: int) -> List[Produto]:
        """Produtos do fornecedor. Gera NotFoundError se o fornecedor não existir."""
        try:
            with get_db_session(read_only=True) as db:
                self._obter_fornecedor(db, fornecedor_id)
                return self.produto_repository.find_by_fornecedor_id(db, fornecedor_id)
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao buscar produtos do fornecedor ID {fornecedor_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível buscar produtos do fornecedor: {e}") from e

    # --- Alterações ---

    def criar(self, dados: ProdutoCreate) -> Produto:
        """Cria um produto; o ID é atribuído pelo banco."""
        logger.info(f"Criando produto '{dados.nome}'.")
        try:
            with get_db_session() as db:
                categoria = self._obter_categoria(db, dados.categoria_id) if dados.categoria_id is not None else None
                produto = Produto(
                    nome=dados.nome,
                    preco=dados.preco,
                    estoque=dados.estoque,
                    categorias=list(dados.categorias),
                    categoria=categoria,
                    fornecedores=[],
                    detalhe=None,
                )
                criado = self.produto_repository.save(db, produto)
            logger.info(f"Produto (ID: {criado.id}) criado com sucesso.")
            return criado
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao criar produto '{dados.nome}': {e}", exc_info=True)
            raise ServiceError(f"Não foi possível criar o produto: {e}") from e

    def atualizar(self, produto_id: int, dados: ProdutoUpdate) -> Produto:
        """
        Atualização completa: substitui nome, preço, estoque e categorias.
        A categoria (entidade) só é alterada quando 'categoria_id' vem no corpo.
        """
        logger.info(f"Atualizando produto ID {produto_id}.")
        try:
            with get_db_session() as db:
                produto = self._obter_produto(db, produto_id)
                if "categoria_id" in dados.model_fields_set:
                    produto.categoria = (
                        self._obter_categoria(db, dados.categoria_id) if dados.categoria_id is not None else None
                    )
                produto.nome = dados.nome
                produto.preco = dados.preco
                produto.estoque = dados.estoque
                produto.categorias = list(dados.categorias)
                atualizado = self.produto_repository.save(db, produto)
            logger.info(f"Produto ID {produto_id} atualizado com sucesso.")
            return atualizado
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao atualizar produto ID {produto_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível atualizar o produto: {e}") from e

    def atualizar_parcialmente(self, produto_id: int, campos: Dict[str, Any]) -> Produto:
        """
        Atualiza somente os campos informados ('nome', 'preco', 'categorias').

        Todos os campos são validados antes de qualquer alteração: um campo
        desconhecido, nulo ou de tipo incorreto gera CampoInvalidoError e o
        produto permanece como estava.
        """
        if not isinstance(campos, dict):
            raise ValidationError("O corpo da requisição deve ser um objeto JSON.")

        logger.info(f"Atualização parcial do produto ID {produto_id}: campos {list(campos.keys())}.")
        try:
            with get_db_session() as db:
                produto = self._obter_produto(db, produto_id)
                alteracoes = validar_alteracoes(campos)
                aplicar_alteracoes(produto, alteracoes)
                atualizado = self.produto_repository.save(db, produto)
            logger.info(f"Produto ID {produto_id} atualizado parcialmente.")
            return atualizado
        except ValidationError as e:
            logger.warning(f"Atualização parcial do produto ID {produto_id} rejeitada: {e}")
            raise
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha na atualização parcial do produto ID {produto_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível atualizar o produto: {e}") from e

    def deletar(self, produto_id: int) -> None:
        """Remove o produto. Gera NotFoundError se ele não existir."""
        logger.info(f"Removendo produto ID {produto_id}.")
        try:
            with get_db_session() as db:
                removido = self.produto_repository.delete_by_id(db, produto_id)
                if not removido:
                    raise NotFoundError(f"Produto não encontrado com o ID: {produto_id}")
            logger.info(f"Produto ID {produto_id} removido.")
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao remover produto ID {produto_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível remover o produto: {e}") from e

    # --- Relacionamentos ---

    def adicionar_fornecedor(self, produto_id: int, fornecedor_id: int) -> Produto:
        """Associa o fornecedor ao produto (sem duplicar a associação)."""
        try:
            with get_db_session() as db:
                produto = self._obter_produto(db, produto_id)
                fornecedor = self._obter_fornecedor(db, fornecedor_id)
                if fornecedor not in produto.fornecedores:
                    produto.fornecedores.append(fornecedor)
                    logger.info(f"Fornecedor ID {fornecedor_id} associado ao produto ID {produto_id}.")
                else:
                    logger.debug(f"Fornecedor ID {fornecedor_id} já estava associado ao produto ID {produto_id}.")
                return self.produto_repository.save(db, produto)
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao associar fornecedor {fornecedor_id} ao produto {produto_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível associar o fornecedor: {e}") from e

    def remover_fornecedor(self, produto_id: int, fornecedor_id: int) -> Produto:
        """Remove a associação. Gera NotFoundError se ela não existir."""
        try:
            with get_db_session() as db:
                produto = self._obter_produto(db, produto_id)
                fornecedor = self._obter_fornecedor(db, fornecedor_id)
                if fornecedor not in produto.fornecedores:
                    raise NotFoundError(
                        f"Fornecedor {fornecedor_id} não está associado ao produto {produto_id}."
                    )
                produto.fornecedores.remove(fornecedor)
                logger.info(f"Fornecedor ID {fornecedor_id} desassociado do produto ID {produto_id}.")
                return self.produto_repository.save(db, produto)
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao desassociar fornecedor {fornecedor_id} do produto {produto_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível desassociar o fornecedor: {e}") from e

    def salvar_detalhe(self, produto_id: int, dados: ProdutoDetalheInput) -> Tuple[ProdutoDetalhe, bool]:
        """
        Cria ou substitui o detalhe do produto.

        Retorna:
            (detalhe, criado) onde `criado` indica se o detalhe não existia.
        """
        try:
            with get_db_session() as db:
                produto = self._obter_produto(db, produto_id)
                criado = produto.detalhe is None
                if criado:
                    produto.detalhe = ProdutoDetalhe(**dados.model_dump())
                else:
                    for campo, valor in dados.model_dump().items():
                        setattr(produto.detalhe, campo, valor)
                self.produto_repository.save(db, produto)
                detalhe = produto.detalhe
            logger.info(f"Detalhe do produto ID {produto_id} {'criado' if criado else 'substituído'}.")
            return detalhe, criado
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao salvar detalhe do produto ID {produto_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível salvar o detalhe do produto: {e}") from e
