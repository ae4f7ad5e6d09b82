# catalogo/database/produto_repository.py
# Handles database operations for Produto using SQLAlchemy ORM.

from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .base_repository import BaseRepository
from catalogo.domain.produto import Produto
from catalogo.domain.fornecedor import Fornecedor
from catalogo.utils.logger import logger
from catalogo.utils.produto_query import filtrar_produtos
from catalogo.api.errors import DatabaseError

class ProdutoRepository(BaseRepository):
    """
    Repositório de Produtos usando Sessões SQLAlchemy ORM.
    Os métodos esperam que um objeto Session seja passado; commit é externo.
    Buscas por ID retornam None quando o produto não existe.
    """

    def save(self, db: Session, produto: Produto) -> Produto:
        """Insere ou atualiza um produto. O ID é atribuído pelo banco no primeiro save."""
        novo = produto.id is None
        logger.debug(f"ORM: {'Inserindo' if novo else 'Atualizando'} produto '{produto.nome}'")
        try:
            db.add(produto)
            db.flush() # Para obter o ID gerado
            logger.info(f"ORM: Produto ID {produto.id} {'adicionado' if novo else 'atualizado'} na sessão. Commit pendente.")
            return produto
        except IntegrityError as e:
            db.rollback()
            logger.error(f"ORM: Erro de integridade ao salvar produto '{produto.nome}': {e}", exc_info=True)
            raise DatabaseError(f"Falha ao salvar produto por restrição de integridade: {e}") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"ORM: Erro de banco de dados ao salvar produto '{produto.nome}': {e}", exc_info=True)
            raise DatabaseError(f"Falha ao salvar produto: {e}") from e

    def find_by_id(self, db: Session, produto_id: int) -> Optional[Produto]:
        """Busca um produto pelo ID."""
        logger.debug(f"ORM: Buscando produto pelo ID {produto_id}")
        try:
            produto = db.get(Produto, produto_id)
            if not produto:
                logger.debug(f"ORM: Produto não encontrado pelo ID {produto_id}.")
            return produto
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro de banco de dados ao buscar produto pelo ID {produto_id}: {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao buscar produto pelo ID: {e}") from e

    def find_all(self, db: Session) -> List[Produto]:
        """Recupera todos os produtos (na ordem de inserção)."""
        logger.debug("ORM: Recuperando todos os produtos")
        try:
            produtos = db.scalars(select(Produto).order_by(Produto.id)).all()
            logger.debug(f"ORM: Recuperados {len(produtos)} produtos.")
            return list(produtos)
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro de banco de dados ao recuperar produtos: {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao recuperar produtos: {e}") from e

    def delete_by_id(self, db: Session, produto_id: int) -> bool:
        """Remove um produto pelo ID. Retorna False se ele não existir."""
        logger.debug(f"ORM: Removendo produto ID {produto_id}")
        try:
            produto = db.get(Produto, produto_id)
            if not produto:
                logger.warning(f"ORM: Tentativa de remover produto ID {produto_id}, mas ele não foi encontrado.")
                return False
            db.delete(produto)
            db.flush()
            logger.info(f"ORM: Produto ID {produto_id} marcado para remoção. Commit pendente.")
            return True
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"ORM: Erro de banco de dados ao remover produto ID {produto_id}: {e}", exc_info=True)
            raise DatabaseError(f"Falha ao remover produto: {e}") from e

    # --- Consultas derivadas ---

    def find_by_nome_containing(self, db: Session, nome: str) -> List[Produto]:
        """
        Produtos cujo nome contém o texto informado (sem diferenciar maiúsculas).
        A comparação é feita em Python, como no filtro da listagem: o lower() do
        SQLite só converte letras ASCII.
        """
        logger.debug(f"ORM: Buscando produtos com nome contendo '{nome}'")
        try:
            produtos = db.scalars(select(Produto).order_by(Produto.id)).all()
            return filtrar_produtos(produtos, nome=nome)
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro ao buscar produtos por nome '{nome}': {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao buscar produtos por nome: {e}") from e

    def find_by_preco_less_than_equal(self, db: Session, preco: float) -> List[Produto]:
        """Produtos com preço menor ou igual ao informado."""
        logger.debug(f"ORM: Buscando produtos com preço <= {preco}")
        try:
            stmt = select(Produto).where(Produto.preco <= preco).order_by(Produto.id)
            return list(db.scalars(stmt).all())
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro ao buscar produtos por preço máximo {preco}: {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao buscar produtos por preço: {e}") from e

    def find_by_estoque_greater_than(self, db: Session, estoque: int) -> List[Produto]:
        """Produtos com estoque estritamente maior que o informado."""
        logger.debug(f"ORM: Buscando produtos com estoque > {estoque}")
        try:
            stmt = select(Produto).where(Produto.estoque > estoque).order_by(Produto.id)
            return list(db.scalars(stmt).all())
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro ao buscar produtos por estoque mínimo {estoque}: {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao buscar produtos por estoque: {e}") from e

    def find_by_categoria_id(self, db: Session, categoria_id: int) -> List[Produto]:
        """Produtos associados à entidade Categoria informada."""
        logger.debug(f"ORM: Buscando produtos da categoria ID {categoria_id}")
        try:
            stmt = select(Produto).where(Produto.categoria_id == categoria_id).order_by(Produto.id)
            return list(db.scalars(stmt).all())
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro ao buscar produtos da categoria ID {categoria_id}: {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao buscar produtos por categoria: {e}") from e

    def find_by_fornecedor_id(self, db: Session, fornecedor_id: int) -> List[Produto]:
        """Produtos fornecidos pelo fornecedor informado."""
        logger.debug(f"ORM: Buscando produtos do fornecedor ID {fornecedor_id}")
        try:
            stmt = (
                select(Produto)
                .join(Produto.fornecedores)
                .where(Fornecedor.id == fornecedor_id)
                .order_by(Produto.id)
            )
            return list(db.scalars(stmt).unique().all())
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro ao buscar produtos do fornecedor ID {fornecedor_id}: {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao buscar produtos por fornecedor: {e}") from e

    def count(self, db: Session) -> int:
        """Total de produtos cadastrados."""
        try:
            return db.scalar(select(func.count(Produto.id))) or 0
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro ao contar produtos: {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao contar produtos: {e}") from e
