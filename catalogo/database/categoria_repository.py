# catalogo/database/categoria_repository.py
# Handles database operations for Categoria using SQLAlchemy ORM.

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .base_repository import BaseRepository
from catalogo.domain.categoria import Categoria
from catalogo.utils.logger import logger
from catalogo.api.errors import DatabaseError, ConflictError

class CategoriaRepository(BaseRepository):
    """
    Repositório de Categorias usando Sessões SQLAlchemy ORM.
    """

    def save(self, db: Session, categoria: Categoria) -> Categoria:
        logger.debug(f"ORM: Salvando categoria '{categoria.nome}'")
        try:
            db.add(categoria)
            db.flush()
            logger.info(f"ORM: Categoria ID {categoria.id} salva na sessão. Commit pendente.")
            return categoria
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"ORM: Categoria '{categoria.nome}' viola a restrição de nome único: {e}")
            raise ConflictError(f"Já existe uma categoria com o nome '{categoria.nome}'.") from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"ORM: Erro de banco de dados ao salvar categoria '{categoria.nome}': {e}", exc_info=True)
            raise DatabaseError(f"Falha ao salvar categoria: {e}") from e

    def find_by_id(self, db: Session, categoria_id: int) -> Optional[Categoria]:
        logger.debug(f"ORM: Buscando categoria pelo ID {categoria_id}")
        try:
            return db.get(Categoria, categoria_id)
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro de banco de dados ao buscar categoria pelo ID {categoria_id}: {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao buscar categoria pelo ID: {e}") from e

    def find_by_nome(self, db: Session, nome: str) -> Optional[Categoria]:
        """
        Busca uma categoria pelo nome exato, sem diferenciar maiúsculas.
        Comparação em Python (casefold): o lower() do SQLite só converte ASCII.
        """
        logger.debug(f"ORM: Buscando categoria pelo nome '{nome}'")
        alvo = nome.strip().casefold()
        try:
            for categoria in db.scalars(select(Categoria).order_by(Categoria.id)):
                if categoria.nome.casefold() == alvo:
                    return categoria
            return None
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro de banco de dados ao buscar categoria pelo nome '{nome}': {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao buscar categoria pelo nome: {e}") from e

    def find_all(self, db: Session) -> List[Categoria]:
        logger.debug("ORM: Recuperando todas as categorias")
        try:
            return list(db.scalars(select(Categoria).order_by(Categoria.nome)).all())
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro de banco de dados ao recuperar categorias: {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao recuperar categorias: {e}") from e

    def delete_by_id(self, db: Session, categoria_id: int) -> bool:
        """Remove a categoria; produtos associados ficam sem categoria."""
        logger.debug(f"ORM: Removendo categoria ID {categoria_id}")
        try:
            categoria = db.get(Categoria, categoria_id)
            if not categoria:
                logger.warning(f"ORM: Tentativa de remover categoria ID {categoria_id}, mas ela não foi encontrada.")
                return False
            db.delete(categoria)
            db.flush()
            logger.info(f"ORM: Categoria ID {categoria_id} marcada para remoção. Commit pendente.")
            return True
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"ORM: Erro de banco de dados ao remover categoria ID {categoria_id}: {e}", exc_info=True)
            raise DatabaseError(f"Falha ao remover categoria: {e}") from e
