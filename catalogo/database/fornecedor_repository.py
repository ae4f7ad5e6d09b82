# catalogo/database/fornecedor_repository.py
# Handles database operations for Fornecedor using SQLAlchemy ORM.

from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from .base_repository import BaseRepository
from catalogo.domain.fornecedor import Fornecedor
from catalogo.utils.logger import logger
from catalogo.api.errors import DatabaseError

class FornecedorRepository(BaseRepository):
    """
    Repositório de Fornecedores usando Sessões SQLAlchemy ORM.
    """

    def save(self, db: Session, fornecedor: Fornecedor) -> Fornecedor:
        logger.debug(f"ORM: Salvando fornecedor '{fornecedor.nome}'")
        try:
            db.add(fornecedor)
            db.flush()
            logger.info(f"ORM: Fornecedor ID {fornecedor.id} salvo na sessão. Commit pendente.")
            return fornecedor
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"ORM: Erro de banco de dados ao salvar fornecedor '{fornecedor.nome}': {e}", exc_info=True)
            raise DatabaseError(f"Falha ao salvar fornecedor: {e}") from e

    def find_by_id(self, db: Session, fornecedor_id: int) -> Optional[Fornecedor]:
        logger.debug(f"ORM: Buscando fornecedor pelo ID {fornecedor_id}")
        try:
            return db.get(Fornecedor, fornecedor_id)
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro de banco de dados ao buscar fornecedor pelo ID {fornecedor_id}: {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao buscar fornecedor pelo ID: {e}") from e

    def find_all(self, db: Session) -> List[Fornecedor]:
        logger.debug("ORM: Recuperando todos os fornecedores")
        try:
            return list(db.scalars(select(Fornecedor).order_by(Fornecedor.id)).all())
        except SQLAlchemyError as e:
            logger.error(f"ORM: Erro de banco de dados ao recuperar fornecedores: {e}", exc_info=True)
            raise DatabaseError(f"Erro de banco de dados ao recuperar fornecedores: {e}") from e

    def delete_by_id(self, db: Session, fornecedor_id: int) -> bool:
        """Remove o fornecedor e seus vínculos com produtos."""
        logger.debug(f"ORM: Removendo fornecedor ID {fornecedor_id}")
        try:
            fornecedor = db.get(Fornecedor, fornecedor_id)
            if not fornecedor:
                logger.warning(f"ORM: Tentativa de remover fornecedor ID {fornecedor_id}, mas ele não foi encontrado.")
                return False
            db.delete(fornecedor)
            db.flush()
            logger.info(f"ORM: Fornecedor ID {fornecedor_id} marcado para remoção. Commit pendente.")
            return True
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"ORM: Erro de banco de dados ao remover fornecedor ID {fornecedor_id}: {e}", exc_info=True)
            raise DatabaseError(f"Falha ao remover fornecedor: {e}") from e
