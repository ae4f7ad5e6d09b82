# catalogo/services/fornecedor_service.py
# Business logic for suppliers using ORM sessions.

from typing import List
from sqlalchemy.exc import SQLAlchemyError

from catalogo.database import get_db_session
from catalogo.database.fornecedor_repository import FornecedorRepository
from catalogo.domain.fornecedor import Fornecedor
from catalogo.domain.schemas import FornecedorCreate
from catalogo.utils.logger import logger
from catalogo.api.errors import NotFoundError, ServiceError, DatabaseError

class FornecedorService:
    """
    Camada de serviço para fornecedores usando ORM Sessions.
    """

    def __init__(self, fornecedor_repository: FornecedorRepository):
        self.fornecedor_repository = fornecedor_repository
        logger.info("FornecedorService inicializado (ORM).")

    def listar(self) -> List[Fornecedor]:
        try:
            with get_db_session(read_only=True) as db:
                return self.fornecedor_repository.find_all(db)
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao listar fornecedores: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível listar os fornecedores: {e}") from e

    def buscar_por_id(self, fornecedor_id: int) -> Fornecedor:
        try:
            with get_db_session(read_only=True) as db:
                fornecedor = self.fornecedor_repository.find_by_id(db, fornecedor_id)
            if fornecedor is None:
                raise NotFoundError(f"Fornecedor não encontrado com o ID: {fornecedor_id}")
            return fornecedor
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao buscar fornecedor ID {fornecedor_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível buscar o fornecedor: {e}") from e

    def criar(self, dados: FornecedorCreate) -> Fornecedor:
        logger.info(f"Criando fornecedor '{dados.nome}'.")
        fornecedor = Fornecedor(nome=dados.nome.strip(), email=dados.email, telefone=dados.telefone)
        try:
            with get_db_session() as db:
                criado = self.fornecedor_repository.save(db, fornecedor)
            logger.info(f"Fornecedor (ID: {criado.id}) criado com sucesso.")
            return criado
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao criar fornecedor '{dados.nome}': {e}", exc_info=True)
            raise ServiceError(f"Não foi possível criar o fornecedor: {e}") from e

    def deletar(self, fornecedor_id: int) -> None:
        """Remove o fornecedor e seus vínculos com produtos."""
        logger.info(f"Removendo fornecedor ID {fornecedor_id}.")
        try:
            with get_db_session() as db:
                if not self.fornecedor_repository.delete_by_id(db, fornecedor_id):
                    raise NotFoundError(f"Fornecedor não encontrado com o ID: {fornecedor_id}")
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao remover fornecedor ID {fornecedor_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível remover o fornecedor: {e}") from e
