# catalogo/services/categoria_service.py
# Business logic for product categories using ORM sessions.

from typing import List
from sqlalchemy.exc import SQLAlchemyError

from catalogo.database import get_db_session
from catalogo.database.categoria_repository import CategoriaRepository
from catalogo.domain.categoria import Categoria
from catalogo.domain.schemas import CategoriaCreate
from catalogo.utils.logger import logger
from catalogo.api.errors import NotFoundError, ServiceError, ConflictError, DatabaseError

class CategoriaService:
    """
    Camada de serviço para categorias usando ORM Sessions.
    """

    def __init__(self, categoria_repository: CategoriaRepository):
        self.categoria_repository = categoria_repository
        logger.info("CategoriaService inicializado (ORM).")

    def listar(self) -> List[Categoria]:
        try:
            with get_db_session(read_only=True) as db:
                return self.categoria_repository.find_all(db)
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao listar categorias: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível listar as categorias: {e}") from e

    def buscar_por_id(self, categoria_id: int) -> Categoria:
        try:
            with get_db_session(read_only=True) as db:
                categoria = self.categoria_repository.find_by_id(db, categoria_id)
            if categoria is None:
                raise NotFoundError(f"Categoria não encontrada com o ID: {categoria_id}")
            return categoria
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao buscar categoria ID {categoria_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível buscar a categoria: {e}") from e

    def criar(self, dados: CategoriaCreate) -> Categoria:
        """Cria uma categoria. Nomes são únicos sem diferenciar maiúsculas."""
        nome = dados.nome.strip()
        logger.info(f"Criando categoria '{nome}'.")
        try:
            with get_db_session() as db:
                if self.categoria_repository.find_by_nome(db, nome) is not None:
                    logger.warning(f"Categoria '{nome}' já existe.")
                    raise ConflictError(f"Já existe uma categoria com o nome '{nome}'.")
                categoria = self.categoria_repository.save(db, Categoria(nome=nome))
            logger.info(f"Categoria (ID: {categoria.id}) criada com sucesso.")
            return categoria
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao criar categoria '{nome}': {e}", exc_info=True)
            raise ServiceError(f"Não foi possível criar a categoria: {e}") from e

    def deletar(self, categoria_id: int) -> None:
        """Remove a categoria; os produtos associados ficam sem categoria."""
        logger.info(f"Removendo categoria ID {categoria_id}.")
        try:
            with get_db_session() as db:
                if not self.categoria_repository.delete_by_id(db, categoria_id):
                    raise NotFoundError(f"Categoria não encontrada com o ID: {categoria_id}")
        except (DatabaseError, SQLAlchemyError) as e:
            logger.error(f"Falha ao remover categoria ID {categoria_id}: {e}", exc_info=True)
            raise ServiceError(f"Não foi possível remover a categoria: {e}") from e
