# catalogo/database/schema_manager.py
# Gerencia a criação inicial das tabelas do banco de dados e os dados de exemplo.

from sqlalchemy import select, func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .base import Base
import catalogo.domain  # Registra os modelos ORM em Base.metadata
from catalogo.domain.categoria import Categoria
from catalogo.domain.produto import Produto
from catalogo.utils.logger import logger
from catalogo.api.errors import DatabaseError

# (nome, preço, estoque, tags, nome da categoria)
PRODUTOS_INICIAIS = [
    ("iPhone 14", 7999.0, 50, ["Eletrônicos", "Smartphones"], "Smartphones"),
    ("Samsung Galaxy S23", 6999.0, 30, ["Eletrônicos", "Smartphones"], "Smartphones"),
    ("Notebook Dell Inspiron", 4999.0, 20, ["Eletrônicos", "Computadores"], "Notebooks"),
]

class SchemaManager:
    def __init__(self, engine: Engine):
        self.engine = engine
        logger.debug("SchemaManager inicializado com o engine do SQLAlchemy.")

    def initialize_schema(self, seed_data: bool = False):
        try:
            logger.info("Iniciando a criação do esquema do banco de dados...")
            Base.metadata.create_all(bind=self.engine)
            logger.info("Tabelas criadas/verificadas com sucesso.")

            if seed_data:
                self._seed_initial_data()

            logger.info("Esquema do banco de dados inicializado com sucesso.")

        except SQLAlchemyError as e:
            logger.critical(f"Falha na inicialização do esquema do banco de dados: {e}", exc_info=True)
            raise DatabaseError(f"Falha na inicialização do esquema: {e}") from e

    def _seed_initial_data(self):
        """Insere categorias e produtos de exemplo se ainda não houver produtos."""
        with Session(self.engine) as session, session.begin():
            total = session.scalar(select(func.count(Produto.id))) or 0
            if total:
                logger.debug(f"Banco já possui {total} produtos. Dados de exemplo não serão inseridos.")
                return

            logger.info("Banco sem produtos. Inserindo dados de exemplo...")
            categorias = {}
            for nome, preco, estoque, tags, nome_categoria in PRODUTOS_INICIAIS:
                if nome_categoria not in categorias:
                    categoria = session.scalars(
                        select(Categoria).where(Categoria.nome == nome_categoria)
                    ).first()
                    categorias[nome_categoria] = categoria or Categoria(nome=nome_categoria)
                session.add(Produto(
                    nome=nome,
                    preco=preco,
                    estoque=estoque,
                    categorias=list(tags),
                    categoria=categorias[nome_categoria],
                ))
            logger.info(f"{len(PRODUTOS_INICIAIS)} produtos de exemplo inseridos.")
