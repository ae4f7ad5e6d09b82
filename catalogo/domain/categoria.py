# catalogo/domain/categoria.py
# Define o modelo ORM de Categoria.

from typing import List, Dict, Any, TYPE_CHECKING
from sqlalchemy import Integer, String
from sqlalchemy.orm import relationship, Mapped, mapped_column

from catalogo.database.base import Base

if TYPE_CHECKING:
    from .produto import Produto

class Categoria(Base):
    """
    Representa uma categoria de produtos como modelo ORM.
    """
    __tablename__ = 'categorias'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    nome: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    produtos: Mapped[List["Produto"]] = relationship(back_populates="categoria", lazy="select")

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'nome': self.nome}

    def __repr__(self):
        return f"<Categoria(id={self.id}, nome='{self.nome}')>"
