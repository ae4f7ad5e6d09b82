# catalogo/domain/fornecedor.py
# Define o modelo ORM de Fornecedor.

from typing import Optional, List, Dict, Any, TYPE_CHECKING
from sqlalchemy import Integer, String
from sqlalchemy.orm import relationship, Mapped, mapped_column

from catalogo.database.base import Base

if TYPE_CHECKING:
    from .produto import Produto

class Fornecedor(Base):
    """
    Representa um fornecedor como modelo ORM (muitos-para-muitos com Produto).
    """
    __tablename__ = 'fornecedores'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    nome: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    email: Mapped[Optional[str]] = mapped_column(String(254))
    telefone: Mapped[Optional[str]] = mapped_column(String(30))

    produtos: Mapped[List["Produto"]] = relationship(
        secondary="produto_fornecedor",
        back_populates="fornecedores",
        lazy="select",
    )

    def to_dict(self) -> Dict[str, Any]:
        """Converte o objeto Fornecedor para um dicionário."""
        return {
            'id': self.id,
            'nome': self.nome,
            'email': self.email,
            'telefone': self.telefone,
        }

    def __repr__(self):
        return f"<Fornecedor(id={self.id}, nome='{self.nome}')>"
