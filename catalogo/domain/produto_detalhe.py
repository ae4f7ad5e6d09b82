# catalogo/domain/produto_detalhe.py
# Define o modelo ORM de ProdutoDetalhe (extensão um-para-um de Produto).

from typing import Optional, Dict, Any, TYPE_CHECKING
from sqlalchemy import Integer, String, ForeignKey
from sqlalchemy.orm import relationship, Mapped, mapped_column

from catalogo.database.base import Base

if TYPE_CHECKING:
    from .produto import Produto

class ProdutoDetalhe(Base):
    __tablename__ = 'produto_detalhes'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    produto_id: Mapped[int] = mapped_column(ForeignKey('produtos.id', ondelete='CASCADE'), unique=True, nullable=False, index=True)
    descricao: Mapped[Optional[str]] = mapped_column(String(500))
    fabricante: Mapped[Optional[str]] = mapped_column(String(100))
    garantia_meses: Mapped[Optional[int]] = mapped_column(Integer)

    produto: Mapped["Produto"] = relationship(back_populates="detalhe")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'produto_id': self.produto_id,
            'descricao': self.descricao,
            'fabricante': self.fabricante,
            'garantia_meses': self.garantia_meses,
        }

    def __repr__(self):
        return f"<ProdutoDetalhe(id={self.id}, produto_id={self.produto_id})>"
