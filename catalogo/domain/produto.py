# catalogo/domain/produto.py
# Define o modelo ORM de Produto e a tabela de associação com Fornecedor.

from typing import Optional, List, Dict, Any, TYPE_CHECKING
from sqlalchemy import Column, Integer, String, Float, ForeignKey, JSON, Table
from sqlalchemy.orm import relationship, Mapped, mapped_column

from catalogo.database.base import Base

if TYPE_CHECKING:
    from .categoria import Categoria
    from .fornecedor import Fornecedor
    from .produto_detalhe import ProdutoDetalhe

NOME_MIN = 3
NOME_MAX = 50

produto_fornecedor = Table(
    'produto_fornecedor',
    Base.metadata,
    Column('produto_id', ForeignKey('produtos.id', ondelete='CASCADE'), primary_key=True),
    Column('fornecedor_id', ForeignKey('fornecedores.id', ondelete='CASCADE'), primary_key=True),
)

class Produto(Base):
    """
    Item do catálogo como modelo ORM.

    `categorias` é a lista ordenada de tags livres usada nos filtros de listagem;
    `categoria` é a referência opcional à entidade Categoria.
    """
    __tablename__ = 'produtos'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    nome: Mapped[str] = mapped_column(String(NOME_MAX), nullable=False, index=True)
    preco: Mapped[float] = mapped_column(Float, nullable=False)
    estoque: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    categorias: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    categoria_id: Mapped[Optional[int]] = mapped_column(ForeignKey('categorias.id', ondelete='SET NULL'), index=True)

    categoria: Mapped[Optional["Categoria"]] = relationship(back_populates="produtos", lazy="selectin")
    fornecedores: Mapped[List["Fornecedor"]] = relationship(
        secondary=produto_fornecedor,
        back_populates="produtos",
        lazy="selectin",
        order_by="Fornecedor.id",
    )
    detalhe: Mapped[Optional["ProdutoDetalhe"]] = relationship(
        back_populates="produto",
        cascade="all, delete-orphan",
        uselist=False,
        lazy="selectin",
    )

    def to_dict(self) -> Dict[str, Any]:
        """Converte o objeto Produto para um dicionário."""
        return {
            'id': self.id,
            'nome': self.nome,
            'preco': self.preco,
            'estoque': self.estoque,
            'categorias': list(self.categorias or []),
            'categoria': self.categoria.to_dict() if self.categoria else None,
            'fornecedores': [f.to_dict() for f in self.fornecedores],
            'detalhe': self.detalhe.to_dict() if self.detalhe else None,
        }

    def __repr__(self):
        return f"<Produto(id={self.id}, nome='{self.nome}', preco={self.preco}, estoque={self.estoque})>"
