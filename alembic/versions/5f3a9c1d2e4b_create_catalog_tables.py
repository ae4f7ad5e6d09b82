# alembic/versions/5f3a9c1d2e4b_create_catalog_tables.py
"""Create catalog tables (categorias, fornecedores, produtos, produto_detalhes, produto_fornecedor)

Revision ID: 5f3a9c1d2e4b
Revises:
Create Date: 2026-10-19 10:12:44.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5f3a9c1d2e4b'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'categorias',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nome', sa.String(length=50), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_categorias')),
        sa.UniqueConstraint('nome', name=op.f('uq_categorias_nome')),
    )
    op.create_table(
        'fornecedores',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nome', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=True),
        sa.Column('telefone', sa.String(length=30), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_fornecedores')),
    )
    op.create_index(op.f('ix_fornecedores_nome'), 'fornecedores', ['nome'], unique=False)

    op.create_table(
        'produtos',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('nome', sa.String(length=50), nullable=False),
        sa.Column('preco', sa.Float(), nullable=False),
        sa.Column('estoque', sa.Integer(), nullable=False),
        sa.Column('categorias', sa.JSON(), nullable=False),
        sa.Column('categoria_id', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ['categoria_id'], ['categorias.id'],
            name=op.f('fk_produtos_categoria_id_categorias'), ondelete='SET NULL',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_produtos')),
    )
    op.create_index(op.f('ix_produtos_nome'), 'produtos', ['nome'], unique=False)
    op.create_index(op.f('ix_produtos_categoria_id'), 'produtos', ['categoria_id'], unique=False)

    op.create_table(
        'produto_detalhes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('produto_id', sa.Integer(), nullable=False),
        sa.Column('descricao', sa.String(length=500), nullable=True),
        sa.Column('fabricante', sa.String(length=100), nullable=True),
        sa.Column('garantia_meses', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(
            ['produto_id'], ['produtos.id'],
            name=op.f('fk_produto_detalhes_produto_id_produtos'), ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_produto_detalhes')),
    )
    op.create_index(op.f('ix_produto_detalhes_produto_id'), 'produto_detalhes', ['produto_id'], unique=True)

    op.create_table(
        'produto_fornecedor',
        sa.Column('produto_id', sa.Integer(), nullable=False),
        sa.Column('fornecedor_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ['fornecedor_id'], ['fornecedores.id'],
            name=op.f('fk_produto_fornecedor_fornecedor_id_fornecedores'), ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['produto_id'], ['produtos.id'],
            name=op.f('fk_produto_fornecedor_produto_id_produtos'), ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('produto_id', 'fornecedor_id', name=op.f('pk_produto_fornecedor')),
    )


def downgrade() -> None:
    op.drop_table('produto_fornecedor')
    op.drop_index(op.f('ix_produto_detalhes_produto_id'), table_name='produto_detalhes')
    op.drop_table('produto_detalhes')
    op.drop_index(op.f('ix_produtos_categoria_id'), table_name='produtos')
    op.drop_index(op.f('ix_produtos_nome'), table_name='produtos')
    op.drop_table('produtos')
    op.drop_index(op.f('ix_fornecedores_nome'), table_name='fornecedores')
    op.drop_table('fornecedores')
    op.drop_table('categorias')
