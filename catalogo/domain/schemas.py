# catalogo/domain/schemas.py
# Modelos de entrada (pydantic) com as restrições declarativas dos payloads da API.

from typing import Annotated, Optional, List, Dict, Any, Type, TypeVar
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from catalogo.api.errors import ValidationError
from catalogo.domain.produto import NOME_MIN, NOME_MAX

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _nao_vazio(value: str) -> str:
    if not value.strip():
        raise ValueError("não pode ser vazio")
    return value


TextoNaoVazio = Annotated[str, AfterValidator(_nao_vazio)]


class ProdutoCreate(BaseModel):
    """
    Campos para criar um produto. `id` enviado pelo cliente é ignorado.
    """

    nome: TextoNaoVazio = Field(min_length=NOME_MIN, max_length=NOME_MAX)
    preco: float = Field(ge=0, allow_inf_nan=False)
    estoque: int = Field(ge=0)
    categorias: List[str] = Field(default_factory=list)
    categoria_id: Optional[int] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("categorias", mode="before")
    @classmethod
    def _categorias_nulas(cls, value):
        return [] if value is None else value


class ProdutoUpdate(ProdutoCreate):
    """
    Atualização completa: nome, preço, estoque e categorias são substituídos.
    """


class ProdutoDetalheInput(BaseModel):
    descricao: Optional[str] = Field(default=None, max_length=500)
    fabricante: Optional[str] = Field(default=None, max_length=100)
    garantia_meses: Optional[int] = Field(default=None, ge=0)

    model_config = ConfigDict(extra="forbid")


class CategoriaCreate(BaseModel):
    nome: TextoNaoVazio = Field(min_length=2, max_length=50)

    model_config = ConfigDict(extra="ignore")


class FornecedorCreate(BaseModel):
    nome: TextoNaoVazio = Field(min_length=2, max_length=100)
    email: Optional[str] = Field(default=None, max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    telefone: Optional[str] = Field(default=None, max_length=30)

    model_config = ConfigDict(extra="ignore")


def _detalhes_erro(exc: PydanticValidationError) -> List[Dict[str, Any]]:
    detalhes = []
    for err in exc.errors():
        campo = ".".join(str(p) for p in err.get("loc", ())) or "__root__"
        detalhes.append({"campo": campo, "mensagem": err.get("msg")})
    return detalhes


def validar_payload(schema: Type[SchemaT], data: Any) -> SchemaT:
    """
    Valida um payload JSON contra o schema informado.

    Raises:
        ValidationError: com a lista de erros por campo no payload 'detalhes'.
    """
    if not isinstance(data, dict):
        raise ValidationError("O corpo da requisição deve ser um objeto JSON.")
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError("Falha na validação dos dados enviados.", payload={"detalhes": _detalhes_erro(e)}) from e
