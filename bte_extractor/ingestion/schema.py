"""
Schema de validação do documento BTE processado.

Define as regras que os dados extraídos devem obedecer. Se o JSON gerado
pelo parser não respeitar este formato, o documento é rejeitado
(pydantic.ValidationError) e não chega à persistência.
"""

from typing import Literal, Optional

from pydantic import AnyHttpUrl, BaseModel, Field

from ..extraction.models import DocumentRecord


class BteNodeSchema(BaseModel):
    """Nó da árvore do documento (recursivo)."""

    type: Literal["root", "diploma", "chapter", "article"]
    header: Optional[str] = Field(None, description="Título da seção (ex: Artigo 1.º)")
    text: Optional[str] = Field(None, description="Conteúdo de texto do nó")
    children: Optional[list["BteNodeSchema"]] = Field(None, description="Subelementos")


BteNodeSchema.model_rebuild()


class BteDocumentSchema(BaseModel):
    """Documento BTE completo."""

    type: Literal["issue", "offprint"] = Field(..., description="Boletim (issue) ou Separata (offprint)")
    reference: str = Field(..., min_length=5, description="Ex: BTE n.º 1, Vol. 91, de 8 de janeiro de 2024")
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$", description="Data de publicação (YYYY-MM-DD)")
    url: AnyHttpUrl = Field(..., description="URL de origem do PDF")
    root: BteNodeSchema

    def to_json_dict(self) -> dict:
        """Dict serializável em JSON, sem campos vazios."""
        return self.model_dump(mode="json", exclude_none=True)


def validate_document(record: DocumentRecord) -> BteDocumentSchema:
    """
    Valida um DocumentRecord contra o schema de saída.

    Raises:
        pydantic.ValidationError: Se o documento violar o schema
    """
    return BteDocumentSchema.model_validate(record.to_dict())
