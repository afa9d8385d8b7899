"""
Modelos de dados do pipeline de extração do BTE.

Define:
- PositionedRun: fragmento de texto com coordenadas (saída do decoder)
- LogicalLine: linha reconstruída em ordem de leitura
- DocumentNode: nó da árvore hierárquica (root, diploma, chapter, article)
- DocumentMetadata: data ISO e referência canônica do documento
- DownloadedFile: unidade de trabalho entregue pelo crawler
- DocumentRecord: artefato final entregue à validação/persistência
"""

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

DocumentType = Literal["issue", "offprint"]
NodeKind = Literal["root", "diploma", "chapter", "article"]


@dataclass(frozen=True)
class PositionedRun:
    """Fragmento de texto decodificado com posição na página (Y cresce para cima)."""

    text: str
    x: float
    y: float
    page_index: int
    ends_line: bool = False


@dataclass
class LogicalLine:
    """Linha lógica reconstruída a partir de um ou mais PositionedRun."""

    text: str
    y: float          # Y do último fragmento que contribuiu para a linha
    page_index: int


@dataclass
class DocumentNode:
    """Nó da árvore do documento. Cada nó é dono exclusivo dos seus filhos."""

    kind: NodeKind
    header: Optional[str] = None
    text: Optional[str] = None
    children: list["DocumentNode"] = field(default_factory=list)

    def add_child(self, node: "DocumentNode") -> None:
        self.children.append(node)

    def append_text(self, line: str) -> None:
        """Acrescenta uma linha de conteúdo ao corpo, separada por newline."""
        if not self.text:
            self.text = line
        else:
            self.text = f"{self.text}\n{line}"

    def iter_nodes(self):
        """Percorre a subárvore em pré-ordem."""
        yield self
        for child in self.children:
            yield from child.iter_nodes()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.kind}
        if self.header is not None:
            data["header"] = self.header
        if self.text is not None:
            data["text"] = self.text
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


@dataclass(frozen=True)
class DocumentMetadata:
    """Metadados globais do documento."""

    iso_date: str     # YYYY-MM-DD
    reference: str    # ex: "BTE n.º 5, Vol. 91, de 8 de fevereiro de 2024"


@dataclass
class DownloadedFile:
    """Documento baixado (ou já decodificado), antes do parsing."""

    doc_type: DocumentType
    year: str
    number: str
    url: str
    content: Optional[bytes] = None                            # PDF binário
    pages: Optional[list[list[PositionedRun]]] = None          # runs já decodificados


@dataclass(frozen=True)
class DocumentRecord:
    """Documento BTE processado, pronto para validação."""

    type: DocumentType
    reference: str
    iso_date: str
    source_url: str
    root: DocumentNode

    def to_dict(self) -> dict[str, Any]:
        """Formato JSON de saída: {type, reference, date, url, root}."""
        return {
            "type": self.type,
            "reference": self.reference,
            "date": self.iso_date,
            "url": self.source_url,
            "root": self.root.to_dict(),
        }
