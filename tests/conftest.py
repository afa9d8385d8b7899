"""
Configuração global do pytest para os testes do bte-extractor.

Coloca a raiz do projeto no sys.path e disponibiliza fixtures comuns.
"""

import sys
from pathlib import Path

import pytest

root_path = Path(__file__).parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))

from bte_extractor.extraction.models import DocumentNode, DocumentRecord, DownloadedFile  # noqa: E402


@pytest.fixture
def issue_file():
    """Unidade de trabalho sem conteúdo (para parse_runs)."""
    return DownloadedFile(
        doc_type="issue",
        year="2024",
        number="5",
        url="https://bte.gep.msess.gov.pt/completos/2024/bte5_2024.pdf",
    )


@pytest.fixture
def sample_record():
    """DocumentRecord válido com diploma → capítulo → artigo."""
    article = DocumentNode(kind="article", header="Artigo 1.º Âmbito", text="O presente contrato obriga as partes.")
    chapter = DocumentNode(kind="chapter", header="Capítulo I Disposições gerais", children=[article])
    diploma = DocumentNode(kind="diploma", header="Contrato coletivo entre a AIMMAP e o SINDEL", children=[chapter])
    root = DocumentNode(kind="root", children=[diploma])
    return DocumentRecord(
        type="issue",
        reference="BTE n.º 5, Vol. 91, de 8 de fevereiro de 2024",
        iso_date="2024-02-08",
        source_url="https://bte.gep.msess.gov.pt/completos/2024/bte5_2024.pdf",
        root=root,
    )
