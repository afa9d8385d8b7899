"""
Extraction - Decodificação do PDF e modelos de dados do pipeline.

Módulos:
    models: PositionedRun, LogicalLine, DocumentNode, DocumentRecord, ...
    pymupdf_extractor: Fragmentos de texto com coordenadas via PyMuPDF
"""

from .models import (
    DocumentMetadata,
    DocumentNode,
    DocumentRecord,
    DownloadedFile,
    LogicalLine,
    PositionedRun,
)
from .pymupdf_extractor import PyMuPDFExtractor

__all__ = [
    "DocumentMetadata",
    "DocumentNode",
    "DocumentRecord",
    "DownloadedFile",
    "LogicalLine",
    "PositionedRun",
    "PyMuPDFExtractor",
]
