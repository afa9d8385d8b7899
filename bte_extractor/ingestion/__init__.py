"""
Ingestion - Validação, persistência e execução em lote.

Módulos:
    schema: Schema pydantic do documento de saída
    storage: Gravação dos JSON em disco
    runner: Crawler → parser → validação → disco, com relatório final
"""

from .runner import DocumentFailure, IngestionRunner, RunReport
from .schema import BteDocumentSchema, BteNodeSchema, validate_document
from .storage import DocumentStorage, get_series_folder_name

__all__ = [
    "DocumentFailure",
    "IngestionRunner",
    "RunReport",
    "BteDocumentSchema",
    "BteNodeSchema",
    "validate_document",
    "DocumentStorage",
    "get_series_folder_name",
]
