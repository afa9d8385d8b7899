"""
Orquestrador da extração em lote.

Pipeline por documento: Crawler → BteParser → validate_document → DocumentStorage

Cada documento é processado isoladamente: uma falha (PDF corrompido,
documento fora do schema) é registrada e contada, e o lote continua.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..extraction.models import DownloadedFile
from ..parsing.bte_parser import BteParser
from .schema import validate_document
from .storage import DocumentStorage, get_series_folder_name

logger = logging.getLogger(__name__)


@dataclass
class DocumentFailure:
    """Falha no processamento de um documento."""
    doc_type: str
    year: str
    number: str
    error_type: str
    message: str


@dataclass
class RunReport:
    """Relatório final da extração."""
    total: int = 0
    success: int = 0
    errors: int = 0
    duration_s: float = 0.0
    failures: list[DocumentFailure] = field(default_factory=list)

    def summary(self) -> str:
        return (
            f"Total: {self.total} | Gravados: {self.success} | "
            f"Erros: {self.errors} | Tempo: {self.duration_s:.1f}s"
        )


class IngestionRunner:
    """Consome o stream de documentos e processa-os um a um."""

    def __init__(self, parser: BteParser, storage: DocumentStorage):
        self.parser = parser
        self.storage = storage

    def process(self, doc: DownloadedFile):
        """Parse → validação → gravação de um documento. Propaga qualquer erro."""
        record = self.parser.parse(doc)
        validated = validate_document(record)
        return self.storage.save(validated, doc.year, doc.number)

    def run(self, documents: Iterable[DownloadedFile], limit: Optional[int] = None) -> RunReport:
        """
        Processa todos os documentos do stream.

        Args:
            documents: Iterável de DownloadedFile (ex: BteCrawler.crawl_all())
            limit: Número máximo de documentos a processar (None = todos)

        Returns:
            RunReport com contagens de sucesso e erro
        """
        report = RunReport()
        start = time.time()

        for doc in documents:
            if limit is not None and report.total >= limit:
                break
            report.total += 1
            identifier = f"{doc.year}/{doc.number} ({get_series_folder_name(doc.doc_type)})"

            try:
                file_path = self.process(doc)
                report.success += 1
                logger.info(f"Processado [{report.total}] - {identifier} → {file_path}")
            except Exception as e:
                report.errors += 1
                report.failures.append(DocumentFailure(
                    doc_type=doc.doc_type,
                    year=doc.year,
                    number=doc.number,
                    error_type=type(e).__name__,
                    message=str(e),
                ))
                logger.error(f"Falha em {identifier}: {type(e).__name__}: {e}")
            finally:
                # Libera o PDF antes do próximo documento
                doc.content = None
                doc.pages = None

        report.duration_s = time.time() - start
        logger.info(f"Relatório final - {report.summary()}")
        return report
