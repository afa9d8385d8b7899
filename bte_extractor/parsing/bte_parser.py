"""
BteParser - Orquestrador do parsing de um documento BTE.

Pipeline: PDF → PositionedRun[] → LineReconstructor → linhas
          → MetadataExtractor (linhas brutas)
          → NoiseFilter → TreeBuilder → normalize_tree → DocumentRecord

Cada chamada a parse() cria o seu próprio estado: o parser pode ser
compartilhado entre chamadas (e entre threads) sem estado mutável comum.
"""

import logging
from typing import Optional, Sequence

from ..config import config
from ..extraction.models import DocumentRecord, DownloadedFile, PositionedRun
from ..extraction.pymupdf_extractor import PyMuPDFExtractor
from ..utils.text_normalizer import normalize_tree
from .line_reconstructor import LineReconstructor
from .metadata_extractor import MetadataExtractor
from .noise_filter import NoiseFilter
from .tree_builder import TreeBuilder

logger = logging.getLogger(__name__)


class BteParser:
    """Converte um documento baixado num DocumentRecord."""

    def __init__(
        self,
        extractor: Optional[PyMuPDFExtractor] = None,
        y_tolerance: float = config.line_y_tolerance,
        metadata_window: int = config.metadata_window,
        header_max_length: int = config.header_max_length,
    ):
        self.extractor = extractor or PyMuPDFExtractor()
        self.line_reconstructor = LineReconstructor(y_tolerance=y_tolerance)
        self.noise_filter = NoiseFilter()
        self.metadata_extractor = MetadataExtractor(window=metadata_window)
        self.tree_builder = TreeBuilder(header_max_length=header_max_length)

    def parse(self, file: DownloadedFile) -> DocumentRecord:
        """
        Faz o parsing de um documento baixado.

        Args:
            file: Documento com o PDF binário (content) ou runs já decodificados (pages)

        Returns:
            DocumentRecord com a árvore e os metadados

        Raises:
            RuntimeError: Se o PDF não puder ser decodificado
            ValueError: Se o documento não trouxer nem content nem pages
        """
        if file.pages is not None:
            pages = file.pages
        elif file.content is not None:
            pages = self.extractor.extract_runs(file.content)
        else:
            raise ValueError(f"Documento {file.year}/{file.number} sem conteúdo para processar")

        return self.parse_runs(pages, file)

    def parse_runs(
        self,
        pages: Sequence[Sequence[PositionedRun]],
        file: DownloadedFile,
    ) -> DocumentRecord:
        """Executa o pipeline sobre fragmentos já decodificados."""
        raw_lines = self.line_reconstructor.reconstruct(pages)
        metadata = self.metadata_extractor.extract(
            raw_lines,
            doc_type=file.doc_type,
            declared_year=file.year,
            declared_number=file.number,
        )
        clean_lines = self.noise_filter.filter(raw_lines)
        root = normalize_tree(self.tree_builder.build(clean_lines))

        logger.info(
            f"BteParser: {file.doc_type} {file.year}/{file.number} - "
            f"{len(raw_lines)} linhas, {len(clean_lines)} após limpeza - {metadata.reference}"
        )
        return DocumentRecord(
            type=file.doc_type,
            reference=metadata.reference,
            iso_date=metadata.iso_date,
            source_url=file.url,
            root=root,
        )
