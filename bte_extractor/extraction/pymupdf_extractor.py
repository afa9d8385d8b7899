"""
PyMuPDF Extractor - Decodificação do PDF em fragmentos posicionados.

Um PDF não guarda texto de forma linear: descreve apenas que texto é
desenhado e em que posição da página. Não existem linhas, parágrafos nem
ordem de leitura garantida.

Este módulo usa PyMuPDF (fitz) para:
1. Abrir o PDF a partir dos bytes baixados
2. Percorrer blocos → linhas → spans via get_text("dict")
3. Emitir um PositionedRun por span não vazio, com a origem (x, y) do span
4. Converter Y para o sistema nativo do PDF (Y cresce para cima):
   PyMuPDF usa origem no canto superior esquerdo, logo y_pdf = altura - y

As "linhas" do PyMuPDF não são linhas visuais (dois objetos de texto na
mesma baseline saem como linhas distintas), por isso só um span que termina
em quebra de linha explícita recebe ends_line=True. O agrupamento por Y e a
reconstrução das linhas lógicas fica a cargo do LineReconstructor.
"""

import logging
import unicodedata

from .models import PositionedRun

logger = logging.getLogger(__name__)


class PyMuPDFExtractor:
    """Extrai os fragmentos de texto posicionados de cada página do PDF."""

    def extract_runs(self, pdf_bytes: bytes) -> list[list[PositionedRun]]:
        """
        Decodifica o PDF em listas de PositionedRun, uma por página.

        Args:
            pdf_bytes: Conteúdo binário do PDF

        Returns:
            Lista (por página, 0-indexed) de listas de PositionedRun

        Raises:
            RuntimeError: Se PyMuPDF não conseguir abrir o PDF
        """
        import fitz

        try:
            doc = fitz.open(stream=pdf_bytes, filetype="pdf")
        except Exception as e:
            raise RuntimeError(f"PyMuPDF não conseguiu abrir o PDF: {e}") from e

        pages: list[list[PositionedRun]] = []
        try:
            total_pages = len(doc)
            logger.info(f"PyMuPDF: extraindo {total_pages} páginas")

            for page_idx in range(total_pages):
                page = doc[page_idx]
                page_height = page.rect.height
                runs: list[PositionedRun] = []

                page_dict = page.get_text("dict")
                for block in page_dict.get("blocks", []):
                    if block.get("type", 0) != 0:
                        continue  # skip image blocks

                    for line in block.get("lines", []):
                        for span in line.get("spans", []):
                            raw_text = span.get("text", "")
                            text = unicodedata.normalize("NFC", raw_text)
                            if not text.strip():
                                continue
                            origin_x, origin_y = span.get("origin", (0.0, 0.0))
                            runs.append(PositionedRun(
                                text=text,
                                x=round(origin_x, 2),
                                y=round(page_height - origin_y, 2),
                                page_index=page_idx,
                                ends_line=raw_text.endswith(("\n", "\r")),
                            ))

                pages.append(runs)
                logger.debug(
                    f"Página {page_idx + 1}/{total_pages}: {len(runs)} fragmentos, "
                    f"altura {page_height:.0f} pts"
                )
        finally:
            doc.close()

        total_runs = sum(len(p) for p in pages)
        logger.info(f"PyMuPDF: {len(pages)} páginas, {total_runs} fragmentos")
        return pages
