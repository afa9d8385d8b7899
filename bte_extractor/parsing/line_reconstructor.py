"""
LineReconstructor - Agrupa fragmentos posicionados em linhas lógicas.

Ordem de leitura humana:
- Primeiro por Y (de cima para baixo). No espaço nativo do PDF o Y cresce
  para cima, por isso ordenamos Y de forma decrescente.
- Depois por X (da esquerda para a direita), dentro de cada linha visual.

Dois fragmentos consecutivos (na ordem por Y) pertencem à mesma linha se a
diferença de Y não ultrapassar a tolerância (5 unidades por padrão). Os
fragmentos de cada linha são reordenados por X antes de serem unidos, para
que uma baseline ligeiramente desalinhada não inverta a ordem das palavras.
"""

import logging
from typing import Iterable, Optional, Sequence

from ..extraction.models import LogicalLine, PositionedRun

logger = logging.getLogger(__name__)

DEFAULT_Y_TOLERANCE = 5.0


def _vertical_key(run: PositionedRun):
    # x/text/ends_line apenas desempatam, para a ordem ser total
    return (-run.y, run.x, run.text, run.ends_line)


def _horizontal_key(run: PositionedRun):
    return (run.x, -run.y, run.text, run.ends_line)


class LineReconstructor:
    """Reconstrói as linhas lógicas de cada página a partir dos PositionedRun."""

    def __init__(self, y_tolerance: float = DEFAULT_Y_TOLERANCE):
        self.y_tolerance = y_tolerance

    def reconstruct(self, pages: Iterable[Sequence[PositionedRun]]) -> list[LogicalLine]:
        """
        Reconstrói as linhas de todas as páginas, preservando a ordem das páginas.

        Args:
            pages: Lista (por página) de fragmentos, em qualquer ordem interna

        Returns:
            Lista de LogicalLine em ordem de leitura
        """
        lines: list[LogicalLine] = []
        for page_position, runs in enumerate(pages):
            page_lines = self.reconstruct_page(runs, page_position)
            lines.extend(page_lines)
        logger.debug(f"LineReconstructor: {len(lines)} linhas reconstruídas")
        return lines

    def _group_rows(self, runs: Sequence[PositionedRun]) -> list[list[PositionedRun]]:
        """Agrupa os fragmentos em linhas visuais pela tolerância de Y."""
        rows: list[list[PositionedRun]] = []
        current: list[PositionedRun] = []

        for run in sorted(runs, key=_vertical_key):
            if current:
                previous = current[-1]
                # Quebra de linha forçada pelo próprio fragmento
                if previous.ends_line or abs(run.y - previous.y) > self.y_tolerance:
                    rows.append(current)
                    current = []
            current.append(run)

        if current:
            rows.append(current)
        return rows

    def reconstruct_page(
        self,
        runs: Sequence[PositionedRun],
        page_index: Optional[int] = None,
    ) -> list[LogicalLine]:
        """Reconstrói as linhas de uma única página."""
        if not runs:
            return []
        if page_index is None:
            page_index = runs[0].page_index

        lines: list[LogicalLine] = []
        for row in self._group_rows(runs):
            ordered = sorted(row, key=_horizontal_key)
            text = " ".join(r.text for r in ordered).strip()
            if text:
                lines.append(LogicalLine(text=text, y=ordered[-1].y, page_index=page_index))

        return lines
