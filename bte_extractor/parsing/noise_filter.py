"""
NoiseFilter - Remove linhas de ruído editorial do BTE.

Critérios de remoção:
- Linhas que são apenas números (números de página)
- Linhas que contêm "Boletim do Trabalho e Emprego"
- Cabeçalhos de volume: contêm "|", "Vol." e "n.º"
- Rodapés "BTE <número> | <número>"
- Títulos de categoria editorial (CONVENÇÕES COLETIVAS, PRIVADO, ...)

A filtragem é pura: preserva a ordem e apenas descarta linhas.
"""

import logging
import re
from typing import Iterable

from ..extraction.models import LogicalLine

logger = logging.getLogger(__name__)


# === Regexes ===

RE_PAGE_NUMBER = re.compile(r"^\d+$")

RE_FOOTER = re.compile(r"^BTE\s+\d+\s*\|\s*\d+$", re.IGNORECASE)

RE_CATEGORY_CAPTION = re.compile(
    r"^(CONVENÇÕES COLETIVAS|PRIVADO|REGULAMENTAÇÃO DO TRABALHO|"
    r"ORGANIZAÇÕES DO TRABALHO|CONSELHO ECONÓMICO E SOCIAL|ARBITRAGEM.*|Acórdão.*)$",
    re.IGNORECASE,
)

PUBLICATION_NAME = "Boletim do Trabalho e Emprego"

VOLUME_HEADER_TOKENS = ("|", "Vol.", "n.º")


def is_noise(text: str) -> bool:
    """Indica se uma linha é ruído editorial (cabeçalho, rodapé, paginação)."""
    txt = text.strip()
    if RE_PAGE_NUMBER.match(txt):
        return True
    if PUBLICATION_NAME in txt:
        return True
    if all(token in txt for token in VOLUME_HEADER_TOKENS):
        return True
    if RE_FOOTER.match(txt):
        return True
    if RE_CATEGORY_CAPTION.match(txt):
        return True
    return False


class NoiseFilter:
    """Filtra as linhas de ruído antes da construção da árvore."""

    def filter(self, lines: Iterable[LogicalLine]) -> list[LogicalLine]:
        kept: list[LogicalLine] = []
        dropped = 0
        for line in lines:
            if is_noise(line.text):
                dropped += 1
                continue
            kept.append(line)
        logger.debug(f"NoiseFilter: {len(kept)} linhas mantidas, {dropped} removidas")
        return kept
