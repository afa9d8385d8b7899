"""
MetadataExtractor - Data de publicação e referência canônica do BTE.

Procura nas primeiras linhas do documento:
- Cabeçalho estruturado "<data> | n.º <número> | Vol. <volume>"
- Na falta deste, uma data por extenso ("8 de fevereiro de 2024")

Nunca falha: sem sinais, usa o ano e o número declarados pelo crawler.
"""

import logging
import re
from typing import Sequence

from ..extraction.models import DocumentMetadata, LogicalLine

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 10

MONTHS = {
    "janeiro": "01", "fevereiro": "02", "março": "03", "abril": "04",
    "maio": "05", "junho": "06", "julho": "07", "agosto": "08",
    "setembro": "09", "outubro": "10", "novembro": "11", "dezembro": "12",
}

DOC_TYPE_LABELS = {
    "issue": "BTE",
    "offprint": "BTE Separata",
}


# === Regexes ===

RE_HEADER_LINE = re.compile(
    r"^(.*?)\s*[|,]\s*n\.º\s*(\d+)\s*\|\s*Vol\.\s*(\d+)",
    re.IGNORECASE,
)

_months_pattern = "|".join(MONTHS)

RE_DATE = re.compile(
    rf"\d{{1,2}}\s+(?:de\s+)?(?:{_months_pattern})\s+(?:de\s+)?\d{{4}}",
    re.IGNORECASE,
)


def convert_date_to_iso(pt_date: str, fallback_year: str) -> str:
    """
    Converte uma data portuguesa por extenso para ISO (YYYY-MM-DD).

    >>> convert_date_to_iso("8 de fevereiro de 2024", "2024")
    '2024-02-08'
    >>> convert_date_to_iso("sem data", "2019")
    '2019-01-01'
    """
    fallback = f"{fallback_year}-01-01"

    parts = [
        p.strip(".,;:")
        for p in pt_date.lower().split()
        if p != "de"
    ]
    parts = [p for p in parts if p]
    if len(parts) < 3:
        return fallback

    day, month_name, year = parts[0], parts[1], parts[2]

    # O mês pode não estar na segunda posição ("sexta-feira, 8 fevereiro 2024")
    if month_name not in MONTHS:
        month_idx = next((i for i, p in enumerate(parts) if p in MONTHS), -1)
        if 0 < month_idx < len(parts) - 1:
            month_name = parts[month_idx]
            day = parts[month_idx - 1]
            year = parts[month_idx + 1]

    month = MONTHS.get(month_name)
    if not month or not day.isdecimal() or not (year.isdecimal() and len(year) == 4):
        return fallback

    day_num = int(day)
    if not 1 <= day_num <= 31:
        return fallback

    return f"{year}-{month}-{day_num:02d}"


def _find_date(text: str) -> str:
    m = RE_DATE.search(text)
    return m.group(0) if m else ""


class MetadataExtractor:
    """Extrai a data ISO e a referência canônica das primeiras linhas."""

    def __init__(self, window: int = DEFAULT_WINDOW):
        self.window = window

    def extract(
        self,
        lines: Sequence[LogicalLine],
        doc_type: str,
        declared_year: str,
        declared_number: str,
    ) -> DocumentMetadata:
        """
        Extrai os metadados globais do documento.

        Args:
            lines: Linhas do documento (antes do NoiseFilter)
            doc_type: "issue" ou "offprint"
            declared_year: Ano declarado pelo crawler (fallback)
            declared_number: Número declarado pelo crawler (fallback)

        Returns:
            DocumentMetadata com iso_date e reference
        """
        found_date = ""
        found_number = declared_number
        found_volume = ""

        for line in lines[: self.window]:
            txt = line.text.strip()

            header_match = RE_HEADER_LINE.match(txt)
            if header_match:
                found_number = header_match.group(2)
                found_volume = header_match.group(3)
                header_date = _find_date(header_match.group(1))
                if header_date:
                    found_date = header_date
                break

            if not found_date:
                found_date = _find_date(txt)

        if found_date:
            iso_date = convert_date_to_iso(found_date, declared_year)
            date_part = f", de {found_date}"
        else:
            logger.warning(
                f"MetadataExtractor: data não encontrada em {declared_year}/{declared_number}, "
                f"usando {declared_year}-01-01"
            )
            iso_date = f"{declared_year}-01-01"
            date_part = f", de {declared_year}"

        label = DOC_TYPE_LABELS.get(doc_type, "BTE")
        volume_part = f", Vol. {found_volume}" if found_volume else ""
        reference = f"{label} n.º {found_number}{volume_part}{date_part}"

        logger.debug(f"MetadataExtractor: {reference} ({iso_date})")
        return DocumentMetadata(iso_date=iso_date, reference=reference)
