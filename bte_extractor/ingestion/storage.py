"""
Persistência dos documentos validados em disco.

Estrutura:
    <output_dir>/1_Serie/<ano>/<número>/output.json     (issue)
    <output_dir>/Separatas/<ano>/<número>/output.json   (offprint)
"""

import json
import logging
from pathlib import Path
from typing import Union

from .schema import BteDocumentSchema

logger = logging.getLogger(__name__)

SERIES_FOLDERS = {
    "issue": "1_Serie",
    "offprint": "Separatas",
}


def get_series_folder_name(doc_type: str) -> str:
    """'issue' → '1_Serie', 'offprint' → 'Separatas'."""
    return SERIES_FOLDERS[doc_type]


class DocumentStorage:
    """Grava documentos validados no sistema de arquivos."""

    FILE_NAME = "output.json"

    def __init__(self, output_dir: Union[str, Path]):
        self.output_dir = Path(output_dir)

    def target_dir(self, doc_type: str, year: str, number: str) -> Path:
        return self.output_dir / get_series_folder_name(doc_type) / year / number

    def save(self, document: BteDocumentSchema, year: str, number: str) -> Path:
        """
        Grava o documento em JSON (UTF-8, indentado).

        Returns:
            Caminho do arquivo gravado
        """
        target = self.target_dir(document.type, year, number)
        target.mkdir(parents=True, exist_ok=True)

        file_path = target / self.FILE_NAME
        with file_path.open("w", encoding="utf-8") as f:
            json.dump(document.to_json_dict(), f, ensure_ascii=False, indent=2)

        logger.debug(f"DocumentStorage: gravado {file_path}")
        return file_path
