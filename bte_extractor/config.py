"""
Configurações do BTE Extractor.
"""

import os
from dataclasses import dataclass


@dataclass
class Config:
    """Configuração do crawler, do parser e da persistência."""

    # Crawler
    base_url: str = "https://bte.gep.msess.gov.pt"
    form_url_issue: str = "https://bte.gep.msess.gov.pt/bte_consulta_n_anteriores.php"
    form_url_offprint: str = "https://bte.gep.msess.gov.pt/sep_consulta_n_anteriores.php"
    timeout: float = 15.0              # segundos por request
    user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    max_consecutive_failures: int = 10  # falhas seguidas antes de assumir fim do ano
    request_delay: float = 0.005       # pausa entre requests (segundos)

    # Parser
    line_y_tolerance: float = 5.0      # unidades PDF para agrupar fragmentos na mesma linha
    metadata_window: int = 10          # linhas iniciais usadas para metadados
    header_max_length: int = 250       # limite para linhas de continuação de títulos

    # Persistência
    output_dir: str = "output"

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Carrega configuração de variáveis de ambiente."""
        return cls(
            base_url=os.getenv("BTE_BASE_URL", "https://bte.gep.msess.gov.pt"),
            form_url_issue=os.getenv(
                "BTE_FORM_URL_ISSUE",
                "https://bte.gep.msess.gov.pt/bte_consulta_n_anteriores.php",
            ),
            form_url_offprint=os.getenv(
                "BTE_FORM_URL_OFFPRINT",
                "https://bte.gep.msess.gov.pt/sep_consulta_n_anteriores.php",
            ),
            timeout=float(os.getenv("BTE_TIMEOUT", "15")),
            user_agent=os.getenv(
                "BTE_USER_AGENT",
                "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
            ),
            max_consecutive_failures=int(os.getenv("BTE_MAX_CONSECUTIVE_FAILURES", "10")),
            request_delay=float(os.getenv("BTE_REQUEST_DELAY", "0.005")),
            line_y_tolerance=float(os.getenv("BTE_LINE_Y_TOLERANCE", "5.0")),
            metadata_window=int(os.getenv("BTE_METADATA_WINDOW", "10")),
            header_max_length=int(os.getenv("BTE_HEADER_MAX_LENGTH", "250")),
            output_dir=os.getenv("BTE_OUTPUT_DIR", "output"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


# Singleton
config = Config.from_env()
