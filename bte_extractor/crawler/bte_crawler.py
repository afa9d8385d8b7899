"""
BteCrawler - Descoberta e download dos PDFs do BTE.

Fluxo:
1. Lê as páginas de consulta (boletins e separatas) e extrai os anos
   disponíveis do <select> de anos
2. Para cada ano, testa os números 1, 2, 3, ... pelos padrões de URL
3. Termina o ano após N falhas consecutivas (assume fim da numeração)
4. Entrega cada documento encontrado imediatamente (generator), para que
   seja processado sem acumular PDFs em memória
"""

import logging
import re
import time
from typing import Iterator, Optional

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import Config, config as default_config
from ..extraction.models import DocumentType, DownloadedFile

logger = logging.getLogger(__name__)

RE_YEAR = re.compile(r"^(19|20)\d{2}$")

# Proporção mínima de opções que têm de ser anos para aceitar o <select>
MIN_YEAR_RATIO = 0.3


def generate_url_patterns(base_url: str, doc_type: DocumentType, year: str, number: str) -> list[str]:
    """URLs candidatas para um documento (boletim ou separata)."""
    if doc_type == "issue":
        return [f"{base_url}/completos/{year}/bte{number}_{year}.pdf"]
    return [f"{base_url}/separatas/sep{number}_{year}.pdf"]


def extract_year_options(html: str) -> list[str]:
    """
    Procura o <select> de anos numa página HTML.

    Um <select> é aceito se mais de 30% das opções forem anos (19xx/20xx).
    Retorna os anos por ordem decrescente, ou [] se nenhum <select> servir.
    """
    soup = BeautifulSoup(html, "html.parser")
    for select in soup.find_all("select"):
        options = select.find_all("option")
        years = []
        for opt in options:
            label = opt.get_text(strip=True)
            if RE_YEAR.match(label):
                years.append(opt.get("value", label).strip() or label)
        if options and len(years) > len(options) * MIN_YEAR_RATIO:
            return sorted(years, key=int, reverse=True)
    return []


class BteCrawler:
    """Percorre anos e números do BTE, entregando os PDFs um a um."""

    MAX_RETRIES = 3
    BACKOFF_FACTOR = 0.5

    def __init__(self, cfg: Optional[Config] = None, session: Optional[requests.Session] = None):
        self.config = cfg or default_config
        self.session = session or self._create_session()
        self.total_collected = 0
        self.max_limit: Optional[int] = None

    def _create_session(self) -> requests.Session:
        """Cria session HTTP com retry configurado."""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.MAX_RETRIES,
            backoff_factor=self.BACKOFF_FACTOR,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({"User-Agent": self.config.user_agent})

        return session

    def _limit_reached(self) -> bool:
        return self.max_limit is not None and self.total_collected >= self.max_limit

    def fetch_document(self, doc_type: DocumentType, year: str, number: str) -> Optional[DownloadedFile]:
        """Tenta baixar um documento. Retorna None se não existir."""
        for url in generate_url_patterns(self.config.base_url, doc_type, year, number):
            if self._limit_reached():
                return None

            time.sleep(self.config.request_delay)
            try:
                response = self.session.get(url, timeout=self.config.timeout)
            except requests.RequestException as e:
                logger.debug(f"BteCrawler: falha em {url}: {e}")
                continue

            if response.status_code != 200:
                continue

            content_type = response.headers.get("content-type", "")
            if "pdf" in content_type or "octet-stream" in content_type:
                return DownloadedFile(
                    doc_type=doc_type,
                    year=year,
                    number=number,
                    url=url,
                    content=response.content,
                )
        return None

    def get_years(self, url: str, description: str) -> list[str]:
        """Extrai os anos disponíveis de uma página de consulta."""
        try:
            response = self.session.get(url, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"BteCrawler: erro ao obter {description}: {e}")
            return []

        years = extract_year_options(response.text)
        if not years:
            logger.warning(f"BteCrawler: nenhum dropdown de anos encontrado para {description}")
        return years

    def identify_years(self) -> dict[str, list[str]]:
        """Anos disponíveis para boletins e separatas."""
        return {
            "issue": self.get_years(self.config.form_url_issue, "Bulletin Years"),
            "offprint": self.get_years(self.config.form_url_offprint, "Offprint Years"),
        }

    def scan_year(self, doc_type: DocumentType, year: str) -> Iterator[DownloadedFile]:
        """Testa números sequenciais até N falhas consecutivas ou o limite."""
        current = 1
        consecutive_failures = 0

        while not self._limit_reached():
            if consecutive_failures >= self.config.max_consecutive_failures:
                break

            doc = self.fetch_document(doc_type, year, str(current))
            if doc:
                self.total_collected += 1
                consecutive_failures = 0
                yield doc
            else:
                consecutive_failures += 1

            current += 1

    def crawl_all(self, limit: Optional[int] = None) -> Iterator[DownloadedFile]:
        """
        Percorre todos os anos de boletins e depois de separatas.

        Args:
            limit: Número máximo de documentos (None = todos)

        Yields:
            DownloadedFile, um de cada vez
        """
        self.total_collected = 0
        self.max_limit = limit if limit and limit > 0 else None

        logger.info(f"BteCrawler: início (limite: {self.max_limit or 'todos'})")
        scope = self.identify_years()

        if not scope["issue"] and not scope["offprint"]:
            logger.error("BteCrawler: não foi possível detectar os dropdowns de anos")
            return

        for doc_type in ("issue", "offprint"):
            years = scope[doc_type]
            for index, year in enumerate(years):
                if self._limit_reached():
                    return
                logger.info(f"BteCrawler: [{index + 1}/{len(years)}] ano {year} ({doc_type})")
                yield from self.scan_year(doc_type, year)
