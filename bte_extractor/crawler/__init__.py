"""
Crawler - Descoberta e download dos PDFs do BTE.
"""

from .bte_crawler import BteCrawler, extract_year_options, generate_url_patterns

__all__ = [
    "BteCrawler",
    "extract_year_options",
    "generate_url_patterns",
]
