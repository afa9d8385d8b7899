# -*- coding: utf-8 -*-
"""
Testes para o BteCrawler.

A session HTTP é um mock que responde conforme a URL pedida: páginas de
consulta com o <select> de anos e um conjunto fixo de PDFs existentes.
"""

import pytest
import requests
from unittest.mock import MagicMock, Mock

from bte_extractor.config import Config
from bte_extractor.crawler.bte_crawler import (
    BteCrawler,
    extract_year_options,
    generate_url_patterns,
)

BASE = "https://bte.test"

ISSUE_FORM = """
<form>
  <select name="mes"><option>janeiro</option><option>fevereiro</option></select>
  <select name="ano">
    <option value="">Selecione</option>
    <option value="2023">2023</option>
    <option value="2024">2024</option>
  </select>
</form>
"""

OFFPRINT_FORM = '<select><option value="2024">2024</option></select>'

EXISTING_PDFS = {
    f"{BASE}/completos/2024/bte1_2024.pdf",
    f"{BASE}/completos/2024/bte2_2024.pdf",
    f"{BASE}/completos/2024/bte4_2024.pdf",
    f"{BASE}/completos/2023/bte1_2023.pdf",
    f"{BASE}/separatas/sep1_2024.pdf",
}


def fake_response(status_code=200, content_type="application/pdf", text="", content=b"%PDF-1.4"):
    response = Mock()
    response.status_code = status_code
    response.headers = {"content-type": content_type}
    response.text = text
    response.content = content
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code}")
    else:
        response.raise_for_status.return_value = None
    return response


def fake_get(url, timeout=None):
    if url == f"{BASE}/issues":
        return fake_response(content_type="text/html", text=ISSUE_FORM)
    if url == f"{BASE}/offprints":
        return fake_response(content_type="text/html", text=OFFPRINT_FORM)
    if url in EXISTING_PDFS:
        return fake_response()
    return fake_response(status_code=404, content_type="text/html")


@pytest.fixture
def cfg():
    return Config(
        base_url=BASE,
        form_url_issue=f"{BASE}/issues",
        form_url_offprint=f"{BASE}/offprints",
        request_delay=0,
        max_consecutive_failures=2,
    )


@pytest.fixture
def session():
    mock = MagicMock()
    mock.get.side_effect = fake_get
    return mock


@pytest.fixture
def crawler(cfg, session):
    return BteCrawler(cfg=cfg, session=session)


class TestHelpers:

    def test_issue_url(self):
        assert generate_url_patterns(BASE, "issue", "2024", "5") == [f"{BASE}/completos/2024/bte5_2024.pdf"]

    def test_offprint_url(self):
        assert generate_url_patterns(BASE, "offprint", "2024", "3") == [f"{BASE}/separatas/sep3_2024.pdf"]

    def test_year_select_found_and_sorted(self):
        assert extract_year_options(ISSUE_FORM) == ["2024", "2023"]

    def test_select_below_ratio_ignored(self):
        html = "<select>" + "".join(f"<option>op{i}</option>" for i in range(9)) + "<option>2024</option></select>"
        assert extract_year_options(html) == []

    def test_no_select(self):
        assert extract_year_options("<p>sem formulário</p>") == []


class TestFetchDocument:

    def test_pdf_found(self, crawler):
        doc = crawler.fetch_document("issue", "2024", "1")
        assert doc.url == f"{BASE}/completos/2024/bte1_2024.pdf"
        assert doc.content == b"%PDF-1.4"
        assert (doc.doc_type, doc.year, doc.number) == ("issue", "2024", "1")

    def test_missing_pdf(self, crawler):
        assert crawler.fetch_document("issue", "2024", "3") is None

    def test_html_response_rejected(self, crawler, session):
        session.get.side_effect = lambda url, timeout=None: fake_response(content_type="text/html")
        assert crawler.fetch_document("issue", "2024", "1") is None

    def test_octet_stream_accepted(self, crawler, session):
        session.get.side_effect = lambda url, timeout=None: fake_response(content_type="application/octet-stream")
        assert crawler.fetch_document("issue", "2024", "1") is not None

    def test_network_error_is_miss(self, crawler, session):
        session.get.side_effect = requests.ConnectionError("offline")
        assert crawler.fetch_document("issue", "2024", "1") is None

    def test_uses_configured_timeout(self, crawler, session, cfg):
        crawler.fetch_document("issue", "2024", "1")
        session.get.assert_called_with(f"{BASE}/completos/2024/bte1_2024.pdf", timeout=cfg.timeout)


class TestScan:

    def test_gap_tolerated_then_stops(self, crawler, session):
        docs = list(crawler.scan_year("issue", "2024"))

        assert [d.number for d in docs] == ["1", "2", "4"]
        requested = [c.args[0] for c in session.get.call_args_list]
        assert requested[-1] == f"{BASE}/completos/2024/bte6_2024.pdf"

    def test_identify_years(self, crawler):
        assert crawler.identify_years() == {"issue": ["2024", "2023"], "offprint": ["2024"]}

    def test_get_years_http_error(self, crawler, session):
        session.get.side_effect = lambda url, timeout=None: fake_response(status_code=500)
        assert crawler.get_years(f"{BASE}/issues", "Bulletin Years") == []


class TestCrawlAll:

    def test_issues_before_offprints(self, crawler):
        docs = list(crawler.crawl_all())

        assert [(d.doc_type, d.year, d.number) for d in docs] == [
            ("issue", "2024", "1"),
            ("issue", "2024", "2"),
            ("issue", "2024", "4"),
            ("issue", "2023", "1"),
            ("offprint", "2024", "1"),
        ]
        assert crawler.total_collected == 5

    def test_limit(self, crawler):
        docs = list(crawler.crawl_all(limit=2))
        assert [d.number for d in docs] == ["1", "2"]
        assert crawler.total_collected == 2

    def test_zero_limit_means_all(self, crawler):
        assert len(list(crawler.crawl_all(limit=0))) == 5

    def test_no_year_dropdowns(self, crawler, session):
        session.get.side_effect = lambda url, timeout=None: fake_response(content_type="text/html", text="<p></p>")
        assert list(crawler.crawl_all()) == []


class TestSession:

    def test_default_session_has_user_agent(self, cfg):
        crawler = BteCrawler(cfg=cfg)
        assert crawler.session.headers["User-Agent"] == cfg.user_agent
        adapter = crawler.session.get_adapter(f"{BASE}/x")
        assert adapter.max_retries.total == BteCrawler.MAX_RETRIES
