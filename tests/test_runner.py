# -*- coding: utf-8 -*-
"""
Testes para o IngestionRunner.

O parser é substituído por um mock: cada documento devolve o registro de
exemplo, levanta um erro de decodificação ou produz um registro inválido.
"""

from dataclasses import replace
from unittest.mock import MagicMock

import pytest

from bte_extractor.extraction.models import DownloadedFile
from bte_extractor.ingestion.runner import IngestionRunner, RunReport
from bte_extractor.ingestion.storage import DocumentStorage


def make_doc(number):
    return DownloadedFile(
        doc_type="issue",
        year="2024",
        number=str(number),
        url=f"https://bte.gep.msess.gov.pt/completos/2024/bte{number}_2024.pdf",
        content=b"%PDF-1.4",
    )


@pytest.fixture
def parser(sample_record):
    """Documento 2 falha na decodificação, documento 3 tem URL inválida."""
    def parse(doc):
        if doc.number == "2":
            raise RuntimeError("PyMuPDF não conseguiu abrir o PDF")
        if doc.number == "3":
            return replace(sample_record, source_url="sem-url")
        return sample_record

    mock = MagicMock()
    mock.parse.side_effect = parse
    return mock


@pytest.fixture
def runner(parser, tmp_path):
    return IngestionRunner(parser, DocumentStorage(tmp_path))


class TestIngestionRunner:

    def test_counts(self, runner):
        report = runner.run([make_doc(n) for n in (1, 2, 3, 4)])

        assert isinstance(report, RunReport)
        assert report.total == 4
        assert report.success == 2
        assert report.errors == 2

    def test_failures_recorded(self, runner):
        report = runner.run([make_doc(n) for n in (1, 2, 3)])

        assert [f.number for f in report.failures] == ["2", "3"]
        assert report.failures[0].error_type == "RuntimeError"
        assert report.failures[1].error_type == "ValidationError"

    def test_continues_after_failure(self, runner, parser, tmp_path):
        runner.run([make_doc(2), make_doc(4)])

        assert parser.parse.call_count == 2
        assert (tmp_path / "1_Serie" / "2024" / "4" / "output.json").exists()
        assert not (tmp_path / "1_Serie" / "2024" / "2").exists()

    def test_content_released(self, runner):
        docs = [make_doc(1), make_doc(2)]
        runner.run(docs)
        assert all(d.content is None for d in docs)

    def test_limit(self, runner, parser):
        report = runner.run(make_doc(n) for n in range(1, 10))
        assert report.total == 9

        parser.parse.reset_mock()
        report = runner.run((make_doc(n) for n in range(1, 10)), limit=3)
        assert report.total == 3
        assert parser.parse.call_count == 3

    def test_empty_stream(self, runner):
        report = runner.run([])
        assert report.total == 0
        assert "Total: 0" in report.summary()

    def test_process_propagates(self, runner):
        with pytest.raises(RuntimeError):
            runner.process(make_doc(2))
