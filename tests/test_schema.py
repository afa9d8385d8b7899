# -*- coding: utf-8 -*-
"""
Testes para o schema de saída (pydantic).
"""

import pytest
from dataclasses import replace
from pydantic import ValidationError

from bte_extractor.extraction.models import DocumentNode
from bte_extractor.ingestion.schema import BteDocumentSchema, validate_document


class TestValidateDocument:

    def test_valid_record(self, sample_record):
        validated = validate_document(sample_record)
        assert isinstance(validated, BteDocumentSchema)
        assert validated.type == "issue"
        assert validated.root.children[0].type == "diploma"

    def test_short_reference_rejected(self, sample_record):
        with pytest.raises(ValidationError):
            validate_document(replace(sample_record, reference="BTE"))

    @pytest.mark.parametrize("date", ["08-02-2024", "2024-2-8", "", "2024-02-08T00:00"])
    def test_bad_date_rejected(self, sample_record, date):
        with pytest.raises(ValidationError):
            validate_document(replace(sample_record, iso_date=date))

    def test_bad_url_rejected(self, sample_record):
        with pytest.raises(ValidationError):
            validate_document(replace(sample_record, source_url="bte5_2024.pdf"))

    def test_unknown_node_type_rejected(self, sample_record):
        sample_record.root.add_child(DocumentNode(kind="section", header="Secção"))
        with pytest.raises(ValidationError):
            validate_document(sample_record)

    def test_unknown_document_type_rejected(self, sample_record):
        with pytest.raises(ValidationError):
            validate_document(replace(sample_record, type="journal"))


class TestToJsonDict:

    def test_excludes_empty_fields(self, sample_record):
        data = validate_document(sample_record).to_json_dict()
        assert "header" not in data["root"]
        assert "text" not in data["root"]
        article = data["root"]["children"][0]["children"][0]["children"][0]
        assert "children" not in article

    def test_url_serialized_as_string(self, sample_record):
        data = validate_document(sample_record).to_json_dict()
        assert data["url"] == sample_record.source_url
        assert set(data) == {"type", "reference", "date", "url", "root"}
