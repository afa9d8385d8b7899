"""
Router FastAPI para parsing de PDFs do BTE.

Endpoints:
    POST /parse   - Recebe um PDF e devolve o documento estruturado e validado
    GET  /health  - Health check do modulo
"""

import logging
from typing import Literal

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from ..extraction.models import DownloadedFile
from ..ingestion.schema import validate_document
from ..parsing.bte_parser import BteParser

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Parsing"])

_parser: BteParser | None = None


def get_parser() -> BteParser:
    """Parser compartilhado (sem estado entre chamadas)."""
    global _parser
    if _parser is None:
        _parser = BteParser()
    return _parser


@router.post("/parse")
async def parse_pdf(
    file: UploadFile = File(..., description="PDF do BTE"),
    doc_type: Literal["issue", "offprint"] = Form(..., description="issue (boletim) ou offprint (separata)"),
    year: str = Form(..., description="Ano declarado do documento"),
    number: str = Form(..., description="Número declarado do documento"),
    url: str = Form(..., description="URL de origem do PDF"),
    parser: BteParser = Depends(get_parser),
):
    """Faz o parsing de um PDF e devolve o JSON validado."""
    pdf_content = await file.read()
    if len(pdf_content) == 0:
        raise HTTPException(status_code=400, detail="Arquivo PDF vazio")

    logger.info(f"Recebido PDF: {file.filename} ({len(pdf_content)} bytes) - {doc_type} {year}/{number}")

    doc = DownloadedFile(doc_type=doc_type, year=year, number=number, url=url, content=pdf_content)
    try:
        record = await run_in_threadpool(parser.parse, doc)
    except RuntimeError as e:
        logger.error(f"Falha ao decodificar {year}/{number}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    try:
        validated = validate_document(record)
    except ValidationError as e:
        logger.error(f"Documento {year}/{number} fora do schema: {e.error_count()} erros")
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))

    return validated.to_json_dict()


@router.get("/health")
async def health():
    return {"status": "healthy"}
