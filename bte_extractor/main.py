"""
BTE Extractor - FastAPI para parsing de PDFs do Boletim do Trabalho e Emprego.

Endpoints:
    POST /parse   - Parsing de um PDF (multipart)
    GET  /health  - Health check

Uso:
    uvicorn bte_extractor.main:app --host 0.0.0.0 --port 8000
"""

import logging

from fastapi import FastAPI

from . import __version__
from .api import parsing_router
from .config import config

# Logging
logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="BTE Extractor",
    description="Estruturação dos PDFs do BTE em diplomas, capítulos e artigos",
    version=__version__,
)

# Routers
app.include_router(parsing_router)
