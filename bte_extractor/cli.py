"""
CLI da ferramenta de extração do BTE.

Uso:
    bte-extract crawl --limit 10
    bte-extract crawl --output-dir /data/bte
    bte-extract parse bte5_2024.pdf --type issue --year 2024 --number 5 \\
        --url https://bte.gep.msess.gov.pt/completos/2024/bte5_2024.pdf
    bte-extract parse sep3_2024.pdf --type offprint --year 2024 --number 3 --url ... --stdout
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .config import config
from .crawler import BteCrawler
from .extraction.models import DownloadedFile
from .ingestion import DocumentStorage, IngestionRunner, validate_document
from .parsing import BteParser

logger = logging.getLogger("bte_extractor")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bte-extract",
        description="Extração estruturada do Boletim do Trabalho e Emprego",
    )
    parser.add_argument("--log-level", default=config.log_level, help="Nível de log (default: %(default)s)")
    sub = parser.add_subparsers(dest="command", required=True)

    crawl = sub.add_parser("crawl", help="Baixa e processa todos os boletins e separatas")
    crawl.add_argument("--limit", type=int, default=None, help="Número máximo de documentos")
    crawl.add_argument("--output-dir", default=config.output_dir, help="Diretório de saída")

    parse = sub.add_parser("parse", help="Processa um PDF local")
    parse.add_argument("pdf", type=Path, help="Caminho do PDF")
    parse.add_argument("--type", dest="doc_type", choices=["issue", "offprint"], required=True)
    parse.add_argument("--year", required=True)
    parse.add_argument("--number", required=True)
    parse.add_argument("--url", required=True, help="URL de origem do PDF")
    parse.add_argument("--output-dir", default=config.output_dir, help="Diretório de saída")
    parse.add_argument("--stdout", action="store_true", help="Imprime o JSON em vez de gravar")

    return parser


def run_crawl(limit: Optional[int], output_dir: str) -> int:
    crawler = BteCrawler()
    runner = IngestionRunner(BteParser(), DocumentStorage(output_dir))

    report = runner.run(crawler.crawl_all(limit), limit=limit)

    print("-" * 50)
    print(" Relatório final")
    print("-" * 50)
    print(f" Total encontrados: {report.total}")
    print(f" Gravados:          {report.success}")
    print(f" Erros:             {report.errors}")
    print(f" Diretório:         {Path(output_dir).resolve()}")
    print(f" Tempo:             {report.duration_s:.1f}s")
    print("-" * 50)
    return 0 if report.errors == 0 else 1


def run_parse(args: argparse.Namespace) -> int:
    doc = DownloadedFile(
        doc_type=args.doc_type,
        year=args.year,
        number=args.number,
        url=args.url,
        content=args.pdf.read_bytes(),
    )
    try:
        validated = validate_document(BteParser().parse(doc))
    except (RuntimeError, ValidationError) as e:
        logger.error(f"Falha ao processar {args.pdf}: {e}")
        return 1

    if args.stdout:
        print(json.dumps(validated.to_json_dict(), ensure_ascii=False, indent=2))
    else:
        file_path = DocumentStorage(args.output_dir).save(validated, args.year, args.number)
        logger.info(f"Gravado: {file_path}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "crawl":
        return run_crawl(args.limit, args.output_dir)
    return run_parse(args)


if __name__ == "__main__":
    sys.exit(main())
