"""
BTE Extractor - Conversão dos PDFs do Boletim do Trabalho e Emprego
em árvores hierárquicas (diplomas, capítulos, artigos).
"""

__version__ = "1.0.0"
