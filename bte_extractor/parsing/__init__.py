"""
Parsing - Motor de estruturação do BTE.

Módulos:
    line_reconstructor: Fragmentos posicionados → linhas em ordem de leitura
    noise_filter: Remoção de cabeçalhos, rodapés e paginação
    metadata_extractor: Data ISO e referência canônica
    tree_builder: Árvore root → diploma → chapter → article
    bte_parser: Orquestração do pipeline completo
"""

from .bte_parser import BteParser
from .line_reconstructor import LineReconstructor
from .metadata_extractor import MetadataExtractor, convert_date_to_iso
from .noise_filter import NoiseFilter, is_noise
from .tree_builder import TreeBuilder, classify_line

__all__ = [
    "BteParser",
    "LineReconstructor",
    "MetadataExtractor",
    "convert_date_to_iso",
    "NoiseFilter",
    "is_noise",
    "TreeBuilder",
    "classify_line",
]
