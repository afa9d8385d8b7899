"""
Utils - Funcoes utilitarias comcompartilhadas.
"""

from .text_normalizer import normalize_body_text, normalize_tree

__all__ = [
    "normalize_body_text",
    "normalize_tree",
]
