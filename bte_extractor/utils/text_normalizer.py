"""
Text Normalizer - Limpeza do texto dos nós da árvore.

Repara artefatos de quebra de linha do PDF no corpo de cada nó:
1. Junta letras separadas por hífen com espaços: "traba - lho" → "trabalho"
2. Junta hifenização de fim de linha: "traba-\\nlho" → "trabalho"
3. Substitui newlines por espaço, exceto antes de itens enumerados
   ("1)", "2.", "a)", "b -")
4. Colapsa whitespace repetido
5. Strip final

Idempotente: normalizar texto já normalizado não o altera.
"""

import re

from ..extraction.models import DocumentNode

# Letra Unicode (equivalente a \p{L})
_LETTER = r"[^\W\d_]"

_SPACED_HYPHEN_RE = re.compile(rf"(?<={_LETTER})\s+-\s+(?={_LETTER})")

_HYPHEN_BREAK_RE = re.compile(rf"(?<={_LETTER})-\s*[\r\n]+\s*(?={_LETTER})")

# Newline que NÃO antecede um marcador de item ("1)", "12.", "a -", "b)")
_SOFT_NEWLINE_RE = re.compile(r"\n(?!\s*(?:\d+|[a-z])\s*[-–.)])", re.IGNORECASE)

_MULTI_WHITESPACE_RE = re.compile(r"\s{2,}")


def normalize_body_text(text: str) -> str:
    """
    Normaliza o corpo de texto de um nó.

    Args:
        text: Texto com as linhas unidas por newline

    Returns:
        Texto normalizado
    """
    if not text:
        return text

    result = _SPACED_HYPHEN_RE.sub("", text)
    result = _HYPHEN_BREAK_RE.sub("", result)
    result = _SOFT_NEWLINE_RE.sub(" ", result)
    result = _MULTI_WHITESPACE_RE.sub(" ", result)
    return result.strip()


def normalize_tree(node: DocumentNode) -> DocumentNode:
    """Normaliza em pré-ordem o texto de todos os nós (in place). Retorna o próprio nó."""
    for current in node.iter_nodes():
        if current.text:
            current.text = normalize_body_text(current.text)
    return node
