"""
TreeBuilder - Constrói a árvore hierárquica do BTE a partir das linhas limpas.

Hierarquia: root ⊇ diploma ⊇ chapter ⊇ article.

Classificação por prioridade (primeiro match ganha):
1. Diploma: Portaria, Decreto-Lei, Despacho, Acordo, Contrato, ...
2. Estrutura (chapter): Capítulo/Secção/Anexo + numeral, ou Preâmbulo
3. Artigo: Artigo/Cláusula + número

Uma pilha explícita de nós abertos decide o pai de cada novo nó:
- Diploma: pilha volta a [root]
- Chapter: desempilha até diploma ou root
- Article: desempilha até chapter, diploma ou root

Linhas sem match são conteúdo do nó no topo da pilha (ignoradas sob root).
"""

import logging
import re
from typing import Optional, Sequence

from ..extraction.models import DocumentNode, LogicalLine

logger = logging.getLogger(__name__)

DEFAULT_HEADER_MAX_LENGTH = 250


# === Regexes ===

RE_DIPLOMA = re.compile(
    r"^(Portaria|Decreto-Lei|Despacho|Acordo|Contrato|Convenção|Decisão|Parecer|Aviso)"
    r"\s+(n\.º|número)?",
    re.IGNORECASE,
)

RE_STRUCTURE = re.compile(
    r"^(Capítulo|Secção|Anexo)\s+[IVXLCDM\d]+|^Preâmbulo",
    re.IGNORECASE,
)

RE_ARTICLE = re.compile(r"^(Artigo|Cláusula)\s+\d+", re.IGNORECASE)

RE_PREAMBLE_EXACT = re.compile(r"^Preâmbulo$", re.IGNORECASE)

RE_PREAMBLE_START = re.compile(r"^Preâmbulo", re.IGNORECASE)

RE_NUMBERED_ITEM = re.compile(r"^\d+[.\-]")

RE_SENTENCE_END = re.compile(r"[.:;]$")

# (tipo, regex) em ordem de prioridade
STRUCTURAL_PATTERNS = (
    ("diploma", RE_DIPLOMA),
    ("chapter", RE_STRUCTURE),
    ("article", RE_ARTICLE),
)

# Tipos onde cada novo nó pode ser pendurado
PARENT_KINDS = {
    "chapter": ("diploma", "root"),
    "article": ("chapter", "diploma", "root"),
}


def classify_line(text: str) -> Optional[str]:
    """Retorna "diploma", "chapter", "article" ou None (conteúdo)."""
    for kind, pattern in STRUCTURAL_PATTERNS:
        if pattern.match(text):
            return kind
    return None


class TreeBuilder:
    """Constrói a árvore do documento com uma pilha de nós abertos."""

    def __init__(self, header_max_length: int = DEFAULT_HEADER_MAX_LENGTH):
        self.header_max_length = header_max_length

    def _is_header_continuation(self, text: str) -> bool:
        """
        Uma linha continua o título anterior se:
        - não for vazia e tiver menos de header_max_length caracteres
        - não for diploma, estrutura ou artigo
        - não começar um item numerado ("1." ou "1-")
        - não for Preâmbulo
        - não terminar em pontuação (.:;)
        """
        return (
            len(text) > 0
            and len(text) < self.header_max_length
            and classify_line(text) is None
            and not RE_NUMBERED_ITEM.match(text)
            and not RE_PREAMBLE_START.match(text)
            and not RE_SENTENCE_END.search(text)
        )

    @staticmethod
    def _pop_until(stack: list[DocumentNode], kinds: Sequence[str]) -> None:
        while len(stack) > 1 and stack[-1].kind not in kinds:
            stack.pop()

    @staticmethod
    def _push_child(stack: list[DocumentNode], node: DocumentNode) -> None:
        stack[-1].add_child(node)
        stack.append(node)

    def build(self, lines: Sequence[LogicalLine]) -> DocumentNode:
        """
        Constrói a árvore a partir das linhas já filtradas.

        Args:
            lines: Linhas lógicas após o NoiseFilter

        Returns:
            Nó root da árvore
        """
        root = DocumentNode(kind="root")
        stack: list[DocumentNode] = [root]
        counts = {"diploma": 0, "chapter": 0, "article": 0}

        i = 0
        while i < len(lines):
            text = lines[i].text.strip()
            kind = classify_line(text)

            if kind is None:
                current = stack[-1]
                if current.kind != "root":
                    current.append_text(text)
                i += 1
                continue

            # Títulos partidos em várias linhas
            header = text
            if not RE_PREAMBLE_EXACT.match(text):
                while i + 1 < len(lines):
                    next_text = lines[i + 1].text.strip()
                    if not self._is_header_continuation(next_text):
                        break
                    header = f"{header} {next_text}"
                    i += 1

            node = DocumentNode(kind=kind, header=header)
            if kind == "article":
                node.text = ""

            if kind == "diploma":
                stack = [root]
            else:
                self._pop_until(stack, PARENT_KINDS[kind])
            self._push_child(stack, node)
            counts[kind] += 1
            i += 1

        if not any(counts.values()):
            logger.warning("TreeBuilder: nenhum título estrutural encontrado, árvore vazia")
        logger.info(
            f"TreeBuilder: {counts['diploma']} diplomas, {counts['chapter']} capítulos, "
            f"{counts['article']} artigos"
        )
        return root
