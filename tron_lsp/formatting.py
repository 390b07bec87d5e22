"""
formatting.py - Formatação de documentos Tron por aninhamento de chaves

Propósito:
    Reindenta cada linha do documento com 4 espaços por nível, com o
    nível inferido apenas pelas chaves. Independe da tabela de símbolos.

Regras por linha (após strip):
    - Linha vazia → "" (sem indentação)
    - Termina com "{" → indentação atual; empilha atual + 4 espaços
    - Exatamente "}" → desempilha primeiro, usa a nova indentação atual
    - Demais linhas → indentação atual

Notas de implementação:
    - Quebras aceitas: \\n e \\r\\n; saída sempre unida com \\n
    - "} else {" termina com "{" e só empilha (não desempilha); a
      pilha fica dessincronizada nesse caso, comportamento aceito
    - Pilha não vazia ao final → MismatchedBracesError, sem saída parcial
    - tab_size das FormattingOptions é ignorado: sempre 4 espaços
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from lsprotocol.types import FormattingOptions, TextEdit

from tron_lsp.converters import replace_document_edit

logger = logging.getLogger(__name__)

INDENT_UNIT = "    "

_RE_LINE_SPLIT = re.compile(r"\r?\n")


class MismatchedBracesError(ValueError):
    """Documento com mais "{" do que "}" isolados."""

    def __init__(self, open_blocks: int):
        super().__init__("Mismatched curly braces in the document")
        self.open_blocks = open_blocks


def format_tron_document(text: str, options: Optional[FormattingOptions] = None) -> str:
    """
    Reformata o documento inteiro.

    Args:
        text: Texto bruto do documento
        options: FormattingOptions do cliente (ignoradas)

    Returns:
        Texto reformatado, linhas unidas com "\\n"

    Raises:
        MismatchedBracesError: se sobrar bloco aberto ao final
    """
    indent_stack: List[str] = []
    formatted_lines: List[str] = []

    for line in _RE_LINE_SPLIT.split(text):
        trimmed = line.strip()
        if not trimmed:
            formatted_lines.append("")
            continue

        indentation = indent_stack[-1] if indent_stack else ""
        if trimmed.endswith("{"):
            indent_stack.append(indentation + INDENT_UNIT)
        elif trimmed == "}":
            if indent_stack:
                indent_stack.pop()
            indentation = indent_stack[-1] if indent_stack else ""

        formatted_lines.append(indentation + trimmed)

    if indent_stack:
        raise MismatchedBracesError(len(indent_stack))

    return "\n".join(formatted_lines)


def compute_formatting_edits(
    source: str, options: Optional[FormattingOptions] = None
) -> List[TextEdit]:
    """
    Computa o edit de formatação do documento.

    Returns:
        Lista com um único TextEdit substituindo o documento inteiro

    Raises:
        MismatchedBracesError: propagado de format_tron_document
    """
    formatted = format_tron_document(source, options)
    return [replace_document_edit(source, formatted)]
