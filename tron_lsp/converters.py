"""
converters.py - Conversão entre offsets de texto e tipos LSP

Propósito:
    Converter posições do texto-fonte para Position/Range do protocolo e
    montar o TextEdit de substituição do documento inteiro.

Componentes principais:
    - offset_to_position: offset (str) → Position
    - full_document_range: Range do início ao fim do texto
    - replace_document_edit: TextEdit que substitui o documento inteiro

Notas de implementação:
    - Quebras de linha reconhecidas: \\r\\n, \\r e \\n
    - Coordenadas LSP são 0-based (line, character)
    - character é contado em unidades UTF-16, como exige o protocolo
"""

from __future__ import annotations

import re

from lsprotocol.types import Position, Range, TextEdit

_RE_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def utf16_length(text: str) -> int:
    """Comprimento em unidades de código UTF-16."""
    return len(text.encode("utf-16-le")) // 2


def offset_to_position(text: str, offset: int) -> Position:
    """Converte um offset no texto para Position LSP."""
    offset = max(0, min(offset, len(text)))
    lines = _RE_LINE_BREAK.split(text[:offset])
    return Position(line=len(lines) - 1, character=utf16_length(lines[-1]))


def full_document_range(text: str) -> Range:
    """Range cobrindo do offset 0 até o fim do texto."""
    return Range(
        start=Position(line=0, character=0),
        end=offset_to_position(text, len(text)),
    )


def replace_document_edit(text: str, new_text: str) -> TextEdit:
    """TextEdit único que substitui `text` inteiro por `new_text`."""
    return TextEdit(range=full_document_range(text), new_text=new_text)
