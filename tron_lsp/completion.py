"""
completion.py - Autocomplete para keywords, variáveis e funções Tron

Propósito:
    Monta a lista de completamento a partir de uma lista fixa de keywords
    e das declarações rastreadas pela SymbolTable.

Ordem dos itens:
    1. Keywords (ordem fixa de KEYWORDS), sem detail
    2. Variáveis: label=nome, detail=declaração original
    3. Funções: label=nome, detail=declaração original, seguidas
       imediatamente dos seus parâmetros (Variable, sem detail)

Notas de implementação:
    - Posição do cursor é aceita mas não filtra resultados
    - Sem filtro por prefixo: o editor aplica filtragem textual
    - resolve é identidade (sem enriquecimento tardio)
    - CompletionItemKind: Keyword, Variable, Function
"""

from __future__ import annotations

import logging
from typing import List, Optional

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    Position,
)

from tron_lsp.declarations import DocumentDeclarations

logger = logging.getLogger(__name__)

KEYWORDS: tuple[str, ...] = (
    "break",
    "else if",
    "else",
    "false",
    "for",
    "fn",
    "if",
    "use",
    "null",
    "true",
    "let",
    "while",
    "case",
    "default",
    "switch",
    "number",
    "string",
)


def compute_completions(
    declarations: Optional[DocumentDeclarations],
    position: Optional[Position] = None,
) -> CompletionList:
    """
    Computa lista de completamento.

    Args:
        declarations: Visão mesclada da SymbolTable (None → só keywords)
        position: Posição do cursor (0-based); ignorada

    Returns:
        CompletionList com keywords, variáveis, funções e parâmetros
    """
    items: List[CompletionItem] = [
        CompletionItem(label=keyword, kind=CompletionItemKind.Keyword)
        for keyword in KEYWORDS
    ]

    if declarations:
        for name, variable in declarations.variables.items():
            items.append(
                CompletionItem(
                    label=name,
                    kind=CompletionItemKind.Variable,
                    detail=variable.raw_text,
                )
            )

        for name, function in declarations.functions.items():
            items.append(
                CompletionItem(
                    label=name,
                    kind=CompletionItemKind.Function,
                    detail=function.raw_text,
                )
            )
            for param in function.parameters:
                items.append(
                    CompletionItem(label=param.name, kind=CompletionItemKind.Variable)
                )

    return CompletionList(is_incomplete=False, items=items)


def resolve_completion_item(item: CompletionItem) -> CompletionItem:
    """Retorna o item escolhido sem alterações."""
    return item
