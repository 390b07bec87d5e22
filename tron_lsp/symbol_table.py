"""
symbol_table.py - Tabela de símbolos por documento

Propósito:
    Mantém as declarações extraídas de cada documento aberto e expõe uma
    visão mesclada (variáveis e funções por nome) para o autocomplete.

Componentes principais:
    - CachedDeclarations: declarações de um documento com timestamp
    - SymbolTable: estado do servidor (update, query, forget, dispose)

Notas de implementação:
    - Cada update recalcula as declarações do documento do zero, então
      declarações removidas do texto somem na próxima mudança
    - query() mescla todos os documentos por padrão (visibilidade entre
      documentos); o documento atualizado mais recentemente vence em
      caso de nome repetido
    - Uma instância por servidor; nada de estado global de módulo
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

from tron_lsp.declarations import DocumentDeclarations, scan_declarations

logger = logging.getLogger(__name__)


@dataclass
class CachedDeclarations:
    """Declarações de um documento com timestamp do último scan."""

    uri: str
    declarations: DocumentDeclarations
    timestamp: float = field(default_factory=time.time)


class SymbolTable:
    """Declarações rastreadas por URI de documento."""

    def __init__(self):
        self._documents: Dict[str, CachedDeclarations] = {}

    def update(self, uri: str, text: str) -> DocumentDeclarations:
        """Reescaneia o texto completo do documento e substitui suas declarações."""
        declarations = scan_declarations(text)
        # Reinsere no fim: a ordem do dict é a ordem de atualização
        self._documents.pop(uri, None)
        self._documents[uri] = CachedDeclarations(uri=uri, declarations=declarations)
        logger.debug(
            f"Símbolos atualizados para {uri}: "
            f"{len(declarations.variables)} variáveis, "
            f"{len(declarations.functions)} funções"
        )
        return declarations

    def get(self, uri: str) -> Optional[CachedDeclarations]:
        """Retorna declarações em cache para o documento, ou None."""
        return self._documents.get(uri)

    def has(self, uri: str) -> bool:
        """Verifica se o documento está sendo rastreado."""
        return uri in self._documents

    def query(self, uri: Optional[str] = None, shared: bool = True) -> DocumentDeclarations:
        """
        Retorna a visão mesclada das declarações.

        Args:
            uri: Documento que originou a consulta
            shared: Se True, mescla todos os documentos rastreados;
                    se False, considera apenas `uri`

        Returns:
            DocumentDeclarations novo (as tabelas internas não são expostas)
        """
        merged = DocumentDeclarations()

        if shared:
            sources = list(self._documents.values())
        else:
            cached = self._documents.get(uri) if uri else None
            sources = [cached] if cached else []

        for cached in sources:
            merged.variables.update(cached.declarations.variables)
            merged.functions.update(cached.declarations.functions)

        return merged

    def forget(self, uri: str) -> None:
        """Remove as declarações de um documento (ex: ao fechar)."""
        if self._documents.pop(uri, None):
            logger.info(f"Símbolos removidos para: {uri}")

    def dispose(self) -> None:
        """Descarta todo o estado rastreado."""
        count = len(self._documents)
        self._documents.clear()
        logger.info(f"Tabela de símbolos descartada ({count} documentos)")

    def __len__(self) -> int:
        return len(self._documents)
