"""
server.py - Servidor LSP principal para Tron usando pygls

Propósito:
    Servidor Language Server Protocol que fornece autocomplete e
    formatação para arquivos Tron (.tron) em editores compatíveis.

Componentes principais:
    - TronLanguageServer: Servidor principal com pygls
    - track_document: Reescaneia declarações do documento
    - Event handlers: did_open, did_change, did_close, configuração
    - Features: completion, completionItem/resolve, formatting

Dependências críticas:
    - pygls: Framework LSP
    - tron_lsp.symbol_table: Declarações rastreadas por documento
    - tron_lsp.formatting: Reindentação por chaves

Exemplo de uso:
    python -m tron_lsp
    python -m tron_lsp --tcp --port 2087

Notas de implementação:
    - Comunica via STDIO (entrada/saída padrão) por padrão
    - Rastreamento imediato em did_open/did_change (texto completo)
    - Declarações visíveis entre documentos (tron.completion.crossDocument)
    - Handlers de ciclo de vida nunca derrubam o servidor
    - Erro de chaves na formatação é propagado ao cliente como erro JSON-RPC
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from lsprotocol.types import (
    COMPLETION_ITEM_RESOLVE,
    SHUTDOWN,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_FORMATTING,
    WORKSPACE_DID_CHANGE_CONFIGURATION,
    CompletionItem,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    DidChangeConfigurationParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentFormattingParams,
    TextEdit,
)
from pygls.server import LanguageServer

from tron_lsp import __version__
from tron_lsp.completion import compute_completions, resolve_completion_item
from tron_lsp.formatting import MismatchedBracesError, compute_formatting_edits
from tron_lsp.symbol_table import SymbolTable

# Configuração de logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

CONFIG_SECTION = "tron"


class TronLanguageServer(LanguageServer):
    """
    Servidor LSP especializado para Tron.

    Attributes:
        symbol_table: Declarações rastreadas por URI (estado do servidor)
        open_documents: URIs abertos; completion/formatting ignoram os demais
        completion_shared: Se True, completion usa declarações de todos os
                           documentos abertos (tron.completion.crossDocument)
        formatting_enabled: Flag tron.formatting.enabled
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.symbol_table: SymbolTable = SymbolTable()
        self.open_documents: set[str] = set()
        self.completion_shared: bool = True
        self.formatting_enabled: bool = True


# Instância global do servidor
server = TronLanguageServer("tron-lsp", f"v{__version__}")


def track_document(ls: TronLanguageServer, uri: str) -> None:
    """
    Reescaneia o texto completo do documento e atualiza a tabela de símbolos.

    Tratamento de Erros:
        - Captura todas as exceções para evitar crash do servidor
    """
    try:
        doc = ls.workspace.get_document(uri)
        declarations = ls.symbol_table.update(uri, doc.source)
        ls.open_documents.add(uri)
        logger.debug(
            f"Rastreamento completo: {uri} - "
            f"{len(declarations.variables)} variáveis, "
            f"{len(declarations.functions)} funções"
        )
    except Exception as e:
        logger.error(f"Erro ao rastrear {uri}: {e}", exc_info=True)


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: TronLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Handler para abertura de documento: rastreia declarações imediatamente."""
    logger.info(f"Documento aberto: {params.text_document.uri}")
    track_document(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: TronLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """
    Handler para mudanças no documento.

    O pygls já aplicou as mudanças ao documento do workspace; aqui o
    texto completo é reescaneado (sem parsing incremental).
    """
    logger.info(f"Documento modificado: {params.text_document.uri}")
    track_document(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: TronLanguageServer, params: DidCloseTextDocumentParams) -> None:
    """Handler para fechamento de documento: remove suas declarações."""
    uri = params.text_document.uri
    logger.info(f"Documento fechado: {uri}")
    ls.open_documents.discard(uri)
    ls.symbol_table.forget(uri)


@server.feature(WORKSPACE_DID_CHANGE_CONFIGURATION)
def did_change_configuration(
    ls: TronLanguageServer, params: DidChangeConfigurationParams
) -> None:
    """
    Handler para mudanças na configuração do workspace.

    Lê a seção 'tron' (tron.completion.crossDocument,
    tron.formatting.enabled). settings pode vir como {'tron': {...}}
    ou já ser a seção; valores ausentes ou malformados voltam ao padrão.
    """
    try:
        settings = params.settings
        tron_config = {}
        if isinstance(settings, dict):
            section = settings.get(CONFIG_SECTION, settings)
            if isinstance(section, dict):
                tron_config = section

        ls.completion_shared = _read_bool(tron_config, "completion", "crossDocument", True)
        ls.formatting_enabled = _read_bool(tron_config, "formatting", "enabled", True)

        logger.info(
            f"Configuração atualizada: completion.crossDocument = {ls.completion_shared}, "
            f"formatting.enabled = {ls.formatting_enabled}"
        )
    except Exception as e:
        logger.error(f"Erro ao processar mudança de configuração: {e}", exc_info=True)


def _read_bool(config: dict, group: str, key: str, default: bool) -> bool:
    value = config.get(group, {})
    if not isinstance(value, dict):
        return default
    value = value.get(key, default)
    return value if isinstance(value, bool) else default


@server.feature(
    TEXT_DOCUMENT_COMPLETION,
    CompletionOptions(resolve_provider=True),
)
def completion(ls: TronLanguageServer, params: CompletionParams) -> CompletionList:
    """
    Autocomplete: keywords, variáveis, funções e parâmetros declarados.

    Documento desconhecido → lista vazia.
    """
    uri = params.text_document.uri
    if uri not in ls.open_documents:
        logger.debug(f"Completion para documento desconhecido: {uri}")
        return CompletionList(is_incomplete=False, items=[])

    declarations = ls.symbol_table.query(uri, shared=ls.completion_shared)
    return compute_completions(declarations, params.position)


@server.feature(COMPLETION_ITEM_RESOLVE)
def completion_item_resolve(ls: TronLanguageServer, item: CompletionItem) -> CompletionItem:
    """Resolve é identidade: o item já sai completo de completion."""
    return resolve_completion_item(item)


@server.feature(TEXT_DOCUMENT_FORMATTING)
def formatting(ls: TronLanguageServer, params: DocumentFormattingParams) -> List[TextEdit]:
    """
    Formata o documento inteiro com 4 espaços por nível de chave.

    Documento desconhecido ou formatação desabilitada → [].
    Chaves desbalanceadas → MismatchedBracesError propagado ao cliente.
    """
    uri = params.text_document.uri
    if not ls.formatting_enabled:
        logger.debug(f"Formatação desabilitada, pulando: {uri}")
        return []
    if uri not in ls.open_documents:
        logger.warning(f"Formatação pedida para documento desconhecido: {uri}")
        return []

    doc = ls.workspace.get_document(uri)
    try:
        return compute_formatting_edits(doc.source, params.options)
    except MismatchedBracesError as e:
        logger.warning(f"Formatação abortada para {uri}: {e} ({e.open_blocks} bloco(s) aberto(s))")
        raise


@server.feature(SHUTDOWN)
def shutdown(ls: TronLanguageServer, *args) -> None:
    """Descarta o estado rastreado ao encerrar."""
    logger.info("Encerrando Tron Language Server")
    ls.open_documents.clear()
    ls.symbol_table.dispose()


def main(argv: Optional[List[str]] = None) -> None:
    """
    Ponto de entrada principal do servidor.

    Inicia servidor LSP em modo STDIO (padrão) ou TCP.
    """
    parser = argparse.ArgumentParser(
        description="Tron Language Server",
        prog="tron-lsp",
    )
    parser.add_argument(
        "--tcp",
        action="store_true",
        help="Start server in TCP mode instead of stdio",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to in TCP mode (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=2087,
        help="Port to listen on in TCP mode (default: 2087)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Logging level (default: info)",
    )
    args = parser.parse_args(argv)

    logging.getLogger().setLevel(getattr(logging, args.log_level.upper()))

    logger.info("Iniciando Tron Language Server...")
    logger.info("Python executable: %s", sys.executable)
    logger.info("tron-lsp package: %s", __version__)

    if args.tcp:
        logger.info(f"Modo TCP em {args.host}:{args.port}")
        server.start_tcp(args.host, args.port)
    else:
        server.start_io()


if __name__ == "__main__":
    main()
