"""
tron_lsp - Language Server Protocol para a linguagem Tron

Propósito:
    Servidor LSP que fornece autocomplete de símbolos e formatação de
    documentos .tron no VSCode e outros editores compatíveis com LSP.

Componentes principais:
    - server: Servidor principal usando pygls
    - declarations / symbol_table: Rastreamento de declarações let/fn
    - completion: Keywords + símbolos declarados
    - formatting: Reindentação por aninhamento de chaves
    - cli: Scaffolding de projetos (tron create/build/start)

Dependências críticas:
    - pygls: Framework LSP
    - lsprotocol: Tipos do protocolo

Exemplo de uso:
    python -m tron_lsp

Notas de implementação:
    - Comunica via STDIO com o cliente VSCode
    - Extração best-effort por regex, sem parser
"""
from importlib.metadata import PackageNotFoundError, version as _pkg_version
from pathlib import Path
import re


def _read_version_from_pyproject() -> str:
    pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:
        return "0.0.0"
    match = re.search(r'(?m)^version = "([^"]+)"\s*$', text)
    return match.group(1) if match else "0.0.0"


try:
    __version__ = _pkg_version("tron-lsp")
except PackageNotFoundError:
    __version__ = _read_version_from_pyproject()

__all__ = ["server", "completion", "formatting", "symbol_table"]
