"""
declarations.py - Extração de declarações Tron via regex

Propósito:
    Escaneia o texto completo de um documento .tron e extrai declarações
    de variáveis (let) e funções (fn) para alimentar o autocomplete.

Componentes principais:
    - VariableDeclaration, FunctionDeclaration, Parameter: registros extraídos
    - DocumentDeclarations: resultado de um scan (tabelas por nome)
    - scan_declarations: função pura texto → DocumentDeclarations

Formatos reconhecidos:
    let nome : tipo = expressao;
    fn nome(a: tipo, b: tipo): tipo { corpo }

Notas de implementação:
    - Não é um parser: scan único por regex, best-effort
    - Corpo de função é não-guloso: o primeiro '}' encerra o match,
      então corpos com chaves aninhadas são truncados
    - Declarações malformadas são ignoradas silenciosamente
    - Nome repetido no mesmo texto: a última ocorrência vence
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List

logger = logging.getLogger(__name__)

IDENTIFIER = r"[a-zA-Z_][a-zA-Z0-9_]*"

_RE_VARIABLE = re.compile(
    rf"let\s+({IDENTIFIER})\s*:\s*({IDENTIFIER})\s*=\s*([^;]*);"
)
_RE_FUNCTION = re.compile(
    rf"fn\s+({IDENTIFIER})\s*\(([^)]*)\)\s*:\s*({IDENTIFIER})\s*\{{.*?\}}",
    re.DOTALL,
)
_RE_PARAMETER = re.compile(rf"\s*({IDENTIFIER})\s*:\s*({IDENTIFIER})\s*")


@dataclass(frozen=True)
class Parameter:
    """Parâmetro de função: `nome: tipo`."""

    name: str
    declared_type: str


@dataclass(frozen=True)
class VariableDeclaration:
    raw_text: str
    declared_type: str
    initializer: str


@dataclass(frozen=True)
class FunctionDeclaration:
    raw_text: str
    parameters: List[Parameter] = field(default_factory=list)
    return_type: str = ""


@dataclass
class DocumentDeclarations:
    """Declarações extraídas de um único texto, indexadas por nome."""

    variables: Dict[str, VariableDeclaration] = field(default_factory=dict)
    functions: Dict[str, FunctionDeclaration] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.variables and not self.functions


def scan_declarations(text: str) -> DocumentDeclarations:
    """
    Extrai todas as declarações de variáveis e funções do texto.

    Args:
        text: Texto completo do documento (não precisa ser válido)

    Returns:
        DocumentDeclarations com variáveis e funções na ordem textual
    """
    result = DocumentDeclarations()

    for match in _RE_VARIABLE.finditer(text):
        name, declared_type, initializer = match.groups()
        result.variables[name] = VariableDeclaration(
            raw_text=match.group(0),
            declared_type=declared_type,
            initializer=initializer,
        )

    for match in _RE_FUNCTION.finditer(text):
        name, params_text, return_type = match.groups()
        result.functions[name] = FunctionDeclaration(
            raw_text=match.group(0),
            parameters=extract_parameters(params_text),
            return_type=return_type,
        )

    logger.debug(
        f"Scan concluído: {len(result.variables)} variáveis, "
        f"{len(result.functions)} funções"
    )
    return result


def extract_parameters(params_text: str) -> List[Parameter]:
    """Extrai pares `nome: tipo` da lista de parâmetros, da esquerda para a direita."""
    return [
        Parameter(name=m.group(1), declared_type=m.group(2))
        for m in _RE_PARAMETER.finditer(params_text)
    ]
