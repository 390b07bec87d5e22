"""
test_symbol_table.py - Testes unitários para SymbolTable

Propósito:
    Validar operações da tabela: update, get, has, query, forget, dispose.
    Inclui visibilidade entre documentos e remoção de declarações obsoletas.
"""

from __future__ import annotations

from tron_lsp.symbol_table import SymbolTable

DOC_A = "file:///ws/a.tron"
DOC_B = "file:///ws/b.tron"


def test_update_get():
    """Armazena e recupera declarações de um documento."""
    table = SymbolTable()
    table.update(DOC_A, "let x : number = 5;")

    cached = table.get(DOC_A)
    assert cached is not None
    assert cached.uri == DOC_A
    assert "x" in cached.declarations.variables
    assert cached.timestamp > 0


def test_get_missing():
    table = SymbolTable()
    assert table.get(DOC_A) is None
    assert table.has(DOC_A) is False


def test_update_empty_text_still_tracks_document():
    table = SymbolTable()
    table.update(DOC_A, "")
    assert table.has(DOC_A) is True
    assert table.query().is_empty()


def test_removed_declaration_disappears_on_next_update():
    """Cada update recalcula o documento do zero."""
    table = SymbolTable()
    table.update(DOC_A, "let x : number = 5;\nlet y : number = 6;")
    table.update(DOC_A, "let y : number = 6;")

    merged = table.query()
    assert "x" not in merged.variables
    assert "y" in merged.variables


def test_query_merges_documents():
    """Declarações de um documento aparecem ao consultar outro."""
    table = SymbolTable()
    table.update(DOC_A, "let x : number = 5;")
    table.update(DOC_B, "fn f(): number { return 1; }")

    merged = table.query(DOC_B)
    assert list(merged.variables) == ["x"]
    assert list(merged.functions) == ["f"]


def test_query_most_recent_document_wins():
    table = SymbolTable()
    table.update(DOC_A, "let x : number = 1;")
    table.update(DOC_B, "let x : string = \"b\";")
    assert table.query().variables["x"].declared_type == "string"

    table.update(DOC_A, "let x : number = 2;")
    assert table.query().variables["x"].raw_text == "let x : number = 2;"


def test_query_not_shared():
    """shared=False considera apenas o documento da consulta."""
    table = SymbolTable()
    table.update(DOC_A, "let x : number = 5;")
    table.update(DOC_B, "let y : number = 6;")

    scoped = table.query(DOC_B, shared=False)
    assert list(scoped.variables) == ["y"]


def test_query_not_shared_unknown_document():
    table = SymbolTable()
    table.update(DOC_A, "let x : number = 5;")
    assert table.query("file:///ws/other.tron", shared=False).is_empty()


def test_query_returns_copy():
    """Mutar o resultado não altera a tabela."""
    table = SymbolTable()
    table.update(DOC_A, "let x : number = 5;")

    merged = table.query()
    merged.variables.clear()
    assert "x" in table.query().variables


def test_forget():
    table = SymbolTable()
    table.update(DOC_A, "let x : number = 5;")
    table.forget(DOC_A)

    assert table.has(DOC_A) is False
    assert table.query().is_empty()


def test_forget_missing():
    """Remover documento inexistente não levanta exceção."""
    table = SymbolTable()
    table.forget(DOC_A)


def test_dispose():
    table = SymbolTable()
    table.update(DOC_A, "let x : number = 5;")
    table.update(DOC_B, "let y : number = 6;")
    assert len(table) == 2

    table.dispose()
    assert len(table) == 0
    assert table.query().is_empty()
