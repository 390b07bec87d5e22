"""
Ponto de entrada para executar o servidor como módulo.

Uso:
    python -m tron_lsp
    python -m tron_lsp --tcp --port 2087
"""

from tron_lsp.server import main

if __name__ == "__main__":
    main()
