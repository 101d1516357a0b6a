"""PSX portfolio ledger: transactions, holdings and realized P/L."""

__version__ = "0.1.0"
