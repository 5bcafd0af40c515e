"""Double-entry bookkeeping ledger with a SQL record store and a flat-file fallback."""

__version__ = "0.1.0"


# Resolve the CLI entry point lazily
def __getattr__(name):
    if name == "main":
        from ledgerbook.cli.main import main

        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
