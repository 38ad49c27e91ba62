"""Package version, importable without pulling in the server stack."""

__version__ = "0.1.0"
