"""rentbook: tenant, electricity billing and rent collection ledger."""

__version__ = "0.1.0"
