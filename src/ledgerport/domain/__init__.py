"""Domain layer for ledgerport."""

_EXPORTS = {
    "detect_field": "ledgerport.domain.field_mapper",
    "map_headers": "ledgerport.domain.field_mapper",
    "suggest_mapping": "ledgerport.domain.field_mapper",
    "TransactionIdFactory": "ledgerport.domain.normalizer",
    "ensure_transaction_ids": "ledgerport.domain.normalizer",
    "normalize": "ledgerport.domain.normalizer",
    "normalize_rows": "ledgerport.domain.normalizer",
    "validate_transaction": "ledgerport.domain.normalizer",
    "ImportFormatService": "ledgerport.domain.import_format",
    "compute_signature": "ledgerport.domain.import_format",
    "ImportService": "ledgerport.domain.importer",
}

__all__ = list(_EXPORTS)


# Services are imported lazily: the database and parsing packages import
# domain submodules, and the services import those packages in turn.
def __getattr__(name):
    if name in _EXPORTS:
        from importlib import import_module
        return getattr(import_module(_EXPORTS[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
