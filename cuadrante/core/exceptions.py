"""Error taxonomy shared by the store, the services and the API layer."""


class CuadranteError(Exception):
    """Base class for every domain error."""


class NotFound(CuadranteError):
    """The target record no longer exists."""

    def __init__(self, table: str, record_id=None, message: str | None = None):
        self.table = table
        self.record_id = record_id
        super().__init__(message or f"{table}: {record_id} not found")


class PersistenceError(CuadranteError):
    """A write to (or read from) the record store failed. Never retried automatically."""


class MalformedLedgerError(CuadranteError):
    """A vacation-day payload is unparsable as JSON and as legacy text."""

    def __init__(self, raw: str):
        self.raw = raw
        preview = raw if len(raw) <= 60 else raw[:57] + "..."
        super().__init__(f"Unparsable vacation ledger: {preview!r}")


class InvalidLocation(CuadranteError):
    def __init__(self, location: str):
        self.location = location
        super().__init__(f"Unknown location: {location!r}")


class ValidationError(CuadranteError):
    """Input rejected by a domain rule (empty name, bad time window ...)."""
