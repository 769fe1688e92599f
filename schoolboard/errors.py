class StoreError(Exception):
    """Raised by a record store when the backing service fails.

    Handlers turn this into an HTTP 500 response. Missing records are not
    errors: lookups return ``None`` and updates/deletes on absent ids are
    no-ops.
    """
