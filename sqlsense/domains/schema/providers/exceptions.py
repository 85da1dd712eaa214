"""Custom exceptions for the schema layer."""


class SchemaFetchError(ConnectionError):
    """Exception raised when schema metadata cannot be fetched or is malformed."""

    def __init__(
        self,
        connection_id: str | None,
        database: str | None = None,
        *,
        reason: str | None = None,
    ):
        self.connection_id = connection_id
        self.database = database
        self.reason = reason
        target = f"{connection_id}/{database}" if database else str(connection_id)
        message = f"Failed to fetch schema for {target}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
