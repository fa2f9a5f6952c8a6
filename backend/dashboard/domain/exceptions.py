"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class RecordStoreError(Exception):
    """Raised when the backend rejects a read or write.

    Storage-agnostic — repositories wrap their driver errors in this.
    """

    def __init__(self, operation: str, table: str, message: str):
        self.operation = operation
        self.table = table
        self.message = message
        super().__init__(f"{operation} on '{table}' failed: {message}")


class ProtectedFieldError(Exception):
    """Raised when a generic field update targets a field it may not touch."""

    def __init__(self, entity_type: str, field: str):
        self.entity_type = entity_type
        self.field = field
        super().__init__(f"{entity_type}.{field} cannot be changed by a field update")


class NoPreviousPeriodDataError(Exception):
    """Raised when a rollover finds nothing to copy in the prior period."""

    def __init__(self, mes: int, anio: int):
        self.mes = mes
        self.anio = anio
        super().__init__("No hay datos del mes anterior")
