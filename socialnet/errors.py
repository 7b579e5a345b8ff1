"""
Service-layer exceptions.

Only missing records are signalled by the services themselves.  Storage
constraint violations (duplicate email, dangling foreign key, ...) surface
as ``sqlalchemy.exc.IntegrityError`` straight from the flush and are left
for the caller to handle.
"""


class ServiceError(Exception):
    """Base class for predictable service-layer exceptions."""


class NotFoundError(ServiceError):
    """Raised when an update/delete targets an identifier that does not exist."""

    def __init__(self, entity: str, entity_id: str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")
