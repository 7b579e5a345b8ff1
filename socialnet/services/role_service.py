"""
Role service — CRUD for roles and the permissions they grant.

A role's permissions are addressed by id.  On create and update the ids are
resolved through the permission repository; any id that does not exist
raises ``NotFoundError`` for ``Permission`` before anything is written.
When ``permission_ids`` is present in a patch the whole set is replaced;
an explicit ``None`` empties it.
"""
import logging
from typing import Any

from socialnet.errors import NotFoundError
from socialnet.models import Permission, Role
from socialnet.repository import SqlAlchemyRepository
from socialnet.schemas import RoleCreate, RoleRead, RoleUpdate
from socialnet.services.base import CrudService

logger = logging.getLogger(__name__)


class RoleService(CrudService[Role, RoleCreate, RoleUpdate, RoleRead]):
    create_schema = RoleCreate
    update_schema = RoleUpdate
    read_schema = RoleRead

    def __init__(
        self,
        repository: SqlAlchemyRepository[Role, str],
        permission_repository: SqlAlchemyRepository[Permission, str],
    ) -> None:
        super().__init__(repository)
        self.permission_repository = permission_repository

    async def _resolve_permissions(self, permission_ids: list[str]) -> list[Permission]:
        # Duplicates collapse; order follows the first occurrence.
        wanted = list(dict.fromkeys(permission_ids))
        found = {p.id: p for p in await self.permission_repository.get_many(wanted)}
        for permission_id in wanted:
            if permission_id not in found:
                logger.warning("Role references unknown permission %s", permission_id)
                raise NotFoundError(self.permission_repository.entity_name, permission_id)
        return [found[permission_id] for permission_id in wanted]

    def _to_record(self, row: Role) -> RoleRead:
        return RoleRead.model_validate(
            {
                "id": row.id,
                "name": row.name,
                "description": row.description,
                "created_at": row.created_at,
                "updated_at": row.updated_at,
                "permission_ids": [p.id for p in row.permissions],
            }
        )

    async def _build_row(self, data: RoleCreate) -> Role:
        return Role(
            name=data.name,
            description=data.description,
            permissions=await self._resolve_permissions(data.permission_ids),
        )

    async def _apply_changes(self, row: Role, changes: dict[str, Any]) -> None:
        if "permission_ids" in changes:
            # An explicit null clears the set, like any other optional field.
            permission_ids = changes.pop("permission_ids") or []
            row.permissions = await self._resolve_permissions(permission_ids)
        await super()._apply_changes(row, changes)
