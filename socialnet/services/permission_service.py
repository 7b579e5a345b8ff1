from socialnet.models import Permission
from socialnet.schemas import PermissionCreate, PermissionRead, PermissionUpdate
from socialnet.services.base import CrudService


class PermissionService(CrudService[Permission, PermissionCreate, PermissionUpdate, PermissionRead]):
    create_schema = PermissionCreate
    update_schema = PermissionUpdate
    read_schema = PermissionRead
