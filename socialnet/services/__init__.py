# Services package.
#
# One class per entity, all built on ``CrudService`` (list / get_by_id /
# create / update / delete):
#
#   user_service        — User
#   image_service       — Image
#   post_service        — Post
#   comment_service     — Comment
#   permission_service  — Permission
#   role_service        — Role (+ permission assignment)
#
# Services receive their repositories through the constructor; the
# ``ServiceRegistry`` composition root wires them over one AsyncSession so
# the caller controls the transaction boundary via ``session_scope``.
from socialnet.services.base import CrudService
from socialnet.services.comment_service import CommentService
from socialnet.services.image_service import ImageService
from socialnet.services.permission_service import PermissionService
from socialnet.services.post_service import PostService
from socialnet.services.registry import ServiceRegistry
from socialnet.services.role_service import RoleService
from socialnet.services.user_service import UserService

__all__ = [
    "CrudService",
    "CommentService",
    "ImageService",
    "PermissionService",
    "PostService",
    "RoleService",
    "ServiceRegistry",
    "UserService",
]
