from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from socialnet.models import Comment, Image, Permission, Post, Role, User
from socialnet.repository import repository_for
from socialnet.services.comment_service import CommentService
from socialnet.services.image_service import ImageService
from socialnet.services.permission_service import PermissionService
from socialnet.services.post_service import PostService
from socialnet.services.role_service import RoleService
from socialnet.services.user_service import UserService


class ServiceRegistry:
    """
    Composition root: one repository per entity, each handed to its service.

    Every service shares *session*, so work done through any of them lands
    in the same transaction::

        async with session_scope() as session:
            services = ServiceRegistry(session)
            user = await services.users.create({"email": "a@x.com", "password": "pw"})
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

        permission_repo = repository_for(session, Permission)

        self.users = UserService(repository_for(session, User))
        self.images = ImageService(repository_for(session, Image))
        self.posts = PostService(repository_for(session, Post))
        self.comments = CommentService(repository_for(session, Comment))
        self.permissions = PermissionService(permission_repo)
        self.roles = RoleService(
            repository_for(session, Role, options=[selectinload(Role.permissions)]),
            permission_repo,
        )
