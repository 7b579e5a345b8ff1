"""
User service — CRUD for the User entity.

Email uniqueness is enforced by the ``users.email`` unique constraint, not
here; a duplicate surfaces as ``IntegrityError`` from ``create``/``update``.
Deleting a user leaves their posts and comments alone.
"""
from socialnet.models import User
from socialnet.schemas import UserCreate, UserRead, UserUpdate
from socialnet.services.base import CrudService


class UserService(CrudService[User, UserCreate, UserUpdate, UserRead]):
    create_schema = UserCreate
    update_schema = UserUpdate
    read_schema = UserRead
