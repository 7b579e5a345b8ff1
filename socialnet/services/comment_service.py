"""
Comment service — CRUD for comments attached to a post.

An update may move a comment to another author or post; the foreign keys
are checked by the database, not by the service.
"""
from socialnet.models import Comment
from socialnet.schemas import CommentCreate, CommentRead, CommentUpdate
from socialnet.services.base import CrudService


class CommentService(CrudService[Comment, CommentCreate, CommentUpdate, CommentRead]):
    create_schema = CommentCreate
    update_schema = CommentUpdate
    read_schema = CommentRead
