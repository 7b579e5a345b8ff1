from socialnet.models import Post
from socialnet.schemas import PostCreate, PostRead, PostUpdate
from socialnet.services.base import CrudService


class PostService(CrudService[Post, PostCreate, PostUpdate, PostRead]):
    """
    CRUD for posts.

    The author (``user_id``) is fixed at creation; updates may only change
    the description and the attached image.
    """

    create_schema = PostCreate
    update_schema = PostUpdate
    read_schema = PostRead
