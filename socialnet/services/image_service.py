from socialnet.models import Image
from socialnet.schemas import ImageCreate, ImageRead, ImageUpdate
from socialnet.services.base import CrudService


class ImageService(CrudService[Image, ImageCreate, ImageUpdate, ImageRead]):
    """CRUD for uploaded image metadata (the binary lives with the image host)."""

    create_schema = ImageCreate
    update_schema = ImageUpdate
    read_schema = ImageRead
