from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# --- Shared ---

class RecordBase(BaseModel):
    """Fields every stored record carries."""

    id: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class CreateBase(BaseModel):
    # Optional caller-supplied identifier; generated when omitted.
    id: str | None = Field(None, max_length=36)


# --- Image ---

class ImageBase(BaseModel):
    url: str = Field(max_length=1024)
    public_id: str | None = Field(None, max_length=255)
    width: int | None = None
    height: int | None = None


class ImageCreate(CreateBase, ImageBase):
    pass


class ImageUpdate(BaseModel):
    url: str | None = Field(None, max_length=1024)
    public_id: str | None = Field(None, max_length=255)
    width: int | None = None
    height: int | None = None


class ImageRead(RecordBase, ImageBase):
    pass


# --- User ---

class UserBase(BaseModel):
    email: str = Field(max_length=255)
    password: str = Field(max_length=255, repr=False)
    name: str | None = Field(None, max_length=150)
    birthday: datetime | None = None
    link_social_media: str | None = Field(None, max_length=512)
    bio: str | None = None
    image_id: str | None = None


class UserCreate(CreateBase, UserBase):
    pass


class UserUpdate(BaseModel):
    email: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=255, repr=False)
    name: str | None = Field(None, max_length=150)
    birthday: datetime | None = None
    link_social_media: str | None = Field(None, max_length=512)
    bio: str | None = None
    image_id: str | None = None


class UserRead(RecordBase, UserBase):
    pass


# --- Post ---

class PostBase(BaseModel):
    description: str | None = None
    user_id: str
    image_id: str | None = None


class PostCreate(CreateBase, PostBase):
    pass


class PostUpdate(BaseModel):
    description: str | None = None
    image_id: str | None = None


class PostRead(RecordBase, PostBase):
    pass


# --- Comment ---

class CommentBase(BaseModel):
    description: str
    user_id: str
    post_id: str


class CommentCreate(CreateBase, CommentBase):
    pass


class CommentUpdate(BaseModel):
    description: str | None = None
    user_id: str | None = None
    post_id: str | None = None


class CommentRead(RecordBase, CommentBase):
    pass


# --- Permission ---

class PermissionBase(BaseModel):
    name: str = Field(max_length=100)
    description: str | None = Field(None, max_length=500)


class PermissionCreate(CreateBase, PermissionBase):
    pass


class PermissionUpdate(BaseModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=500)


class PermissionRead(RecordBase, PermissionBase):
    pass


# --- Role ---

class RoleBase(BaseModel):
    name: str = Field(max_length=100)
    description: str | None = Field(None, max_length=500)


class RoleCreate(CreateBase, RoleBase):
    permission_ids: list[str] = []


class RoleUpdate(BaseModel):
    name: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=500)
    permission_ids: list[str] | None = None


class RoleRead(RecordBase, RoleBase):
    permission_ids: list[str] = []
