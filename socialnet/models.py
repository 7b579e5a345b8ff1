from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    TypeDecorator,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from socialnet.database import Base

ID_LENGTH = 36


def new_id() -> str:
    """Return a fresh identifier (UUID4 in canonical text form)."""
    return str(uuid.uuid4())


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware datetime stored as UTC.

    Aware values are converted to UTC on the way in and naive values are
    taken to be UTC already.  Values read back always carry ``timezone.utc``,
    including on backends such as SQLite that drop the offset.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class TimestampMixin:
    """
    Identifier and audit columns shared by every entity table.

    The values are stamped by the service layer rather than by server
    defaults so that ``created_at == updated_at`` holds exactly on insert.
    """

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True, default=new_id)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)


# ---------------------------------------------------------------------------
# Association table: Role <-> Permission (many-to-many)
# ---------------------------------------------------------------------------
role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column("role_id", String(ID_LENGTH), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
    Column(
        "permission_id",
        String(ID_LENGTH),
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


# ---------------------------------------------------------------------------
# Image
# ---------------------------------------------------------------------------
class Image(TimestampMixin, Base):
    __tablename__ = "images"

    url: Mapped[str] = mapped_column(String(1024), nullable=False)
    public_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    width: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    height: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------
class User(TimestampMixin, Base):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    birthday: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    link_social_media: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    image_id: Mapped[Optional[str]] = mapped_column(
        String(ID_LENGTH), ForeignKey("images.id"), nullable=True, index=True
    )

    # Relationships are lazy="noload"; services work with the foreign key columns.
    # passive_deletes leaves dependent rows to the database on delete.
    image: Mapped[Optional["Image"]] = relationship("Image", lazy="noload")
    posts: Mapped[List["Post"]] = relationship(
        "Post", back_populates="user", lazy="noload", passive_deletes=True
    )


# ---------------------------------------------------------------------------
# Post
# ---------------------------------------------------------------------------
class Post(TimestampMixin, Base):
    __tablename__ = "posts"

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id"), nullable=False, index=True
    )
    image_id: Mapped[Optional[str]] = mapped_column(
        String(ID_LENGTH), ForeignKey("images.id"), nullable=True
    )

    user: Mapped["User"] = relationship("User", back_populates="posts", lazy="noload")
    comments: Mapped[List["Comment"]] = relationship(
        "Comment", back_populates="post", lazy="noload", passive_deletes=True
    )


# ---------------------------------------------------------------------------
# Comment
# ---------------------------------------------------------------------------
class Comment(TimestampMixin, Base):
    __tablename__ = "comments"

    description: Mapped[str] = mapped_column(Text, nullable=False)

    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("users.id"), nullable=False, index=True
    )
    post_id: Mapped[str] = mapped_column(
        String(ID_LENGTH), ForeignKey("posts.id"), nullable=False, index=True
    )

    user: Mapped["User"] = relationship("User", lazy="noload")
    post: Mapped["Post"] = relationship("Post", back_populates="comments", lazy="noload")


# ---------------------------------------------------------------------------
# Permission
# ---------------------------------------------------------------------------
class Permission(TimestampMixin, Base):
    __tablename__ = "permissions"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)


# ---------------------------------------------------------------------------
# Role
# ---------------------------------------------------------------------------
class Role(TimestampMixin, Base):
    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Loaded with selectinload by the role repository; replacing the
    # collection on an unloaded (noload) attribute would not remove old rows.
    permissions: Mapped[List["Permission"]] = relationship(
        "Permission", secondary=role_permissions, lazy="noload"
    )
