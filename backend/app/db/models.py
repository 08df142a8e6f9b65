from sqlalchemy import Column, Integer, String, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
from app.core.database import Base


class User(Base):
    """Hotel owner account. Each user is one hotel."""
    __tablename__ = "wp_users"

    ID = Column(Integer, primary_key=True)
    user_login = Column(String(60), nullable=False, default="")
    display_name = Column(String(250), nullable=False, default="")

    # Relationships
    metas = relationship("UserMeta", back_populates="user")
    posts = relationship("Post", back_populates="author")


class UserMeta(Base):
    """Key/value attributes of a hotel (address, coordinates, phone, ...)"""
    __tablename__ = "wp_usermeta"

    umeta_id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("wp_users.ID"), nullable=False, default=0)
    meta_key = Column(String(255))
    meta_value = Column(Text)

    user = relationship("User", back_populates="metas")

    # Indexes
    __table_args__ = (
        Index("idx_usermeta_user_id", "user_id"),
        Index("idx_usermeta_meta_key", "meta_key"),
    )


class Post(Base):
    """Content authored by a hotel: rooms (post_type='room') and reviews (post_type='review')"""
    __tablename__ = "wp_posts"

    ID = Column(Integer, primary_key=True)
    post_author = Column(Integer, ForeignKey("wp_users.ID"), nullable=False, default=0)
    post_title = Column(Text, nullable=False, default="")
    post_type = Column(String(20), nullable=False, default="post")

    author = relationship("User", back_populates="posts")
    metas = relationship("PostMeta", back_populates="post")

    __table_args__ = (
        Index("idx_posts_type_author", "post_type", "post_author"),
    )


class PostMeta(Base):
    """Key/value attributes of a post (room price, surface, ... or review rating)"""
    __tablename__ = "wp_postmeta"

    meta_id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey("wp_posts.ID"), nullable=False, default=0)
    meta_key = Column(String(255))
    meta_value = Column(Text)

    post = relationship("Post", back_populates="metas")

    __table_args__ = (
        Index("idx_postmeta_post_id", "post_id"),
        Index("idx_postmeta_meta_key", "meta_key"),
    )


# Post types
ROOM_POST_TYPE = "room"
REVIEW_POST_TYPE = "review"

# Required hotel attributes stored in wp_usermeta
ADDRESS_META_KEYS = ("address_1", "address_2", "address_city", "address_zip", "address_country")
HOTEL_META_KEYS = ADDRESS_META_KEYS + ("geo_lat", "geo_lng", "coverImage", "phone")

# Room attributes stored in wp_postmeta
PRICE_META_KEY = "price"
SURFACE_META_KEY = "surface"
TYPE_META_KEY = "type"
BEDROOMS_META_KEY = "bedrooms_count"
BATHROOMS_META_KEY = "bathrooms_count"

# Review attribute stored in wp_postmeta
RATING_META_KEY = "rating"
