from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

JSON_TYPE = JSON().with_variant(JSONB, "postgresql")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    username = Column(String(255), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    phone = Column(String(64))
    website = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    posts = relationship("Post", back_populates="user")


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    external_id = Column(Integer, unique=True)
    title = Column(String(500), nullable=False)
    body = Column(Text, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    is_local = Column(Boolean, nullable=False, default=False, server_default=text("false"))
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    user = relationship("User", back_populates="posts")
    analyses = relationship(
        "PostAnalysis",
        back_populates="post",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="PostAnalysis.id",
    )

    __table_args__ = (
        Index("idx_posts_user", "user_id"),
        Index("idx_posts_local_id", "is_local", "id"),
    )


class PostAnalysis(Base):
    __tablename__ = "post_analyses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    word_count = Column(Integer, nullable=False)
    sentiment = Column(Float, nullable=False)
    sentiment_label = Column(String(16), nullable=False)
    keywords = Column(JSON_TYPE, nullable=False, default=list)
    reading_time = Column(Integer, nullable=False)
    complexity = Column(Float, nullable=False)
    source = Column(String(32), nullable=False, default="advanced")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    post = relationship("Post", back_populates="analyses")

    __table_args__ = (
        CheckConstraint(
            "sentiment_label IN ('POSITIVE','NEGATIVE','NEUTRAL')",
            name="chk_post_analyses_label",
        ),
        CheckConstraint("sentiment >= -1 AND sentiment <= 1", name="chk_post_analyses_sentiment"),
        CheckConstraint("complexity >= 0 AND complexity <= 1", name="chk_post_analyses_complexity"),
        Index("idx_post_analyses_post_created", "post_id", "created_at"),
    )


class ApiKey(Base):
    __tablename__ = "api_keys"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    key_hash = Column(String(64), nullable=False, unique=True)
    key_prefix = Column(String(16), nullable=False)
    permissions = Column(JSON_TYPE, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True, server_default=text("true"))
    last_used_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class SyncLog(Base):
    __tablename__ = "sync_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    action = Column(String(64), nullable=False)
    status = Column(String(16), nullable=False)
    record_count = Column(Integer, nullable=False, default=0, server_default=text("0"))
    error_message = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
