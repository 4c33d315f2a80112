# tracker/models.py
from sqlalchemy import Column, String, Integer, Text, DateTime, Boolean, Index, UniqueConstraint, PrimaryKeyConstraint
from datetime import datetime, timezone
import enum

from .db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ThemeEnum(str, enum.Enum):
    light = "light"
    dark = "dark"


# Users live in the auth provider (Supabase auth.users); tables only carry
# the user id string, row ownership is enforced by queries.

class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String, nullable=False, index=True)
    text = Column(Text, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    section = Column(String, nullable=True, default="personal")
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index("ix_tasks_user_section", "user_id", "section"),
    )


class Note(Base):
    __tablename__ = "notes"

    user_id = Column(String, primary_key=True)
    body = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class RichNote(Base):
    __tablename__ = "rich_notes"

    # "{user_id}_{section}"
    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    section = Column(String, nullable=False)
    markdown = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "section", name="uq_rich_notes_user_section"),
    )


class Section(Base):
    __tablename__ = "sections"

    id = Column(String, nullable=False)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    color = Column(String, nullable=True)
    icon = Column(String, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        PrimaryKeyConstraint("user_id", "id", name="pk_sections"),
    )


class UserPreference(Base):
    __tablename__ = "user_preferences"

    user_id = Column(String, primary_key=True)
    theme = Column(String, nullable=False, default=ThemeEnum.light.value)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
