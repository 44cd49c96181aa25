"""Database table definitions for the published guide snapshot"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, JSON, String, Text
from sqlmodel import Field, Relationship, SQLModel


class Guide(SQLModel, table=True):
    """A published guide as of the last commit"""
    __tablename__ = "guides"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    slug: str = Field(..., sa_column=Column(String(255), nullable=False, unique=True, index=True))
    path: str = Field(..., sa_column=Column(Text, nullable=False))
    title: str = Field(..., sa_column=Column(Text, nullable=False))
    description: str = Field(default="", sa_column=Column(Text, nullable=False))
    category: str = Field(..., index=True, nullable=False, description="Normalized editorial category")
    difficulty: Optional[str] = Field(default=None)
    published_at: Optional[date] = Field(default=None, index=True)
    reading_minutes: int = Field(default=1, nullable=False)
    body: str = Field(..., sa_column=Column(Text, nullable=False))
    hash: str = Field(..., sa_column=Column(String(64), nullable=False))
    frontmatter: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    committed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=False), nullable=True))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))
    tags: List["GuideTag"] = Relationship(back_populates="guide")
    links: List["GuideLink"] = Relationship(back_populates="guide")


class GuideTag(SQLModel, table=True):
    """Normalized tag attached to a guide"""
    __tablename__ = "guide_tags"
    guide_id: UUID = Field(foreign_key="guides.id", primary_key=True)
    tag: str = Field(primary_key=True, index=True)
    label: str = Field(..., nullable=False, description="Tag as written in the front matter")
    guide: Optional[Guide] = Relationship(back_populates="tags")


class GuideLink(SQLModel, table=True):
    """A declared related-guide reference; target_slug may not exist"""
    __tablename__ = "guide_links"
    guide_id: UUID = Field(foreign_key="guides.id", primary_key=True)
    position: int = Field(primary_key=True, description="Declaration order within relatedGuides")
    target_slug: str = Field(..., index=True, nullable=False)
    guide: Optional[Guide] = Relationship(back_populates="links")
