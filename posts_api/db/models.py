"""
SQLModel database models.

The posts table is owned by the database administrator; this service only
reads from and inserts into it.
"""
from typing import Optional
from sqlmodel import SQLModel, Field, Column, Text


class Post(SQLModel, table=True):
    """
    A single post.

    The id is assigned by the database on insert.
    """
    __tablename__ = "posts"

    id: Optional[int] = Field(default=None, primary_key=True)

    title: str = Field(default="", sa_column=Column(Text, nullable=False))
    content: str = Field(default="", sa_column=Column(Text, nullable=False))
