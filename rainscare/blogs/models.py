# -*- coding: utf-8 -*-
"""Pydantic models for the blogs routes."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

DEFAULT_COVER_IMAGE = (
    "https://static.vecteezy.com/system/resources/previews/035/947/339/non_2x/blog-3d-illustration-icon-png.png"
)


class BlogCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    author: str = Field(..., min_length=1, max_length=120)
    content: str = Field(..., min_length=1)
    category: Optional[str] = Field(None, max_length=80)
    tags: List[str] = []
    cover_image: str = DEFAULT_COVER_IMAGE
    excerpt: Optional[str] = Field(None, max_length=1000)
    related_posts: List[str] = []
    is_active: bool = True


class BlogUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=300)
    author: Optional[str] = Field(None, min_length=1, max_length=120)
    content: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, max_length=80)
    tags: Optional[List[str]] = None
    cover_image: Optional[str] = None
    excerpt: Optional[str] = Field(None, max_length=1000)
    related_posts: Optional[List[str]] = None
    is_active: Optional[bool] = None


class BlogPost(BaseModel):
    id: str
    title: str
    author: str = ""
    content: str = ""
    category: str = "General"
    tags: List[str] = []
    cover_image: str = DEFAULT_COVER_IMAGE
    excerpt: str = ""
    related_posts: List[str] = []
    is_active: bool = True
    views: int = 0
    date: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
