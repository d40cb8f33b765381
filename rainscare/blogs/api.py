# -*- coding: utf-8 -*-
"""Blogs: public read endpoints and admin CRUD."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from ..auth.security import require_admin
from . import storage
from .models import BlogCreate, BlogPost, BlogUpdate

router = APIRouter(prefix="/api/blogs", tags=["Blogs"])
admin_router = APIRouter(prefix="/api/admin/blogs", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("", response_model=List[BlogPost], summary="Active blog posts, newest first")
def list_blogs():
    try:
        return storage.list_active()
    except Exception as exc:
        raise HTTPException(status_code=500, detail="Failed to fetch blogs") from exc


@router.get("/{blog_id}", response_model=BlogPost, summary="Read an active blog post (counts a view)")
def read_blog(blog_id: str):
    blog = storage.get_public(blog_id)
    if not blog:
        raise HTTPException(status_code=404, detail="Blog not found")
    return blog


@admin_router.get("", response_model=List[BlogPost], summary="All blog posts including inactive")
def admin_list_blogs():
    return storage.list_all()


@admin_router.get("/{blog_id}", response_model=BlogPost, summary="Read any blog post without counting a view")
def admin_read_blog(blog_id: str):
    blog = storage.get_admin(blog_id)
    if not blog:
        raise HTTPException(status_code=404, detail="Blog not found")
    return blog


@admin_router.post("", response_model=BlogPost, status_code=201, summary="Create a blog post")
def admin_create_blog(request: BlogCreate):
    return storage.create(request)


@admin_router.put("/{blog_id}", response_model=BlogPost, summary="Update a blog post")
def admin_update_blog(blog_id: str, request: BlogUpdate):
    try:
        return storage.update(blog_id, request)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Blog not found") from exc
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err["loc"]})
        raise HTTPException(status_code=400, detail=f"Invalid fields: {', '.join(fields)}") from exc


@admin_router.delete("/{blog_id}", summary="Delete a blog post")
def admin_delete_blog(blog_id: str):
    try:
        storage.delete(blog_id)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail="Blog not found") from exc
    return {"message": "Blog deleted successfully"}
