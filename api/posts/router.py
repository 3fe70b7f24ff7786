"""
Post API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from authors.dependencies import get_author_repository
from authors.repository import AuthorRepository

from . import schemas, service
from .dependencies import get_post_repository
from .repository import PostRepository

router = APIRouter()


@router.get("/posts")
async def list_posts(
    posts: PostRepository = Depends(get_post_repository),
) -> dict:
    return {"posts": await service.list_posts(posts)}


@router.get("/posts/{post_id}")
async def get_post(
    post_id: str,
    posts: PostRepository = Depends(get_post_repository),
) -> dict:
    return await service.get_post(posts, post_id)


@router.post("/posts", status_code=status.HTTP_201_CREATED)
async def create_post(
    request: schemas.CreatePostRequest,
    posts: PostRepository = Depends(get_post_repository),
    authors: AuthorRepository = Depends(get_author_repository),
) -> dict:
    return await service.create_post(posts, authors, request)


@router.put("/posts/{post_id}")
async def update_post(
    post_id: str,
    request: schemas.UpdatePostRequest,
    posts: PostRepository = Depends(get_post_repository),
) -> dict:
    return await service.update_post(posts, post_id, request)


@router.delete("/posts/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    posts: PostRepository = Depends(get_post_repository),
) -> Response:
    await service.delete_post(posts, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/posts/{post_id}/comments", status_code=status.HTTP_201_CREATED)
async def add_comment(
    post_id: str,
    request: schemas.CreateCommentRequest,
    posts: PostRepository = Depends(get_post_repository),
) -> dict:
    return await service.add_comment(posts, post_id, request)
