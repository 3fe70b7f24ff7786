"""
Author API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from posts.dependencies import get_post_repository
from posts.repository import PostRepository

from . import schemas, service
from .dependencies import get_author_repository
from .repository import AuthorRepository

router = APIRouter()


@router.get("/authors")
async def list_authors(
    authors: AuthorRepository = Depends(get_author_repository),
) -> dict:
    return {"authors": await service.list_authors(authors)}


@router.get("/authors/{author_id}")
async def get_author(
    author_id: str,
    authors: AuthorRepository = Depends(get_author_repository),
) -> dict:
    return await service.get_author(authors, author_id)


@router.post("/authors", status_code=status.HTTP_201_CREATED)
async def create_author(
    request: schemas.CreateAuthorRequest,
    authors: AuthorRepository = Depends(get_author_repository),
) -> dict:
    return await service.create_author(authors, request)


@router.put("/authors/{author_id}")
async def update_author(
    author_id: str,
    request: schemas.UpdateAuthorRequest,
    authors: AuthorRepository = Depends(get_author_repository),
) -> dict:
    return await service.update_author(authors, author_id, request)


@router.delete("/authors/{author_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_author(
    author_id: str,
    authors: AuthorRepository = Depends(get_author_repository),
    posts: PostRepository = Depends(get_post_repository),
) -> Response:
    """
    Delete an author and every post that references it. Unknown ids succeed.
    """
    await service.delete_author(authors, posts, author_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
