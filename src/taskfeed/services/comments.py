"""Comments on posts."""

from __future__ import annotations

from typing import Any

from ..core.guard import require_identity
from ..core.security import CallerIdentity
from ..errors import UnauthorizedError
from ..models import Comment, Post, User
from ..repositories import CommentRepository, PostRepository, UserRepository
from ..schemas.forms import CREATE_COMMENT_FORM, CreateCommentForm
from .base import PipelineService
from .posts import INVALID_POST_ID_MESSAGE, POST_NOT_FOUND_MESSAGE, ensure_readable
from .relations import add_member


class CommentService(PipelineService):
    def __init__(self) -> None:
        self._comments = CommentRepository()
        self._posts = PostRepository()
        self._users = UserRepository()

    async def _load_post(self, post_id: str) -> Post:
        document_id = self.parse_id(post_id, INVALID_POST_ID_MESSAGE)
        return await self._posts.get_or_raise(document_id, POST_NOT_FOUND_MESSAGE)

    async def create_comment(
        self,
        post_id: str,
        payload: Any,
        caller: CallerIdentity | None,
    ) -> tuple[Comment, Post, User]:
        """Attach a comment by the caller to a readable post.

        Users blocked by the post's creator may not comment.
        """

        form: CreateCommentForm = self.validate(CREATE_COMMENT_FORM, payload)
        author_oid = self.parse_id(require_identity(caller), "Invalid userId!")
        post = await self._load_post(post_id)
        author = await self._users.get_or_raise(author_oid, "User not found!")
        ensure_readable(post, caller)
        creator = await self._users.get(post.creator_id)
        if creator is not None and author.id in creator.blocked:
            raise UnauthorizedError()

        comment = Comment(
            content=form.content,
            post_id=post.id,
            author_id=author.id,
            author_username=author.username,
        )
        await self._comments.insert(comment)
        add_member(post.comments, comment.id)
        await self._posts.save(post)
        add_member(author.comments, comment.id)
        await self._users.save(author)
        return comment, post, author

    async def list_comments(self, post_id: str, caller: CallerIdentity | None) -> list[Comment]:
        post = await self._load_post(post_id)
        ensure_readable(post, caller)
        return await self._comments.list_for_post(post.id)


__all__ = ["CommentService"]
