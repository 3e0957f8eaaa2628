"""Posts, their votes, collaborators and the home timeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..core.guard import ensure_owner, permit, require_identity
from ..core.security import CallerIdentity
from ..errors import PreconditionFailedError, UnauthorizedError, ValidationError
from ..models import Post, PostVisibility, Subtask, Task, User
from ..repositories import PostRepository, SubtaskRepository, TaskRepository, UserRepository
from ..schemas.forms import CREATE_POST_FORM, CreatePostForm
from .base import PipelineService
from .relations import DOWNVOTE, UPVOTE, SymmetricRelation, add_member, persist_pair, remove_member

logger = logging.getLogger(__name__)

INVALID_POST_ID_MESSAGE = "Invalid postId!"
POST_NOT_FOUND_MESSAGE = "Post not found!"


def can_read(post: Post, caller: CallerIdentity | None) -> bool:
    """Public posts are readable by anyone, private ones by the owner and collaborators."""

    if post.visibility == PostVisibility.PUBLIC:
        return True
    if caller is None:
        return False
    return permit(caller.user_id, post.creator_id, post.authorized_users)


def ensure_readable(post: Post, caller: CallerIdentity | None) -> None:
    if not can_read(post, caller):
        raise UnauthorizedError()


@dataclass(slots=True)
class TaskTree:
    task: Task
    subtasks: list[Subtask] = field(default_factory=list)


@dataclass(slots=True)
class PostTree:
    """A post together with its tasks and their subtasks, in insertion order."""

    post: Post
    tasks: list[TaskTree] = field(default_factory=list)


class PostService(PipelineService):
    """Business orchestration for ``Post`` entities."""

    def __init__(self) -> None:
        self._posts = PostRepository()
        self._users = UserRepository()
        self._tasks = TaskRepository()
        self._subtasks = SubtaskRepository()

    async def _load_caller(self, caller: CallerIdentity | None) -> User:
        caller_id = self.parse_id(require_identity(caller), "Invalid userId!")
        return await self._users.get_or_raise(caller_id, "User not found!")

    async def get_creator(self, post: Post) -> User:
        return await self._users.get_or_raise(post.creator_id, "User not found!")

    async def _load_post(self, post_id: str) -> Post:
        document_id = self.parse_id(post_id, INVALID_POST_ID_MESSAGE)
        return await self._posts.get_or_raise(document_id, POST_NOT_FOUND_MESSAGE)

    async def create_post(self, payload: Any, caller: CallerIdentity | None) -> Post:
        """Create a post owned by the caller and record it on their profile."""

        form: CreatePostForm = self.validate(CREATE_POST_FORM, payload)
        creator = await self._load_caller(caller)

        post = Post(
            title=form.title,
            creator_id=creator.id,
            creator_username=creator.username,
            due_date=form.due_date,
            color=form.color,
            category=form.category,
            visibility=form.visibility,
        )
        await self._posts.insert(post)
        add_member(creator.posts, post.id)
        await self._users.save(creator)
        logger.info("Post created", extra={"post_id": str(post.id), "user_id": str(creator.id)})
        return post

    async def get_post(self, post_id: str, caller: CallerIdentity | None) -> PostTree:
        """Return a readable post with its tasks and subtasks."""

        post = await self._load_post(post_id)
        ensure_readable(post, caller)

        tasks = await self._tasks.list_by_ids(post.tasks)
        tree = PostTree(post=post)
        for task in tasks:
            subtasks = await self._subtasks.list_by_ids(task.subtasks)
            tree.tasks.append(TaskTree(task=task, subtasks=subtasks))
        return tree

    async def timeline(self, caller: CallerIdentity | None, *, limit: int = 20, offset: int = 0) -> list[Post]:
        """Return the caller's own posts and public posts by users they follow.

        Users the caller has blocked are left out even if still followed.
        """

        user = await self._load_caller(caller)
        followed = [user_id for user_id in user.following if user_id not in user.blocked]
        return await self._posts.list_timeline(user.id, followed, limit=limit, offset=offset)

    async def _vote(
        self,
        post_id: str,
        caller: CallerIdentity | None,
        *,
        cast: SymmetricRelation,
        retract: SymmetricRelation,
        duplicate_message: str,
    ) -> tuple[Post, User]:
        post = await self._load_post(post_id)
        voter = await self._load_caller(caller)
        ensure_readable(post, caller)
        if cast.contains(voter, post):
            raise PreconditionFailedError(duplicate_message)

        retract.unlink(voter, post)
        cast.link(voter, post)
        post.upvotes = len(post.upvoted_by)
        post.downvotes = len(post.downvoted_by)
        await persist_pair(self._posts, post, self._users, voter)
        return post, voter

    async def upvote(self, post_id: str, caller: CallerIdentity | None) -> tuple[Post, User]:
        """Record an upvote, replacing a downvote by the same user."""

        return await self._vote(
            post_id,
            caller,
            cast=UPVOTE,
            retract=DOWNVOTE,
            duplicate_message="Post is already upvoted!",
        )

    async def downvote(self, post_id: str, caller: CallerIdentity | None) -> tuple[Post, User]:
        """Record a downvote, replacing an upvote by the same user."""

        return await self._vote(
            post_id,
            caller,
            cast=DOWNVOTE,
            retract=UPVOTE,
            duplicate_message="Post is already downvoted!",
        )

    async def _load_collaboration(self, post_id: str, user_id: str) -> tuple[Post, User]:
        post_oid, user_oid = self.parse_ids((post_id, user_id), "Invalid postId or userId!")
        post = await self._posts.get_or_raise(post_oid, POST_NOT_FOUND_MESSAGE)
        collaborator = await self._users.get_or_raise(user_oid, "User not found!")
        return post, collaborator

    async def add_collaborator(
        self,
        post_id: str,
        user_id: str,
        caller: CallerIdentity | None,
    ) -> tuple[Post, User]:
        """Grant ``user_id`` edit rights on the post. Only the creator may do this."""

        post, collaborator = await self._load_collaboration(post_id, user_id)
        ensure_owner(caller, post.creator_id)
        if collaborator.id == post.creator_id:
            raise ValidationError("The creator cannot be added as a collaborator!")
        if not add_member(post.authorized_users, collaborator.id):
            raise PreconditionFailedError("User is already a collaborator!")

        await self._posts.save(post)
        return post, collaborator

    async def remove_collaborator(self, post_id: str, user_id: str, caller: CallerIdentity | None) -> Post:
        post, collaborator = await self._load_collaboration(post_id, user_id)
        ensure_owner(caller, post.creator_id)
        if not remove_member(post.authorized_users, collaborator.id):
            raise PreconditionFailedError("User is not a collaborator!")

        await self._posts.save(post)
        return post


__all__ = [
    "INVALID_POST_ID_MESSAGE",
    "POST_NOT_FOUND_MESSAGE",
    "PostService",
    "PostTree",
    "TaskTree",
    "can_read",
    "ensure_readable",
]
