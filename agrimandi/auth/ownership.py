from typing import Type

from sqlalchemy.orm import Session

from agrimandi.core.errors import Forbidden, NotFound
from agrimandi.core.logger import logger
from agrimandi.models.post import OwnedPost
from agrimandi.schemas.user import SessionUser


def owner_id_of(post: OwnedPost) -> int:
    return getattr(post, post.owner_field)


def can_mutate(caller: SessionUser, post: OwnedPost) -> bool:
    """Only the user a post was created by may delete or complete it, whatever their role."""
    return caller is not None and caller.id == owner_id_of(post)


def guard_mutation(db: Session, model: Type[OwnedPost], post_id: int, caller: SessionUser) -> OwnedPost:
    post = db.get(model, post_id)
    if post is None:
        raise NotFound(f"{model.label} not found.")
    if not can_mutate(caller, post):
        logger.warning(
            "Ownership check failed",
            extra={"user_id": caller.id, "path": f"{model.__tablename__}/{post_id}"},
        )
        raise Forbidden(f"Forbidden: You do not own this {model.label.lower()}.")
    return post
