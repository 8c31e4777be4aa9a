"""
Authorization checks for post and category writes.
"""
import logging

from .conf import blog_settings
from .exceptions import Forbidden

logger = logging.getLogger(__name__)


def is_admin(user):
    """Staff users and users whose ``role`` is the admin role."""
    if user is None or not user.is_authenticated:
        return False
    return user.is_staff or getattr(user, "role", None) == blog_settings.ADMIN_ROLE


def can_modify_post(user, post):
    """Check if user may update or delete the post."""
    if user is None or not user.is_authenticated:
        return False
    return post.author_id == user.pk or is_admin(user)


def ensure_can_modify_post(user, post, action="update"):
    if not can_modify_post(user, post):
        logger.warning(
            "User %s denied %s on post %s", getattr(user, "pk", None), action, post.pk
        )
        raise Forbidden(f"Not authorized to {action} this post")


def ensure_admin(user):
    if not is_admin(user):
        raise Forbidden(
            f"User role {getattr(user, 'role', 'user')} is not authorized to access this route"
        )
