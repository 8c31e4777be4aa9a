"""
JSON representations of topman_blog models.
"""
from .conf import blog_settings
from .permissions import is_admin


def serialize_user(user):
    if user is None:
        return None
    return {"id": user.pk, "username": user.get_username()}


def serialize_category(category, detail=False):
    data = {"id": category.pk, "name": category.name, "slug": category.slug}
    if detail:
        data.update({
            "description": category.description,
            "createdAt": category.created_at,
            "updatedAt": category.updated_at,
        })
    return data


def serialize_reaction(reaction):
    return {
        "id": reaction.pk,
        "user": serialize_user(reaction.user),
        "emoji": reaction.emoji,
    }


def serialize_comment(comment):
    return {
        "id": comment.pk,
        "user": serialize_user(comment.author),
        "authorName": comment.author_display,
        "content": comment.content,
        "reactions": [serialize_reaction(r) for r in comment.reactions.all()],
        "createdAt": comment.created_at,
    }


def serialize_post(post):
    return {
        "id": post.pk,
        "title": post.title,
        "slug": post.slug,
        "content": post.content,
        "excerpt": post.excerpt,
        "featuredImage": post.featured_image_url,
        "author": serialize_user(post.author),
        "category": serialize_category(post.category),
        "tags": list(post.tags or []),
        "isPublished": post.is_published,
        "viewCount": post.view_count,
        "comments": [serialize_comment(c) for c in post.comments.all()],
        "createdAt": post.created_at,
        "updatedAt": post.updated_at,
    }


def serialize_account(user):
    """The logged-in user's own view of their account."""
    data = serialize_user(user)
    data.update({
        "email": user.email,
        "role": blog_settings.ADMIN_ROLE if is_admin(user) else "user",
    })
    return data
