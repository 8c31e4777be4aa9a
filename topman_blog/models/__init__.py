"""
Models for topman_blog.

All models are importable from topman_blog.models:

    from topman_blog.models import Post, Category, Comment, Reaction
"""
from .posts import Category, Post
from .comments import Comment, Reaction

__all__ = [
    # Posts
    "Category",
    "Post",
    # Comments
    "Comment",
    "Reaction",
]
