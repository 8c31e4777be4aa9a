"""
Configuration settings for topman_blog.

Override these in your Django settings.py:

    TOPMAN_BLOG = {
        'POSTS_PER_PAGE': 10,
        'SEARCH_RESULTS_LIMIT': 20,
        'REACTION_TYPES': [...],
        ...
    }
"""
from django.conf import settings

DEFAULTS = {
    # Listing and search
    "POSTS_PER_PAGE": 10,
    "MAX_POSTS_PER_PAGE": None,  # None leaves ?limit= unbounded
    "SEARCH_RESULTS_LIMIT": 20,

    # Field limits
    "TITLE_MAX_LENGTH": 100,
    "EXCERPT_MAX_LENGTH": 200,
    "COMMENT_MAX_LENGTH": 5000,
    "CATEGORY_NAME_MAX_LENGTH": 50,
    "CATEGORY_DESCRIPTION_MAX_LENGTH": 200,

    # Reactions on comments
    "REACTION_TYPES": [
        ("LIKE", "Like", "👍"),
        ("LOVE", "Love", "❤️"),
        ("HAHA", "Haha", "😂"),
        ("WOW", "Wow", "😮"),
        ("SAD", "Sad", "😢"),
        ("ANGRY", "Angry", "😠"),
    ],

    # Media
    "FEATURED_IMAGE_UPLOAD_PATH": "blog/posts/%Y/%m/",
    "DEFAULT_FEATURED_IMAGE": "default-post.jpg",

    # Accounts
    "ADMIN_ROLE": "admin",
    "ALLOW_REGISTRATION": True,
}


class BlogSettings:
    """
    Lazy settings object that reads from Django settings.

    Access via: from topman_blog.conf import blog_settings
    """

    def __getattr__(self, name):
        if name not in DEFAULTS:
            raise AttributeError(f"Invalid topman_blog setting: {name}")

        user_settings = getattr(settings, "TOPMAN_BLOG", {})
        return user_settings.get(name, DEFAULTS[name])

    @property
    def REACTION_EMOJIS(self):
        """Return the emojis users may react with."""
        return [emoji for _code, _label, emoji in self.REACTION_TYPES]


blog_settings = BlogSettings()
