"""
Comment and Reaction models for topman_blog.
"""
import logging

from django.conf import settings
from django.db import models

from ..conf import blog_settings
from ..reactions import ReactionState, apply_reaction, reaction_for

logger = logging.getLogger(__name__)


class Comment(models.Model):
    """
    Comment on a post.

    Comments are append-only: they are never edited and only go away
    together with their post.
    """

    post = models.ForeignKey(
        "topman_blog.Post",
        on_delete=models.CASCADE,
        related_name="comments",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="blog_comments",
    )
    content = models.TextField(max_length=blog_settings.COMMENT_MAX_LENGTH)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self):
        return f"Comment by {self.author_display} on {self.post}"

    @property
    def author_display(self):
        if self.author is None:
            return "Anonymous"
        return self.author.get_username()

    @property
    def preview(self):
        """Return truncated content for admin display."""
        if len(self.content) > 100:
            return self.content[:100] + "..."
        return self.content

    def reaction_states(self):
        """Snapshot of this comment's reactions, oldest first."""
        return tuple(
            ReactionState(user_id=user_id, emoji=emoji)
            for user_id, emoji in self.reactions.order_by("created_at", "id").values_list(
                "user_id", "emoji"
            )
        )


class Reaction(models.Model):
    """
    Emoji reaction to a comment.

    At most one reaction per user per comment.
    """

    REACTION_TYPES = blog_settings.REACTION_TYPES
    EMOJI_CHOICES = [(r[2], r[1]) for r in REACTION_TYPES]

    comment = models.ForeignKey(
        Comment,
        on_delete=models.CASCADE,
        related_name="reactions",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blog_reactions",
    )
    emoji = models.CharField(max_length=16, choices=EMOJI_CHOICES)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["comment", "user"],
                name="topman_blog_one_reaction_per_user",
            ),
        ]

    def __str__(self):
        return f"{self.user} reacted {self.emoji} to comment {self.comment_id}"

    @property
    def reaction_type(self):
        """Return the code (LIKE, LOVE, ...) for this reaction's emoji."""
        for rtype, label, emoji in self.REACTION_TYPES:
            if emoji == self.emoji:
                return rtype
        return None

    @classmethod
    def toggle(cls, comment, user, emoji):
        """
        Toggle a reaction on a comment.

        Same emoji as before removes it, a different emoji replaces it,
        no previous reaction adds it. Only ``user``'s row is written.
        Call inside a transaction holding a lock on ``comment``.

        Returns (reaction_or_none, action)
        """
        states, action = apply_reaction(comment.reaction_states(), user.pk, emoji)
        wanted = reaction_for(states, user.pk)

        cls.objects.filter(comment=comment, user=user).delete()
        reaction = None
        if wanted is not None:
            reaction = cls.objects.create(comment=comment, user=user, emoji=wanted.emoji)

        logger.debug("Reaction %s on comment %s by user %s", action, comment.pk, user.pk)
        return reaction, action
