"""
Reaction rules for comments.

A user holds at most one reaction per comment. Re-applying the same emoji
removes it; applying a different one replaces the old one.

The rules operate on immutable snapshots so they can be tested without a
database. ``Reaction.toggle`` persists the result.
"""
from dataclasses import dataclass

CREATED = "created"
REMOVED = "removed"
CHANGED = "changed"


@dataclass(frozen=True)
class ReactionState:
    """One user's reaction on a comment."""

    user_id: int
    emoji: str


def apply_reaction(reactions, user_id, emoji):
    """
    Apply ``emoji`` from ``user_id`` to a comment's reactions.

    Returns ``(new_reactions, action)`` where ``new_reactions`` is a tuple of
    ``ReactionState`` and ``action`` is one of CREATED, REMOVED or CHANGED.
    Reactions belonging to other users are returned untouched and in order.
    """
    reactions = tuple(reactions)
    target = ReactionState(user_id=user_id, emoji=emoji)

    if target in reactions:
        return tuple(r for r in reactions if r != target), REMOVED

    had_other = any(r.user_id == user_id for r in reactions)
    kept = tuple(r for r in reactions if r.user_id != user_id)
    return kept + (target,), CHANGED if had_other else CREATED


def reaction_for(reactions, user_id):
    """Return the user's reaction in ``reactions`` or None."""
    for reaction in reactions:
        if reaction.user_id == user_id:
            return reaction
    return None
