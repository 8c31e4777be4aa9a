"""
Tests for the comment reaction rules.
"""
from topman_blog.reactions import (
    CHANGED,
    CREATED,
    REMOVED,
    ReactionState,
    apply_reaction,
    reaction_for,
)

ALICE = 1
BOB = 2


class TestApplyReaction:
    def test_first_reaction_is_added(self):
        reactions, action = apply_reaction((), ALICE, "👍")

        assert action == CREATED
        assert reactions == (ReactionState(ALICE, "👍"),)

    def test_same_emoji_twice_toggles_off(self):
        reactions, _ = apply_reaction((), ALICE, "👍")
        reactions, action = apply_reaction(reactions, ALICE, "👍")

        assert action == REMOVED
        assert reactions == ()

    def test_different_emoji_replaces(self):
        reactions, _ = apply_reaction((), ALICE, "👍")
        reactions, action = apply_reaction(reactions, ALICE, "❤️")

        assert action == CHANGED
        assert reactions == (ReactionState(ALICE, "❤️"),)

    def test_third_application_sets_again(self):
        reactions = ()
        for _ in range(3):
            reactions, action = apply_reaction(reactions, ALICE, "😂")

        assert action == CREATED
        assert reactions == (ReactionState(ALICE, "😂"),)

    def test_other_users_are_not_touched(self):
        start = (ReactionState(BOB, "👍"), ReactionState(ALICE, "😮"))

        reactions, action = apply_reaction(start, ALICE, "👍")

        assert action == CHANGED
        assert reactions == (ReactionState(BOB, "👍"), ReactionState(ALICE, "👍"))

    def test_toggle_off_leaves_other_users(self):
        start = (ReactionState(ALICE, "👍"), ReactionState(BOB, "👍"))

        reactions, action = apply_reaction(start, ALICE, "👍")

        assert action == REMOVED
        assert reactions == (ReactionState(BOB, "👍"),)

    def test_input_is_not_mutated(self):
        start = [ReactionState(ALICE, "👍")]
        apply_reaction(start, ALICE, "❤️")
        assert start == [ReactionState(ALICE, "👍")]

    def test_at_most_one_reaction_per_user(self):
        reactions = ()
        for emoji in ["👍", "❤️", "😂", "😂", "😢", "😠"]:
            reactions, _ = apply_reaction(reactions, ALICE, emoji)
            assert len([r for r in reactions if r.user_id == ALICE]) <= 1


class TestReactionFor:
    def test_finds_user_reaction(self):
        reactions = (ReactionState(BOB, "👍"), ReactionState(ALICE, "😮"))
        assert reaction_for(reactions, ALICE) == ReactionState(ALICE, "😮")

    def test_none_when_absent(self):
        assert reaction_for((ReactionState(BOB, "👍"),), ALICE) is None
