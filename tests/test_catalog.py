"""Tests for ReplyCatalog."""

import pytest

from bridge.catalog import MAIN_MENU_CHOICES, NodeDefinition, ReplyCatalog
from bridge.models import CardReply, Choice, MenuNode, TextReply


class TestNodePrompts:
    """Tests for node_prompt() and choices_for()."""

    @pytest.mark.parametrize("node", list(MenuNode))
    def test_every_node_has_a_prompt(self, catalog, node):
        """Test that all menu nodes are defined."""
        reply = catalog.node_prompt(node)
        assert isinstance(reply, TextReply)
        assert reply.text
        assert list(reply.choices) == catalog.choices_for(node)

    def test_main_menu_choices(self, catalog):
        """Test main menu choice order."""
        payloads = [c.payload for c in catalog.choices_for(MenuNode.MAIN_MENU)]
        assert payloads == ["TOUR_PACKAGES", "BOOK_TOUR", "CONTACT_US"]

    def test_tour_packages_choices(self, catalog):
        """Test destinations offered under tour packages."""
        payloads = [c.payload for c in catalog.choices_for(MenuNode.TOUR_PACKAGES)]
        assert payloads == ["PALAWAN_TOURS", "BORACAY_PACKAGES", "CEBU_ADVENTURES", "MAIN_MENU"]

    def test_prompt_is_stable(self, catalog):
        """Test that asking twice yields the identical reply."""
        assert catalog.node_prompt(MenuNode.MAIN_MENU) == catalog.node_prompt(MenuNode.MAIN_MENU)

    def test_unknown_node_fails_fast(self, catalog):
        """Test that unknown nodes raise instead of defaulting."""
        with pytest.raises(KeyError):
            catalog.node_prompt("NOT_A_NODE")

    def test_choices_for_returns_copy(self, catalog):
        """Test that callers cannot mutate the catalog."""
        choices = catalog.choices_for(MenuNode.MAIN_MENU)
        choices.clear()
        assert len(catalog.choices_for(MenuNode.MAIN_MENU)) == 3

    def test_missing_node_definition_rejected(self):
        """Test that a catalog must define every node."""
        nodes = {
            MenuNode.MAIN_MENU: NodeDefinition(MenuNode.MAIN_MENU, "Menu", MAIN_MENU_CHOICES)
        }
        with pytest.raises(ValueError, match="missing menu nodes"):
            ReplyCatalog(
                nodes=nodes,
                leaf_replies={},
                welcome_text="w",
                fallback_text="f",
                attachment_text="a",
                apology_text="s",
            )


class TestCannedReplies:
    """Tests for welcome, fallback, attachment, apology and delegate replies."""

    def test_welcome_and_fallback_differ(self, catalog):
        """Test that GET_STARTED greeting differs from unknown-payload welcome."""
        assert catalog.welcome_reply().text != catalog.fallback_reply().text
        assert catalog.fallback_reply().text.startswith("Mabuhay!")

    @pytest.mark.parametrize(
        "method", ["welcome_reply", "fallback_reply", "attachment_reply", "apology_reply"]
    )
    def test_canned_replies_offer_main_menu(self, catalog, method):
        """Test that canned replies carry the main-menu choices."""
        reply = getattr(catalog, method)()
        assert reply.choices == MAIN_MENU_CHOICES

    def test_apology_text(self, catalog):
        """Test the delegate-failure apology."""
        assert catalog.apology_reply().text.startswith("I apologize")

    def test_delegate_reply(self, catalog):
        """Test wrapping generated text."""
        reply = catalog.delegate_reply("Palawan is lovely in March.")
        assert reply.text == "Palawan is lovely in March."
        assert reply.choices == MAIN_MENU_CHOICES


class TestLeafReplies:
    """Tests for destination and booking payloads."""

    def test_leaf_payloads(self, catalog):
        """Test the set of leaf payloads."""
        assert set(catalog.leaf_payloads()) == {
            "PALAWAN_TOURS",
            "BORACAY_PACKAGES",
            "CEBU_ADVENTURES",
            "BOOK_ELNIDO",
            "BOOK_UNDERGROUND_RIVER",
            "BOOK_WHITE_BEACH",
            "BOOK_ADVENTURE",
            "BOOK_WHALE_SHARK",
            "BOOK_CANYONEERING",
        }

    def test_palawan_is_a_card_carousel(self, catalog):
        """Test the Palawan card reply."""
        reply = catalog.leaf_reply("PALAWAN_TOURS")
        assert isinstance(reply, CardReply)
        assert [item.title for item in reply.items] == [
            "El Nido Island Hopping",
            "Underground River Tour",
        ]
        book = reply.items[0].actions[1]
        assert book.payload == "BOOK_ELNIDO"
        assert reply.transcript_text == "[cards: El Nido Island Hopping, Underground River Tour]"

    def test_card_book_payloads_are_leaves(self, catalog):
        """Test that every card postback button has a handler."""
        reply = catalog.leaf_reply("PALAWAN_TOURS")
        for item in reply.items:
            for action in item.actions:
                if action.payload:
                    assert action.payload in catalog.leaf_payloads()

    def test_booking_confirmation(self, catalog):
        """Test a booking confirmation mentions the tour."""
        reply = catalog.leaf_reply("BOOK_WHALE_SHARK")
        assert "Whale Shark Encounter" in reply.text
        assert Choice("Back to Menu", "MAIN_MENU") in reply.choices

    def test_unknown_leaf(self, catalog):
        """Test that unknown leaf payloads raise."""
        with pytest.raises(KeyError):
            catalog.leaf_reply("XYZ_UNKNOWN")


class TestClassify:
    """Tests for keyword classification."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Show me your TOURS", MenuNode.TOUR_PACKAGES),
            ("any honeymoon package?", MenuNode.TOUR_PACKAGES),
            ("I'd like to reserve a trip", MenuNode.BOOK_TOUR),
            ("Can I book now", MenuNode.BOOK_TOUR),
            ("how do I contact you", MenuNode.CONTACT_US),
            ("HELP", MenuNode.CONTACT_US),
            ("what's the weather in Cebu", None),
        ],
    )
    def test_classify(self, catalog, text, expected):
        """Test keyword to node mapping."""
        assert catalog.classify(text) is expected

    def test_first_match_wins(self, catalog):
        """Test that tour/package beats book/reserve."""
        assert catalog.classify("I want to book a tour") is MenuNode.TOUR_PACKAGES

    def test_book_beats_contact(self, catalog):
        """Test that book/reserve beats contact/help."""
        assert catalog.classify("help me book") is MenuNode.BOOK_TOUR
