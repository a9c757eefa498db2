"""Static menu tree and canned replies."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ..models import CardAction, CardItem, CardReply, Choice, MenuNode, Reply, TextReply

HOTLINE = "+63 2 1234 5678"

MAIN_MENU_CHOICES = (
    Choice("Tour Packages", MenuNode.TOUR_PACKAGES.value),
    Choice("Book a Tour", MenuNode.BOOK_TOUR.value),
    Choice("Contact Us", MenuNode.CONTACT_US.value),
)
BACK_TO_MENU = Choice("Back to Menu", MenuNode.MAIN_MENU.value)

# Checked in order; first match wins.
KEYWORD_RULES: tuple[tuple[tuple[str, ...], MenuNode], ...] = (
    (("tour", "package"), MenuNode.TOUR_PACKAGES),
    (("book", "reserve"), MenuNode.BOOK_TOUR),
    (("contact", "help"), MenuNode.CONTACT_US),
)


@dataclass(frozen=True)
class NodeDefinition:
    """A menu node: its prompt and the choices it offers."""

    node: MenuNode
    prompt: str
    choices: tuple[Choice, ...]

    def reply(self) -> TextReply:
        return TextReply(text=self.prompt, choices=self.choices)


class ReplyCatalog:
    """Read-only lookup of menu prompts and canned replies."""

    def __init__(
        self,
        nodes: Mapping[MenuNode, NodeDefinition],
        leaf_replies: Mapping[str, Reply],
        welcome_text: str,
        fallback_text: str,
        attachment_text: str,
        apology_text: str,
        keyword_rules: tuple[tuple[tuple[str, ...], MenuNode], ...] = KEYWORD_RULES,
    ):
        missing = [node for node in MenuNode if node not in nodes]
        if missing:
            raise ValueError(f"Catalog is missing menu nodes: {missing}")

        self._nodes = MappingProxyType(dict(nodes))
        self._leaf_replies = MappingProxyType(dict(leaf_replies))
        self._welcome_text = welcome_text
        self._fallback_text = fallback_text
        self._attachment_text = attachment_text
        self._apology_text = apology_text
        self._keyword_rules = keyword_rules

    def node_prompt(self, node: MenuNode) -> TextReply:
        """Prompt shown when entering a node."""
        return self._definition(node).reply()

    def choices_for(self, node: MenuNode) -> list[Choice]:
        """Choices offered at a node, in display order."""
        return list(self._definition(node).choices)

    def welcome_reply(self) -> TextReply:
        """Greeting for the GET_STARTED button."""
        return TextReply(self._welcome_text, self.main_menu_choices())

    def fallback_reply(self) -> TextReply:
        """Welcome shown for payloads nobody handles."""
        return TextReply(self._fallback_text, self.main_menu_choices())

    def attachment_reply(self) -> TextReply:
        return TextReply(self._attachment_text, self.main_menu_choices())

    def apology_reply(self) -> TextReply:
        """Shown instead of a generated answer when the delegate fails."""
        return TextReply(self._apology_text, self.main_menu_choices())

    def delegate_reply(self, text: str) -> TextReply:
        """Wrap generated text with the main-menu choices."""
        return TextReply(text, self.main_menu_choices())

    def main_menu_choices(self) -> tuple[Choice, ...]:
        return self._definition(MenuNode.MAIN_MENU).choices

    def leaf_payloads(self) -> list[str]:
        """Payloads answered with a fixed reply and no state change."""
        return list(self._leaf_replies)

    def leaf_reply(self, payload: str) -> Reply:
        return self._leaf_replies[payload]

    def classify(self, text: str) -> MenuNode | None:
        """Map free text to a menu node by keyword, or None."""
        lowered = text.lower()
        for keywords, node in self._keyword_rules:
            if any(keyword in lowered for keyword in keywords):
                return node
        return None

    def _definition(self, node: MenuNode) -> NodeDefinition:
        try:
            return self._nodes[MenuNode(node)]
        except (KeyError, ValueError):
            raise KeyError(f"Unknown menu node: {node!r}") from None

    @classmethod
    def default(cls) -> "ReplyCatalog":
        """Catalog for Philippine Paradise Tours."""
        nodes = {
            MenuNode.MAIN_MENU: NodeDefinition(
                node=MenuNode.MAIN_MENU,
                prompt="Please select an option to start planning your Philippine adventure:",
                choices=MAIN_MENU_CHOICES,
            ),
            MenuNode.TOUR_PACKAGES: NodeDefinition(
                node=MenuNode.TOUR_PACKAGES,
                prompt="Discover our amazing tour packages! Where would you like to explore?",
                choices=(
                    Choice("Palawan Tours", "PALAWAN_TOURS"),
                    Choice("Boracay Packages", "BORACAY_PACKAGES"),
                    Choice("Cebu Adventures", "CEBU_ADVENTURES"),
                    BACK_TO_MENU,
                ),
            ),
            MenuNode.BOOK_TOUR: NodeDefinition(
                node=MenuNode.BOOK_TOUR,
                prompt=(
                    "To book a tour, please provide:\n"
                    "1. Your preferred destination\n"
                    "2. Number of travelers\n"
                    "3. Preferred dates\n\n"
                    f"Or you can call our booking hotline: {HOTLINE}\n\n"
                    "Would you like to see our available packages first?"
                ),
                choices=(
                    Choice("View Packages", MenuNode.TOUR_PACKAGES.value),
                    BACK_TO_MENU,
                ),
            ),
            MenuNode.CONTACT_US: NodeDefinition(
                node=MenuNode.CONTACT_US,
                prompt=(
                    "Contact Philippine Paradise Tours:\n\n"
                    f"📞 Phone: {HOTLINE}\n"
                    "📧 Email: info@philippineparadise.com\n"
                    "📍 Office: 123 Makati Avenue, Makati City\n\n"
                    "Operating Hours:\n"
                    "Monday to Friday: 9AM - 6PM\n"
                    "Saturday: 9AM - 3PM\n\n"
                    "Would you like to return to the main menu?"
                ),
                choices=(BACK_TO_MENU,),
            ),
        }

        return cls(
            nodes=nodes,
            leaf_replies={**_destination_replies(), **_booking_confirmations()},
            welcome_text=(
                "Mabuhay! Welcome to Philippine Paradise Tours! 🌴\n\n"
                "We specialize in creating unforgettable travel experiences across "
                "the beautiful islands of the Philippines. How can I help you plan "
                "your dream vacation?"
            ),
            fallback_text=(
                "Mabuhay! Welcome to Philippine Paradise Tours. "
                "How can I help you plan your dream vacation?"
            ),
            attachment_text="I received your attachment! Please select an option from the menu:",
            apology_text=(
                "I apologize, but I'm having trouble processing your request right now. "
                "Please select an option from the menu:"
            ),
        )


def _destination_replies() -> dict[str, Reply]:
    palawan = CardReply(
        items=(
            CardItem(
                title="El Nido Island Hopping",
                subtitle="Explore the stunning lagoons and beaches of El Nido",
                image_ref="https://example.com/elnido.jpg",
                actions=(
                    CardAction("View Details", url="https://example.com/elnido-tour"),
                    CardAction("Book Now", payload="BOOK_ELNIDO"),
                ),
            ),
            CardItem(
                title="Underground River Tour",
                subtitle="Discover the UNESCO World Heritage underground river",
                image_ref="https://example.com/underground-river.jpg",
                actions=(
                    CardAction(
                        "View Details", url="https://example.com/underground-river-tour"
                    ),
                    CardAction("Book Now", payload="BOOK_UNDERGROUND_RIVER"),
                ),
            ),
        )
    )
    boracay = TextReply(
        text=(
            "Boracay Island Packages:\n\n"
            "1. White Beach Getaway (3D2N)\n"
            "- Beachfront accommodation\n"
            "- Island hopping\n"
            "- Sunset sailing\n\n"
            "2. Adventure Package (4D3N)\n"
            "- All activities from Getaway package\n"
            "- Parasailing\n"
            "- Scuba diving\n\n"
            "Would you like to book any of these packages?"
        ),
        choices=(
            Choice("Book White Beach", "BOOK_WHITE_BEACH"),
            Choice("Book Adventure", "BOOK_ADVENTURE"),
            BACK_TO_MENU,
        ),
    )
    cebu = TextReply(
        text=(
            "Cebu Adventure Packages:\n\n"
            "1. Whale Shark Encounter\n"
            "- Swimming with whale sharks\n"
            "- Tumalog Falls visit\n"
            "- Oslob tour\n\n"
            "2. Canyoneering Adventure\n"
            "- Badian canyoneering\n"
            "- Kawasan Falls\n"
            "- Lunch included\n\n"
            "Which adventure would you like to book?"
        ),
        choices=(
            Choice("Whale Shark Tour", "BOOK_WHALE_SHARK"),
            Choice("Canyoneering", "BOOK_CANYONEERING"),
            BACK_TO_MENU,
        ),
    )
    return {
        "PALAWAN_TOURS": palawan,
        "BORACAY_PACKAGES": boracay,
        "CEBU_ADVENTURES": cebu,
    }


def _booking_confirmations() -> dict[str, Reply]:
    tours = {
        "BOOK_ELNIDO": "El Nido Island Hopping",
        "BOOK_UNDERGROUND_RIVER": "Underground River Tour",
        "BOOK_WHITE_BEACH": "White Beach Getaway",
        "BOOK_ADVENTURE": "Boracay Adventure Package",
        "BOOK_WHALE_SHARK": "Whale Shark Encounter",
        "BOOK_CANYONEERING": "Canyoneering Adventure",
    }
    return {
        payload: TextReply(
            text=(
                f"Great choice! We've noted your interest in the {name}.\n\n"
                "Our booking team will message you shortly to confirm your dates "
                "and the number of travelers.\n\n"
                f"You can also call our booking hotline: {HOTLINE}"
            ),
            choices=(
                Choice("View Packages", MenuNode.TOUR_PACKAGES.value),
                BACK_TO_MENU,
            ),
        )
        for payload, name in tours.items()
    }
