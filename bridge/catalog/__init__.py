"""Reply catalog module."""

from .catalog import MAIN_MENU_CHOICES, NodeDefinition, ReplyCatalog

__all__ = ["MAIN_MENU_CHOICES", "NodeDefinition", "ReplyCatalog"]
