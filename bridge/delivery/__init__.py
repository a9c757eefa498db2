"""Delivery module."""

from .gateway import GraphDeliveryGateway, IDeliveryGateway, to_platform_message

__all__ = ["GraphDeliveryGateway", "IDeliveryGateway", "to_platform_message"]
