"""Chat model components."""
from aicomponents.components.model.base import BaseChatModel

__all__ = ["BaseChatModel"]
