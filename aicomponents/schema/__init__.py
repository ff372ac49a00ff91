"""Framework data types: documents, messages, extra-value type names."""
from aicomponents.schema.document import Document
from aicomponents.schema.message import Message, concat_messages
from aicomponents.schema.serialization import TypeNameRegistry, default_name_registry, register_name

__all__ = [
    "Document",
    "Message",
    "concat_messages",
    "TypeNameRegistry",
    "default_name_registry",
    "register_name",
]
