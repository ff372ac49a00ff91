"""
Component config: load from env.

Load from env: load_qdrant_config(), load_arkbot_config().
"""
from aicomponents.config.arkbot import ArkBotConfig, load_arkbot_config
from aicomponents.config.qdrant import QdrantConfig, load_qdrant_config

__all__ = [
    "QdrantConfig",
    "load_qdrant_config",
    "ArkBotConfig",
    "load_arkbot_config",
]
