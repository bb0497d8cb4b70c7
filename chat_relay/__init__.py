"""
Main application package for the chat relay service.

The relay routes real-time messages between websocket clients and an
automated assistant, adding intent-based replies, sentiment scores and smart
reply suggestions.
"""

from chat_relay.config import Settings, get_settings, load_env_file

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    "load_env_file",
]
