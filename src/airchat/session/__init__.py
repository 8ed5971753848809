"""Conversation session module for airchat.

Owns the running context of a conversation and its token accounting.
"""

from .client import Client
from .models import ClientConfig

__all__ = ["Client", "ClientConfig"]
