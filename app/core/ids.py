"""Identifier and clock helpers shared by the chat services."""

from __future__ import annotations

import time
import uuid


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def _generate_id(prefix: str) -> str:
    # Time-based prefix plus random suffix: unique without coordination.
    return f"{prefix}_{now_ms()}_{uuid.uuid4().hex[:13]}"


def generate_chat_id() -> str:
    return _generate_id("chat")


def generate_message_id() -> str:
    return _generate_id("msg")
