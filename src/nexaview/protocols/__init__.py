"""Protocol interfaces for swappable implementations.

Protocols use structural typing, so services can be handed Redis in
production and an in-memory fake in tests without code changes.
"""

from .key_value_store import KeyValueStore

__all__ = [
    "KeyValueStore",
]
