"""Core link resolution modules."""

from .link_pattern import build_link_pattern
from .resolver import LinkSourceResolver, Relocation, MoveReason

__all__ = [
    'build_link_pattern',
    'LinkSourceResolver',
    'Relocation',
    'MoveReason',
]
