"""
Identifier generators: pure, side-effect-free functions.
"""

from __future__ import annotations

import uuid


def generate_share_link_id() -> str:
    """Generate a random UUID4 string used as a public share link id.

    UUID4 carries 122 random bits, enough that link ids cannot be guessed.
    """
    return str(uuid.uuid4())
