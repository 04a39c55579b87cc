"""Opaque record IDs.

Records are matched by id inside flat collections, so ids only need to be
unique strings; a short type prefix keeps logs readable (``pool_3f2a...``).
"""

import uuid


def generate_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex}"
