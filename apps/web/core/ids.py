"""Record ids for documents in JSON collections."""

import secrets
import string
import time

ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_id(prefix: str) -> str:
    """<prefix>-<epoch ms>-<7 random lowercase alphanumerics>"""
    suffix = "".join(secrets.choice(ID_ALPHABET) for _ in range(7))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"
