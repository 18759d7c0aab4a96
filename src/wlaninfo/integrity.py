"""Self-integrity check against installation or download corruption.

The checked file ends with a stamp line::

    ## END 0123456789ab

where the hex string is the first 12 digits of the MD5 digest of every
byte before that line.  ``wlaninfo --stamp`` rewrites the stamp after a
deliberate edit.
"""

from __future__ import annotations

import hashlib
import logging
import re

from wlaninfo.wifi_common import IntegrityError

logger = logging.getLogger(__name__)

DIGEST_LENGTH = 12
STAMP_PREFIX = "## END "

_STAMP_RE = re.compile(rb"^## END ([0-9a-f]+)\s*$")


def _split_last_line(data: bytes) -> tuple[bytes, bytes]:
    """Split *data* into (everything before the last line, the last line)."""
    lines = data.splitlines(keepends=True)
    if not lines:
        return b"", b""
    return b"".join(lines[:-1]), lines[-1]


def digest_bytes(body: bytes) -> str:
    return hashlib.md5(body).hexdigest()[:DIGEST_LENGTH]


def compute_digest(path: str) -> str:
    """Return the truncated MD5 digest of *path* without its last line."""
    with open(path, "rb") as f:
        body, _ = _split_last_line(f.read())
    return digest_bytes(body)


def read_stamp(path: str) -> str | None:
    """Return the digest recorded in the stamp line of *path*, or None."""
    with open(path, "rb") as f:
        _, last = _split_last_line(f.read())
    match = _STAMP_RE.match(last)
    return match.group(1).decode("ascii") if match else None


def verify(path: str) -> bool:
    """Check *path* against its stamp line.

    Returns True when the digest matches, False when the file cannot be
    read or carries no stamp (nothing to verify against).

    Raises:
        IntegrityError: the stamp does not match the file contents.
    """
    try:
        stamp = read_stamp(path)
        actual = compute_digest(path)
    except OSError as exc:
        logger.debug("integrity check skipped, cannot read %s: %s", path, exc)
        return False

    if stamp is None:
        logger.debug("no integrity stamp in %s", path)
        return False
    if stamp != actual:
        logger.debug("integrity mismatch in %s: stamp=%s actual=%s", path, stamp, actual)
        raise IntegrityError(
            "Self-integrity check failed.",
            "Please download and install a new copy.",
        )
    return True


def stamp(path: str) -> str:
    """Write the current digest of *path* into its stamp line and return it.

    A file without a stamp line gets one appended.
    """
    with open(path, "rb") as f:
        data = f.read()

    body, last = _split_last_line(data)
    if not _STAMP_RE.match(last):
        body = data if data.endswith(b"\n") or not data else data + b"\n"
    digest = digest_bytes(body)

    with open(path, "wb") as f:
        f.write(body)
        f.write(f"{STAMP_PREFIX}{digest}\n".encode("ascii"))
    logger.debug("stamped %s with %s", path, digest)
    return digest
