"""Salted digests of canonical DNA strings.

Two hash paths exist. SHA-256 is the default and the only one whose output
may be bound into a commitment. The demo path is a 32-bit string hash kept
for offline demos; records carry the scheme that produced them so callers
can refuse demo hashes.
"""
import asyncio
import hashlib
import logging
import re
import secrets
import time
from typing import Awaitable, Callable, Optional

from src.config import SALT_BYTES
from src.errors import DigestUnavailableError, RandomnessUnavailableError
from src.models.sonic import HashScheme, SonicDNA

logger = logging.getLogger(__name__)

DigestProvider = Callable[[str], Awaitable[str]]

HEX_DIGEST_LENGTH = 64
_HEX_DIGEST = re.compile(r"^[0-9a-f]{64}$")


def generate_salt(nbytes: int = SALT_BYTES) -> str:
    """Return a fresh salt from the operating system CSPRNG.

    Raises:
        RandomnessUnavailableError: If no secure randomness source exists
    """
    try:
        return secrets.token_hex(nbytes)
    except (NotImplementedError, OSError) as e:
        raise RandomnessUnavailableError(
            "Secure random number generator not available"
        ) from e


def _utf8(data: str) -> bytes:
    # Lone surrogates become U+FFFD; surrogate pairs are joined first
    text = data.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")
    return text.encode("utf-8")


def sha256_hex(data: str) -> str:
    """SHA-256 of the UTF-8 encoding of ``data`` as lowercase hex.

    String literals may decode to lone surrogates. Those are encoded as
    U+FFFD, the way a browser ``TextEncoder`` does.

    Raises:
        DigestUnavailableError: If this interpreter cannot provide SHA-256
    """
    try:
        hasher = hashlib.new("sha256")
    except ValueError as e:
        raise DigestUnavailableError("SHA-256 is not available in this environment") from e
    hasher.update(_utf8(data))
    return hasher.hexdigest()


def demo_hash_hex(data: str) -> str:
    """Non-cryptographic 32-bit string hash padded to 64 hex characters.

    Iterates UTF-16 code units (h = h * 31 + unit, wrapped to signed 32 bit)
    so values agree with the browser demo build. Never use for commitments.
    """
    units = data.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(units), 2):
        h = (h * 31 + (units[i] | units[i + 1] << 8)) & 0xFFFFFFFF
    if h & 0x80000000:
        h -= 0x100000000
    block = format(abs(h), "x").rjust(8, "0")
    return (block * 8)[:HEX_DIGEST_LENGTH]


def hash_payload(payload: str, scheme: HashScheme = HashScheme.SHA256) -> str:
    if scheme is HashScheme.DEMO:
        return demo_hash_hex(payload)
    return sha256_hex(payload)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _record(
    dna: str,
    salt: str,
    digest_hex: str,
    include_timestamp: bool,
    scheme: HashScheme,
) -> SonicDNA:
    return SonicDNA(
        dna=dna,
        hash=digest_hex,
        salt=salt,
        timestamp=_now_ms() if include_timestamp else 0,
        scheme=scheme,
    )


def digest(
    dna: str,
    salt: Optional[str] = None,
    include_timestamp: bool = False,
    scheme: HashScheme = HashScheme.SHA256,
) -> SonicDNA:
    """Hash ``dna + salt`` into a SonicDNA record.

    Args:
        dna: Canonical DNA string
        salt: Salt to reuse. An empty or missing salt gets a fresh one.
        include_timestamp: Stamp the record with the current time
        scheme: Digest function. Only SHA-256 is commitment safe.

    Returns:
        SonicDNA with dna, hash, salt, timestamp and scheme set
    """
    salt = salt or generate_salt()
    return _record(dna, salt, hash_payload(dna + salt, scheme), include_timestamp, scheme)


async def _remote_digest(provider: DigestProvider, payload: str) -> Optional[str]:
    try:
        result = await provider(payload)
    except Exception as e:
        logger.warning("Remote digest failed, using local SHA-256: %s", e)
        return None
    if not isinstance(result, str) or not _HEX_DIGEST.match(result.strip().lower()):
        logger.warning("Remote digest returned a malformed value, using local SHA-256")
        return None
    return result.strip().lower()


async def digest_async(
    dna: str,
    salt: Optional[str] = None,
    include_timestamp: bool = False,
    scheme: HashScheme = HashScheme.SHA256,
    provider: Optional[DigestProvider] = None,
) -> SonicDNA:
    """Awaitable variant of :func:`digest`.

    Hashing runs in a worker thread. A ``provider`` (for example a managed
    crypto service) may compute the SHA-256 digest instead; when it fails or
    answers with anything but 64 hex characters the local digest is used.
    """
    salt = salt or generate_salt()
    payload = dna + salt
    digest_hex = None
    if provider is not None and scheme is HashScheme.SHA256:
        digest_hex = await _remote_digest(provider, payload)
    if digest_hex is None:
        digest_hex = await asyncio.to_thread(hash_payload, payload, scheme)
    return _record(dna, salt, digest_hex, include_timestamp, scheme)
