from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from typing import Final, Protocol

from protocol import MoveSet

KEY_BYTES: Final[int] = 32

logger = logging.getLogger("rps.commit_reveal")


class EntropyFailure(RuntimeError):
    """The operating system could not supply secure random bytes."""


def generate_key(num_bytes: int = KEY_BYTES) -> str:
    # Hex rather than base64: the key is shown to the player, who pastes it
    # into an HMAC calculator as text.
    try:
        raw = secrets.token_bytes(num_bytes)
    except (OSError, NotImplementedError) as exc:
        raise EntropyFailure(f"secure random source unavailable: {exc}") from exc
    return raw.hex()


def compute_hmac(key: str, move: str) -> str:
    return hmac.new(key.encode("utf-8"), move.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_hmac(*, expected_hmac: str, key: str, move: str) -> bool:
    computed = compute_hmac(key, move)
    # Bytes, since compare_digest rejects non-ASCII str input.
    return secrets.compare_digest(expected_hmac.strip().lower().encode("utf-8"), computed.encode("ascii"))


class CommitmentScheme(Protocol):
    def generate_key(self) -> str: ...

    def choose_index(self, n: int) -> int: ...

    def commit(self, key: str, move: str) -> str: ...


class HmacCommitmentScheme:
    """HMAC-SHA256 over the move name, keyed with a fresh CSPRNG key."""

    def generate_key(self) -> str:
        return generate_key()

    def choose_index(self, n: int) -> int:
        try:
            return secrets.randbelow(n)
        except (OSError, NotImplementedError) as exc:
            raise EntropyFailure(f"secure random source unavailable: {exc}") from exc

    def commit(self, key: str, move: str) -> str:
        return compute_hmac(key, move)


class FixedCommitmentScheme(HmacCommitmentScheme):
    """Deterministic key and computer move; the digest is still a real HMAC."""

    def __init__(self, key: str, index: int = 0) -> None:
        self.key = key
        self.index = index

    def generate_key(self) -> str:
        return self.key

    def choose_index(self, n: int) -> int:
        if not 0 <= self.index < n:
            raise ValueError(f"fixed index {self.index} out of range for {n} moves")
        return self.index


@dataclass(frozen=True)
class Commitment:
    move: str
    key: str
    hmac: str

    def verify(self) -> bool:
        return verify_hmac(expected_hmac=self.hmac, key=self.key, move=self.move)


def new_commitment(move_set: MoveSet, scheme: CommitmentScheme) -> Commitment:
    key = scheme.generate_key()
    move = move_set[scheme.choose_index(len(move_set))]
    digest = scheme.commit(key, move)
    logger.debug("committed computer move, hmac=%s", digest)
    return Commitment(move=move, key=key, hmac=digest)
