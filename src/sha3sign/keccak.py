"""SHA3-256 built directly on the Keccak-f[1600] permutation.

A self-contained sponge implementation following FIPS 202. The state is kept as a flat list of 25 lanes indexed by
`x + 5 * y`, each lane a 64-bit integer. Only the SHA3-256 instance (rate 136 bytes, capacity 64 bytes, domain
separation suffix `0x06`) is provided.

Typical usage example:

    digest = sha3_256(b"Hi there!")
    h = SHA3_256()
    h.update(b"Hi ")
    h.update(b"there!")
    assert h.digest() == digest
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import copy

DIGEST_SIZE: int = 32
RATE: int = 136
ROUNDS: int = 24
_LANES: int = RATE // 8
_MASK64: int = (1 << 64) - 1

ROUND_CONSTANTS: tuple[int, ...] = (
    0x0000000000000001, 0x0000000000008082, 0x800000000000808A, 0x8000000080008000,
    0x000000000000808B, 0x0000000080000001, 0x8000000080008081, 0x8000000000008009,
    0x000000000000008A, 0x0000000000000088, 0x0000000080008009, 0x000000008000000A,
    0x000000008000808B, 0x800000000000008B, 0x8000000000008089, 0x8000000000008003,
    0x8000000000008002, 0x8000000000000080, 0x000000000000800A, 0x800000008000000A,
    0x8000000080008081, 0x8000000000008080, 0x0000000080000001, 0x8000000080008008,
)

# Rotation offsets indexed by x + 5 * y.
ROTATION_OFFSETS: tuple[int, ...] = (
    0, 1, 62, 28, 27,
    36, 44, 6, 55, 20,
    3, 10, 43, 25, 39,
    41, 45, 15, 21, 8,
    18, 2, 61, 56, 14,
)

# Destination of lane (x, y) under pi: (y, 2x + 3y).
_PI_TARGET: tuple[int, ...] = tuple(y + 5 * ((2 * x + 3 * y) % 5) for y in range(5) for x in range(5))


def _rotl(lane: int, n: int) -> int:
    """Rotate a 64-bit lane left by `n` bits."""
    return ((lane << n) | (lane >> (64 - n))) & _MASK64 if n else lane


def keccak_f1600(state: list[int]) -> None:
    """Apply the 24-round Keccak-f[1600] permutation to `state` in place.

    Args:
        state: List of 25 lanes, each a non-negative integer below 2**64.
    """
    for rc in ROUND_CONSTANTS:
        # Theta
        c = [state[x] ^ state[x + 5] ^ state[x + 10] ^ state[x + 15] ^ state[x + 20] for x in range(5)]
        d = [c[(x - 1) % 5] ^ _rotl(c[(x + 1) % 5], 1) for x in range(5)]
        for i in range(25):
            state[i] ^= d[i % 5]
        # Rho and Pi
        b = [0] * 25
        for i in range(25):
            b[_PI_TARGET[i]] = _rotl(state[i], ROTATION_OFFSETS[i])
        # Chi
        for y in range(0, 25, 5):
            row = b[y:y + 5]
            for x in range(5):
                state[y + x] = row[x] ^ (~row[(x + 1) % 5] & _MASK64 & row[(x + 2) % 5])
        # Iota
        state[0] ^= rc


def pad(message_len: int) -> bytes:
    """Return the SHA3 multi-rate padding for a message of `message_len` bytes.

    The domain suffix `0x06` is followed by zero bytes up to the rate boundary, and `0x80` is OR-ed into the final
    byte. When only one byte of room remains both land in the same byte (`0x86`).

    Args:
        message_len: Length of the message (or its unabsorbed tail) in bytes.

    Returns:
        The padding bytes, between 1 and `RATE` bytes long.
    """
    room = RATE - (message_len % RATE)
    padding = bytearray(room)
    padding[0] = 0x06
    padding[-1] |= 0x80
    return bytes(padding)


class SHA3_256:  # pylint: disable=invalid-name
    """Incremental SHA3-256 hasher with the `hashlib` object interface.

    Attributes:
        name: Algorithm name, as reported by `hashlib`.
        digest_size: Output length in bytes.
        block_size: Sponge rate in bytes.
    """
    name = "sha3_256"
    digest_size = DIGEST_SIZE
    block_size = RATE

    def __init__(self, data: bytes = b"") -> None:
        self._state: list[int] = [0] * 25
        self._buffer = bytearray()
        if data:
            self.update(data)

    def _absorb(self, block: bytes | bytearray) -> None:
        for i in range(_LANES):
            self._state[i] ^= int.from_bytes(block[i * 8:i * 8 + 8], "little")
        keccak_f1600(self._state)

    def update(self, data: bytes) -> None:
        """Absorb more data into the sponge."""
        self._buffer.extend(data)
        full = len(self._buffer) - len(self._buffer) % RATE
        for off in range(0, full, RATE):
            self._absorb(self._buffer[off:off + RATE])
        del self._buffer[:full]

    def digest(self) -> bytes:
        """Return the digest of everything absorbed so far, leaving the hasher usable."""
        state = self._state[:]
        tail = bytes(self._buffer) + pad(len(self._buffer))
        for i in range(_LANES):
            state[i] ^= int.from_bytes(tail[i * 8:i * 8 + 8], "little")
        keccak_f1600(state)
        return b"".join(lane.to_bytes(8, "little") for lane in state[:DIGEST_SIZE // 8])

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> "SHA3_256":
        return copy.deepcopy(self)


def sha3_256(data: bytes) -> bytes:
    """Compute the SHA3-256 digest of `data`.

    Args:
        data: Message of any length, including empty.

    Returns:
        The 32-byte digest.
    """
    return SHA3_256(data).digest()
