"""MD5 accumulator whose running state can be exported and restored.

``hashlib.md5`` objects cannot be serialized, so the compression function is
implemented here. Exported state layout (92 bytes):

    magic (4) | A, B, C, D big-endian (16) | block buffer (64) | length (8)

Only the first ``length % 64`` bytes of the block buffer are meaningful; the
rest is zero.
"""

from __future__ import annotations

import math
import struct

from resumable_digest.core.errors import InvalidHashStateError

BLOCK_SIZE = 64
DIGEST_SIZE = 16

STATE_MAGIC = b"md5\x01"
STATE_SIZE = len(STATE_MAGIC) + 4 * 4 + BLOCK_SIZE + 8

_MASK = 0xFFFFFFFF
_INIT = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)

_SHIFTS = (
    [7, 12, 17, 22] * 4
    + [5, 9, 14, 20] * 4
    + [4, 11, 16, 23] * 4
    + [6, 10, 15, 21] * 4
)
_K = [int(abs(math.sin(i + 1)) * 2**32) & _MASK for i in range(64)]


def _rotl(x: int, n: int) -> int:
    return ((x << n) | (x >> (32 - n))) & _MASK


def compress(state: tuple[int, int, int, int], block: bytes) -> tuple[int, int, int, int]:
    """Run one 64-byte block through the MD5 compression function."""
    m = struct.unpack("<16I", block)
    a, b, c, d = state
    for i in range(64):
        if i < 16:
            f = (b & c) | (~b & d)
            g = i
        elif i < 32:
            f = (d & b) | (~d & c)
            g = (5 * i + 1) % 16
        elif i < 48:
            f = b ^ c ^ d
            g = (3 * i + 5) % 16
        else:
            f = c ^ (b | ~d)
            g = (7 * i) % 16
        f = (f + a + _K[i] + m[g]) & _MASK
        a, d, c = d, c, b
        b = (b + _rotl(f, _SHIFTS[i])) & _MASK
    return (
        (state[0] + a) & _MASK,
        (state[1] + b) & _MASK,
        (state[2] + c) & _MASK,
        (state[3] + d) & _MASK,
    )


class Md5Accumulator:
    """Incremental MD5 with ``export_state`` / ``import_state``."""

    __slots__ = ("_state", "_pending", "_length")

    digest_size = DIGEST_SIZE
    block_size = BLOCK_SIZE

    def __init__(self, data: bytes = b"") -> None:
        self.reset()
        if data:
            self.update(data)

    def reset(self) -> None:
        self._state = _INIT
        self._pending = b""
        self._length = 0

    @property
    def length(self) -> int:
        """Total number of bytes absorbed so far."""
        return self._length

    def update(self, data: bytes) -> None:
        self._length += len(data)
        buf = self._pending + bytes(data)
        full = len(buf) - len(buf) % BLOCK_SIZE
        state = self._state
        for start in range(0, full, BLOCK_SIZE):
            state = compress(state, buf[start:start + BLOCK_SIZE])
        self._state = state
        self._pending = buf[full:]

    def copy(self) -> Md5Accumulator:
        other = Md5Accumulator()
        other._state, other._pending, other._length = (
            self._state, self._pending, self._length
        )
        return other

    def digest(self) -> bytes:
        """Finalize into the 16-byte digest. Does not alter the running state."""
        bit_length = (self._length * 8) & 0xFFFFFFFFFFFFFFFF
        pad = b"\x80" + b"\x00" * ((55 - self._length) % BLOCK_SIZE)
        tail = self._pending + pad + struct.pack("<Q", bit_length)
        state = self._state
        for start in range(0, len(tail), BLOCK_SIZE):
            state = compress(state, tail[start:start + BLOCK_SIZE])
        return struct.pack("<4I", *state)

    def hexdigest(self) -> str:
        return self.digest().hex()

    def export_state(self) -> bytes:
        return (
            STATE_MAGIC
            + struct.pack(">4I", *self._state)
            + self._pending.ljust(BLOCK_SIZE, b"\x00")
            + struct.pack(">Q", self._length)
        )

    def import_state(self, data: bytes) -> None:
        data = bytes(data)
        if data[:len(STATE_MAGIC)] != STATE_MAGIC:
            raise InvalidHashStateError("invalid hash state identifier")
        if len(data) != STATE_SIZE:
            raise InvalidHashStateError(
                f"invalid hash state size: expected {STATE_SIZE} bytes, got {len(data)}"
            )
        offset = len(STATE_MAGIC)
        state = struct.unpack_from(">4I", data, offset)
        offset += 16
        block = data[offset:offset + BLOCK_SIZE]
        offset += BLOCK_SIZE
        (length,) = struct.unpack_from(">Q", data, offset)
        self._state = tuple(state)
        self._length = length
        self._pending = bytes(block[:length % BLOCK_SIZE])
