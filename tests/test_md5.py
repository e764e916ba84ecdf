"""Tests for the exportable MD5 accumulator."""

from __future__ import annotations

import hashlib
import struct

import pytest

from resumable_digest.core.errors import InvalidHashStateError
from resumable_digest.core.hasher import digest
from resumable_digest.core.md5 import STATE_MAGIC, STATE_SIZE, Md5Accumulator
from tests.conftest import HELLO, HELLO_MD5


@pytest.mark.parametrize("size", [0, 1, 3, 55, 56, 57, 63, 64, 65, 119, 120, 128, 1000])
def test_matches_hashlib(size):
    data = bytes((i * 7 + 3) % 256 for i in range(size))
    assert digest(data) == hashlib.md5(data).digest()


def test_hello_world_vector():
    assert digest(HELLO) == HELLO_MD5
    assert Md5Accumulator(HELLO).hexdigest() == "ed076287532e86365e841e92bfc50d8c"


def test_empty_input_vector():
    assert Md5Accumulator().hexdigest() == "d41d8cd98f00b204e9800998ecf8427e"


def test_incremental_updates_equal_one_pass():
    data = b"The quick brown fox jumps over the lazy dog" * 5
    acc = Md5Accumulator()
    for i in range(0, len(data), 7):
        acc.update(data[i:i + 7])
    assert acc.digest() == digest(data)
    assert acc.length == len(data)


def test_digest_does_not_consume_state():
    acc = Md5Accumulator(b"abc")
    first = acc.digest()
    assert acc.digest() == first
    acc.update(b"def")
    assert acc.digest() == hashlib.md5(b"abcdef").digest()


def test_copy_is_independent():
    acc = Md5Accumulator(b"abc")
    other = acc.copy()
    other.update(b"xyz")
    assert acc.digest() == hashlib.md5(b"abc").digest()
    assert other.digest() == hashlib.md5(b"abcxyz").digest()


# ---- export / import ----

def test_export_layout():
    acc = Md5Accumulator(b"Hello")
    state = acc.export_state()

    assert len(state) == STATE_SIZE == 92
    assert state[:4] == STATE_MAGIC
    assert state[20:25] == b"Hello"
    assert state[25:84] == b"\x00" * 59
    assert struct.unpack(">Q", state[84:]) == (5,)


def test_fresh_export_registers():
    state = Md5Accumulator().export_state()
    assert state[4:20] == bytes.fromhex("67452301efcdab8998badcfe10325476")


@pytest.mark.parametrize("split", [0, 1, 5, 12, 63, 64, 65, 130, 200])
def test_export_import_round_trip(split):
    data = bytes(range(256)) * 1 + b"tail"
    head, rest = data[:split], data[split:]

    original = Md5Accumulator(head)
    restored = Md5Accumulator()
    restored.import_state(original.export_state())

    assert restored.length == split
    assert restored.export_state() == original.export_state()

    restored.update(rest)
    original.update(rest)
    assert restored.digest() == original.digest() == hashlib.md5(data).digest()


def test_import_accepts_bytearray():
    acc = Md5Accumulator()
    acc.import_state(bytearray(Md5Accumulator(b"Hel").export_state()))
    acc.update(b"lo World!")
    assert acc.digest() == HELLO_MD5


def test_import_rejects_bad_magic():
    state = bytearray(Md5Accumulator(b"x").export_state())
    state[0:4] = b"sha\x01"
    with pytest.raises(InvalidHashStateError, match="identifier"):
        Md5Accumulator().import_state(bytes(state))


@pytest.mark.parametrize("size", [4, 50, STATE_SIZE - 1, STATE_SIZE + 1])
def test_import_rejects_bad_size(size):
    state = Md5Accumulator(b"x").export_state()
    bad = (state + b"\x00")[:size] if size > STATE_SIZE else state[:size]
    with pytest.raises(InvalidHashStateError, match="size"):
        Md5Accumulator().import_state(bad)


def test_failed_import_leaves_accumulator_untouched():
    acc = Md5Accumulator(b"abc")
    with pytest.raises(InvalidHashStateError):
        acc.import_state(b"garbage")
    assert acc.digest() == hashlib.md5(b"abc").digest()
