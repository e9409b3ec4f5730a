"""OAEP encoding and decoding fixed to SHA3-256, MGF1-SHA3-256 and the empty label.

The encoded message layout is `0x00 || maskedSeed || maskedDB`, exactly `k` bytes long, where `k` is the byte
length of the RSA modulus it will be exponentiated under.

Typical usage example:

    em = oaep_encode(sha3_256(b"content"), 256)
    digest = oaep_decode(em, 256)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from math import ceil
import random

from sha3sign import randomness
from sha3sign.errors import InvalidInputLength
from sha3sign.errors import InvalidPadding
from sha3sign.errors import MessageTooLong
from sha3sign.keccak import DIGEST_SIZE
from sha3sign.keccak import sha3_256

HLEN: int = DIGEST_SIZE
LABEL_HASH: bytes = sha3_256(b"")


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to an unsigned big-endian integer (OS2IP).

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int) -> bytes:
    """Converts an integer to a big-endian, left zero-padded byte string (I2OSP).

    Args:
        msg: The integer to unmarshal.
        fixedlen: The target length of the byte string.

    Returns:
        The representative bytes. (AKA Octet String)

    Raises:
        OverflowError: If `msg` does not fit into `fixedlen` bytes.
    """
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)


def xorbytes(a: bytes, b: bytes) -> bytes:
    """XOR bitwise for bytes.

    Requires two byte strings of equal length.

    Args:
        a: byte string
        b: byte string

    Returns:
        xor byte string
    """
    return bytes(x ^ y for x, y in zip(a, b, strict=True))


def mgf1(mgfseed: bytes, masklen: int) -> bytes:
    """The PKCS#1 v2.2 Mask Generation Function 1 over SHA3-256.

    Hashes the seed with a 4-byte big-endian counter appended, for counter 0, 1, ..., and truncates the
    concatenation to the requested length.

    Args:
        mgfseed: Seed for mask generation
        masklen: Intended length of mask

    Returns:
        The mask in form of bytes of length masklen.

    Raises:
        ValueError: If the mask length is negative or too long for the hash function.
    """
    if masklen < 0:
        raise ValueError("Mask length must be non-negative")
    if masklen > 2**32 * HLEN:
        raise ValueError("Mask too long for the hash function")
    t = b""
    for cnt in range(ceil(masklen / HLEN)):
        t += sha3_256(mgfseed + integer_to_bytes(cnt, 4))
    return t[:masklen]


def oaep_encode(message: bytes, k: int, rng: random.Random | None = None) -> bytes:
    """Encodes the message into a `k` byte OAEP encoded message.

    Args:
        message: Message to be encoded. At most `k - 2 * HLEN - 2` bytes.
        k: Length of the encoded message, the byte length of the modulus.
        rng: Randomness source for the seed. Defaults to the OS CSPRNG.

    Returns:
        The encoded message `0x00 || maskedSeed || maskedDB`.

    Raises:
        MessageTooLong: If the message does not fit.
    """
    if len(message) > k - 2 * HLEN - 2:
        raise MessageTooLong(f"Message of {len(message)} bytes does not fit into {k} byte encoded message")
    pad = b"\x00" * (k - len(message) - 2 * HLEN - 2)
    db = LABEL_HASH + pad + b"\x01" + message
    seed = randomness.resolve(rng).randbytes(HLEN)
    db_msk = mgf1(seed, len(db))
    mdb = xorbytes(db, db_msk)
    seed_msk = mgf1(mdb, HLEN)
    mseed = xorbytes(seed, seed_msk)
    return b"\x00" + mseed + mdb


def oaep_decode(em: bytes, k: int) -> bytes:
    """Decodes an OAEP encoded message and recovers the original message.

    The label hash comparison and the separator scan are not constant time.

    Args:
        em: The encoded message.
        k: Expected length of the encoded message.

    Returns:
        The recovered message.

    Raises:
        InvalidInputLength: If `k` is below `2 * HLEN + 2` or `em` is not `k` bytes long.
        InvalidPadding: If the label hash does not match or no `0x01` separator follows the zero padding.
    """
    if k < 2 * HLEN + 2:
        raise InvalidInputLength(f"Encoded message length {k} is below the minimum of {2 * HLEN + 2}")
    if len(em) != k:
        raise InvalidInputLength(f"Encoded message is {len(em)} bytes, expected {k}")
    mseed = em[1:HLEN + 1]
    mdb = em[HLEN + 1:]
    seed = xorbytes(mseed, mgf1(mdb, HLEN))
    db = xorbytes(mdb, mgf1(seed, k - HLEN - 1))
    if db[:HLEN] != LABEL_HASH:
        raise InvalidPadding("label hash mismatch")
    idx = HLEN
    while idx < len(db) and db[idx] == 0:
        idx += 1
    if idx == len(db) or db[idx] != 0x01:
        raise InvalidPadding("separator not found")
    return db[idx + 1:]
