"""Core Key Generation Utility, mainly focusing on the generation of random large primes.

This module generates RSA key pairs with the public exponent fixed at 65537. Primes are probable primes found by
drawing random odd candidates of exact bit length and testing them with Miller-Rabin, after a cheap trial division
against a cached table of small primes.

Typical usage example:

    p = generate_prime(1024)
    p, q = generate_primes(2048)
    (n, e), (n, d, p, q) = generate_key_pair(2048)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import random

from sha3sign import randomness
from sha3sign.errors import CoprimalityError
from sha3sign.errors import KeyGenerationError

logger = logging.getLogger(__name__)

PUBLIC_EXPONENT: int = 65537
MILLER_RABIN_ITERATIONS: int = 40
MIN_KEY_BITS: int = 32
MAX_KEYGEN_ATTEMPTS: int = 16
DEFAULT_KEY_BITS: int = 2048
_PRIME_SEARCH_FACTOR: int = 10

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0


def _sieve(n: int = 10000) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Uses the textbook Sieve of Eratosthenes to generate a set of primes up to `n`.
    Includes memory space optimization and sieving until root.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.

    Returns:
        A list of primes up to `n`.
    """
    if n < 2:
        return []
    i_size = (n - 1) // 2
    candidate: list[bool] = [True] * i_size
    for i in range(int(n**0.5) // 2):
        if candidate[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, i_size, r):
                candidate[j] = False
    return [2] + [(no * 2 + 3) for no, ele in enumerate(candidate) if ele]


def get_pre_primes(n: int = 10000, change: bool = False) -> list[int]:
    """Get the small primes, automatically generating if necessary.

    Uses the module-level `_SMALL_PRIMES` as a cache. Regeneration occurs if the requested range is greater, forced
    by `change` or the cache is empty.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.
        change: Whether to force a recomputation of primes. Defaults to False.

    Returns:
        List of primes in ascending order. All primes at least to `n` or more unless `change` is True.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or change or not _SMALL_PRIMES:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def _trial_division(no: int, n: int = 10000) -> bool:
    """Check the provided `no` against the known small primes.

    Args:
         no: The number to check. Must be integer and non-negative.
         n: The number up to which to use small primes. Passed to `get_pre_primes()`.

    Returns:
        False if `no` cannot be prime, True otherwise.
    """
    if no < 2:
        return False
    for prime in get_pre_primes(n):
        if prime**2 > no:
            return True
        if no % prime == 0:
            return False
    return True


def miller_rabin(n: int, iters: int = MILLER_RABIN_ITERATIONS, rng: random.Random | None = None) -> bool:
    """Perform the Miller-Rabin primality test.

    Writes `n - 1 = 2**r * d` with `d` odd and runs `iters` rounds with random bases in `[2, n - 2]`. A composite
    survives a single round with probability at most 1/4.

    Args:
        n: Integer to be tested.
        iters: Number of rounds to perform.
        rng: Randomness source for the bases. Defaults to the OS CSPRNG.

    Returns:
        True if `n` is probably prime, False if it is certainly composite.
    """
    if n in (2, 3):
        return True
    if n <= 1 or n % 2 == 0:
        return False
    rng = randomness.resolve(rng)
    nm1 = n - 1
    r = (nm1 & -nm1).bit_length() - 1
    d = nm1 >> r
    for _ in range(iters):
        a = rng.randrange(2, n - 1)
        x = pow(a, d, n)
        if x in (1, nm1):
            continue
        for _ in range(r - 1):
            x = pow(x, 2, n)
            if x == nm1:
                break
        else:
            return False
    return True


def check_prime(candidate: int, iters: int = MILLER_RABIN_ITERATIONS, rng: random.Random | None = None) -> bool:
    """Performs a composite primality test: trial division by small primes, then Miller-Rabin.

    Args:
        candidate: The candidate prime to test.
        iters: Number of Miller-Rabin iterations to perform.
        rng: Randomness source for the Miller-Rabin bases.

    Returns:
        True if `candidate` is probably prime, False otherwise.
    """
    if not _trial_division(candidate):
        return False
    return miller_rabin(candidate, iters, rng)


def generate_prime(bits: int, rng: random.Random | None = None) -> int:
    """Generate a probable prime of exactly `bits` bits.

    Candidates have the top two bits and the bottom bit forced, so they are odd, have the requested length and the
    product of two of them has exactly `2 * bits` bits.

    Args:
        bits: The size of the prime in bits. Must be at least 2.
        rng: Randomness source. Defaults to the OS CSPRNG.

    Returns:
        A probable prime number.

    Raises:
        ValueError: If `bits` is below 2.
        KeyGenerationError: If no prime turns up within `10 * bits` candidates.
    """
    if bits < 2:
        raise ValueError("Prime size must be at least 2 bits.")
    rng = randomness.resolve(rng)
    msk = (1 << bits - 1) | (1 << bits - 2) | 1
    rep_cap = bits * _PRIME_SEARCH_FACTOR
    for attempt in range(rep_cap):
        cand = rng.getrandbits(bits) | msk
        if cand.bit_length() == bits and check_prime(cand, MILLER_RABIN_ITERATIONS, rng):
            logger.debug("Found %d-bit prime after %d candidates.", bits, attempt + 1)
            return cand
    raise KeyGenerationError(f"Run an improbable {rep_cap} amount of loops with no prime found. "
                             "Check system random number generator.")


def generate_primes(size: int, rng: random.Random | None = None) -> tuple[int, int]:
    """Generates a pair of distinct primes of `size / 2` bits each.

    Args:
        size: The key size to generate the prime pair for. Must be even.
        rng: Randomness source. Defaults to the OS CSPRNG.

    Returns:
        A pair of distinct probable primes.

    Raises:
        KeyGenerationError: If `q` keeps colliding with `p`.
    """
    p = generate_prime(size // 2, rng)
    for _ in range(MAX_KEYGEN_ATTEMPTS):
        q = generate_prime(size // 2, rng)
        if q != p:
            return p, q
    raise KeyGenerationError("Could not draw a second prime distinct from the first.")


def _derive_private_exponent(p: int, q: int, pub: int = PUBLIC_EXPONENT) -> int:
    """Derive `d = pub^-1 mod (p-1)(q-1)`.

    Raises:
        CoprimalityError: If `pub` is not invertible modulo phi.
    """
    phi = (p - 1) * (q - 1)
    if math.gcd(pub, phi) != 1:
        raise CoprimalityError(f"gcd({pub}, phi) != 1")
    try:
        return pow(pub, -1, phi)
    except ValueError as exc:
        raise CoprimalityError(f"{pub} has no inverse modulo phi") from exc


def generate_key_pair(size: int,
                      rng: random.Random | None = None) -> tuple[tuple[int, int], tuple[int, int, int, int]]:
    """Generates an RSA key pair with public exponent 65537.

    Draws both primes afresh whenever the public exponent is not coprime to phi, up to `MAX_KEYGEN_ATTEMPTS` times.

    Args:
        size: Bit length of the modulus. Must be even and at least `MIN_KEY_BITS`.
        rng: Randomness source. Defaults to the OS CSPRNG.

    Returns:
        A tuple of (public, private) sub-tuples: (modulus, public exponent) and
        (modulus, private exponent, p, q).

    Raises:
        ValueError: If `size` is odd or too small.
        KeyGenerationError: If every attempt failed.
    """
    if size < MIN_KEY_BITS:
        raise ValueError(f"Size must be at least {MIN_KEY_BITS}.")
    if size % 2 != 0:
        raise ValueError("Size must be an even number.")
    rng = randomness.resolve(rng)
    for attempt in range(1, MAX_KEYGEN_ATTEMPTS + 1):
        p, q = generate_primes(size, rng)
        try:
            d = _derive_private_exponent(p, q)
        except CoprimalityError as exc:
            logger.warning("Key generation attempt %d discarded: %s. Retrying.", attempt, exc)
            continue
        n = p * q
        logger.info("Generated %d-bit key pair.", n.bit_length())
        return (n, PUBLIC_EXPONENT), (n, d, p, q)
    raise KeyGenerationError(f"No valid key pair after {MAX_KEYGEN_ATTEMPTS} attempts.")
