"""Randomness sources for key generation and OAEP seeding.

Every function consuming entropy takes an explicit `rng` argument compatible with `random.Random` (`getrandbits`,
`randrange`, `randbytes`). Passing `None` resolves to `default_source()`, the operating system CSPRNG. Tests pass a
seeded `random.Random` for reproducible results.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import os
import random
import secrets
import time
import warnings

logger = logging.getLogger(__name__)


def default_source() -> random.Random:
    """Get the default randomness source.

    Returns:
        A `secrets.SystemRandom` instance, or a time-seeded `random.Random` if the operating system offers no
        entropy source.
    """
    try:
        os.urandom(1)
    except NotImplementedError:
        logger.warning("No OS randomness source available, falling back to a time-seeded generator.")
        warnings.warn("Falling back to a time-seeded random generator. Generated material is not secure!",
                      RuntimeWarning)
        return random.Random(time.time_ns())
    return secrets.SystemRandom()


def resolve(rng: random.Random | None) -> random.Random:
    """Return `rng` or, if it is None, the default source."""
    if rng is None:
        return default_source()
    return rng
