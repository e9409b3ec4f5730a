"""Configures pytest further and provides shared key material."""
import random

import pytest

from sha3sign import RSAPrivKey

SESSION_SEED = 20251017


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", default=False, help="skip slower tests")
    parser.addoption("--run-extreme", action="store_true", default=False, help="run extreme key size tests")


def pytest_collection_modifyitems(config, items):
    skipdict = {}
    if config.getoption("--skip-slow"):
        skipdict["slow"] = pytest.mark.skip(reason="Slow test: needs no --skip-slow option")
    if not config.getoption("--run-extreme"):
        skipdict["extreme"] = pytest.mark.skip(reason="Extreme test: needs --run-extreme option")
    if not skipdict:
        return
    for item in items:
        for k, v in skipdict.items():
            if k in item.keywords:
                item.add_marker(v)


@pytest.fixture
def rng() -> random.Random:
    """A fresh, reproducible randomness source per test."""
    return random.Random(SESSION_SEED)


@pytest.fixture(scope="session")
def private_key() -> RSAPrivKey:
    """A 1024-bit key pair shared by the whole session; generation dominates test time otherwise."""
    return RSAPrivKey.generate(1024, random.Random(SESSION_SEED))
