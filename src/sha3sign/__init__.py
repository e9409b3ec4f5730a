"""File signing with from-scratch SHA3-256, RSA key generation and OAEP.

Provides SHA3-256 (Keccak-f[1600]), Miller-Rabin prime generation, RSA key pairs with e = 65537, OAEP encoding with
MGF1-SHA3-256 and sign/verify operations over OAEP-padded digests, plus hex/PEM key files and the signed-file
envelope.

Typical usage example:

    pk = RSAPrivKey.generate(2048)
    sig = pk.sign(b"Hi there!")
    assert pk.pub.verify(b"Hi there!", sig)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from sha3sign.envelope import extract_file
from sha3sign.envelope import sign_file
from sha3sign.envelope import verify_file
from sha3sign.keccak import SHA3_256
from sha3sign.keccak import sha3_256
from sha3sign.keygen import check_prime
from sha3sign.keygen import generate_key_pair
from sha3sign.keygen import generate_prime
from sha3sign.keygen import generate_primes
from sha3sign.keygen import miller_rabin
from sha3sign.oaep import mgf1
from sha3sign.oaep import oaep_decode
from sha3sign.oaep import oaep_encode
from sha3sign.rsa import RSAPrivKey
from sha3sign.rsa import RSAPubKey
from sha3sign.rsa import Verdict

__version__ = "0.1.0"
__all__ = [
    "RSAPrivKey",
    "RSAPubKey",
    "Verdict",
    "SHA3_256",
    "sha3_256",
    "mgf1",
    "oaep_encode",
    "oaep_decode",
    "miller_rabin",
    "check_prime",
    "generate_prime",
    "generate_primes",
    "generate_key_pair",
    "extract_file",
    "sign_file",
    "verify_file",
]
