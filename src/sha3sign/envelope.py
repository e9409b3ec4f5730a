"""Signed-file envelope: the content and its signature in one armored text file.

Layout:

    -----BEGIN SIGNED MESSAGE-----
    <base64 of the content>
    -----BEGIN SIGNATURE-----
    <base64 of the big-endian signature bytes>
    -----END SIGNATURE-----

Typical usage example:

    out = sign_file(pathlib.Path("report.pdf"), pk)
    content, verdict = verify_file(out, pk.pub)
    content = extract_file(out)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import binascii
import pathlib
import random

from sha3sign.errors import EnvelopeError
from sha3sign.rsa import RSAPrivKey
from sha3sign.rsa import RSAPubKey
from sha3sign.rsa import signature_from_bytes
from sha3sign.rsa import signature_to_bytes
from sha3sign.rsa import Verdict

BEGIN_MESSAGE = "-----BEGIN SIGNED MESSAGE-----"
BEGIN_SIGNATURE = "-----BEGIN SIGNATURE-----"
END_SIGNATURE = "-----END SIGNATURE-----"
SIGNED_SUFFIX = ".signed"


def dump_envelope(content: bytes, signature: bytes) -> str:
    """Build the envelope text for `content` and its serialized `signature`."""
    return "".join(
        line + "\n" for line in (
            BEGIN_MESSAGE,
            base64.b64encode(content).decode("ascii"),
            BEGIN_SIGNATURE,
            base64.b64encode(signature).decode("ascii"),
            END_SIGNATURE,
        ))


def load_envelope(text: str) -> tuple[bytes, bytes]:
    """Parse envelope text.

    Base64 sections may be wrapped over several lines. Anything after the end marker is ignored.

    Args:
        text: The envelope text.

    Returns:
        The (content, signature bytes) pair.

    Raises:
        EnvelopeError: If a marker is missing or a section is not valid base64.
    """
    sections: dict[str, list[str]] = {}
    current = None
    for line in text.splitlines():
        line = line.strip()
        if line in (BEGIN_MESSAGE, BEGIN_SIGNATURE):
            current = sections.setdefault(line, [])
            continue
        if line == END_SIGNATURE:
            break
        if current is not None:
            current.append(line)
    else:
        raise EnvelopeError(f"Envelope does not contain footer: {END_SIGNATURE}")
    if BEGIN_MESSAGE not in sections or BEGIN_SIGNATURE not in sections:
        raise EnvelopeError("Envelope is missing its message or signature section")
    try:
        content = base64.b64decode("".join(sections[BEGIN_MESSAGE]), validate=True)
        signature = base64.b64decode("".join(sections[BEGIN_SIGNATURE]), validate=True)
    except binascii.Error as exc:
        raise EnvelopeError("Envelope section is not valid base64") from exc
    return content, signature


def sign_file(file: pathlib.Path,
              key: RSAPrivKey,
              out: pathlib.Path | None = None,
              rng: random.Random | None = None) -> pathlib.Path:
    """Sign a whole file and write the envelope next to it.

    Args:
        file: The file to sign.
        key: The private key.
        out: Destination of the envelope. Defaults to `<file>.signed`.
        rng: Randomness source for the OAEP seed.

    Returns:
        Path of the written envelope.
    """
    file = pathlib.Path(file)
    out = pathlib.Path(out) if out is not None else file.with_name(file.name + SIGNED_SUFFIX)
    content = file.read_bytes()
    signature = key.sign(content, rng)
    out.write_text(dump_envelope(content, signature_to_bytes(signature, key)), encoding="ascii")
    return out


def verify_file(file: pathlib.Path, key: RSAPubKey) -> tuple[bytes, Verdict]:
    """Verify a signed envelope file.

    Args:
        file: The envelope file.
        key: The public key.

    Returns:
        The embedded content and the verdict.
    """
    text = pathlib.Path(file).read_text(encoding="ascii", errors="replace")
    content, signature = load_envelope(text)
    return content, key.check(content, signature_from_bytes(signature))


def extract_file(file: pathlib.Path, out: pathlib.Path | None = None) -> bytes:
    """Recover the content embedded in a signed envelope, without checking the signature.

    Args:
        file: The envelope file.
        out: If given, the content is also written there.

    Returns:
        The embedded content.

    Raises:
        EnvelopeError: If the envelope is malformed.
    """
    text = pathlib.Path(file).read_text(encoding="ascii", errors="replace")
    content, _ = load_envelope(text)
    if out is not None:
        pathlib.Path(out).write_bytes(content)
    return content
