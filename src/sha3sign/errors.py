"""Exception taxonomy for sha3sign.

Every exception derives from the builtin the code would raise anyway, so callers that already catch `ValueError`,
`IOError` or `RuntimeError` keep working.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class OAEPError(ValueError):
    """Base class for all OAEP encoding/decoding failures."""


class MessageTooLong(OAEPError):
    """The message does not fit into an encoded message of the requested length."""


class InvalidInputLength(OAEPError):
    """The encoded message (or its intended length) is structurally too short or mismatched."""


class InvalidPadding(OAEPError):
    """The decoded data block is malformed.

    Attributes:
        reason: Short description of the failed check.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid padding: {reason}")
        self.reason = reason


class KeyLoadError(IOError):
    """A key file could not be parsed."""


class EnvelopeError(ValueError):
    """A signed-file envelope is malformed."""


class CoprimalityError(ArithmeticError):
    """The public exponent is not invertible modulo phi. Handled inside key generation."""


class KeyGenerationError(RuntimeError):
    """Bounded prime search or key-pair restarts were exhausted."""
