# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import random

import pytest

from sha3sign import __main__ as cli
from sha3sign import keygen
from sha3sign import rsa


@pytest.fixture
def small_keys(mocker):
    """Make keygen fast by serving a deterministic 1024-bit key."""
    real = rsa.RSAPrivKey.generate
    mocker.patch("sha3sign.rsa.RSAPrivKey.generate", side_effect=lambda size: real(1024, random.Random(size)))


def test_keygen_sign_verify(tmp_path, small_keys):
    pub, priv = tmp_path / "pub.txt", tmp_path / "priv.txt"
    assert cli.main(["-n", "keygen", "-p", str(pub), "-P", str(priv), "--keysize", "1024"]) == 0
    assert len(pub.read_text(encoding="ascii").split()) == 2
    doc = tmp_path / "doc.txt"
    doc.write_bytes(b"Hello, signature!")
    assert cli.main(["-n", "sign", "-P", str(priv), "--file", str(doc)]) == 0
    signed = tmp_path / "doc.txt.signed"
    assert signed.exists()
    assert cli.main(["-n", "verify", "-p", str(pub), "--signed", str(signed)]) == 0


def test_verify_fails_on_tamper(tmp_path, small_keys, capsys):
    pub, priv = tmp_path / "pub.pem", tmp_path / "priv.pem"
    assert cli.main(["-n", "keygen", "-p", str(pub), "-P", str(priv), "-f", "pem"]) == 0
    assert pub.read_text(encoding="ascii").startswith("-----BEGIN RSA PUBLIC KEY-----")
    doc = tmp_path / "doc.txt"
    doc.write_bytes(b"abc")
    out = tmp_path / "doc.sig"
    assert cli.main(["-n", "sign", "-P", str(priv), "--file", str(doc), "--output", str(out)]) == 0
    text = out.read_text(encoding="ascii").replace("YWJj", "YWJk", 1)
    out.write_text(text, encoding="ascii")
    assert cli.main(["-n", "verify", "-p", str(pub), "-S", str(out)]) == 1
    assert "digest mismatch" in capsys.readouterr().out


def test_keygen_refuses_overwrite(tmp_path, small_keys, capsys):
    pub, priv = tmp_path / "pub.txt", tmp_path / "priv.txt"
    pub.write_text("keep", encoding="ascii")
    assert cli.main(["-n", "keygen", "-p", str(pub), "-P", str(priv)]) == 1
    assert pub.read_text(encoding="ascii") == "keep"
    assert "already exists" in capsys.readouterr().err
    assert cli.main(["-n", "keygen", "-p", str(pub), "-P", str(priv), "-o"]) == 0
    assert pub.read_text(encoding="ascii") != "keep"


def test_missing_argument_non_interactive(tmp_path, capsys):
    assert cli.main(["-n", "sign", "-P", str(tmp_path / "priv.txt")]) == 1
    assert "non-interactive" in capsys.readouterr().err


def test_missing_key_file(tmp_path, capsys):
    doc = tmp_path / "doc.txt"
    doc.write_bytes(b"abc")
    assert cli.main(["-n", "sign", "-P", str(tmp_path / "nope.txt"), "--file", str(doc)]) == 1
    assert "Error" in capsys.readouterr().err


def test_interactive_prompts(tmp_path, small_keys, mocker):
    answers = iter(["keygen", str(tmp_path / "pub.txt"), str(tmp_path / "priv.txt"), "bogus", ""])
    mocker.patch("builtins.input", side_effect=lambda prompt: next(answers))
    assert cli.main([]) == 0
    assert (tmp_path / "pub.txt").exists()
    assert (tmp_path / "priv.txt").exists()


def test_checkmodes_defaults():
    assert cli.checkmodes("keysize", (True, False)) == "2048"
    assert cli.checkmodes("key_format", (False, False)) == "hex"
    assert isinstance(cli.checkmodes("key_format", (False, True)), cli.HelpData)
    with pytest.raises(IOError):
        cli.checkmodes("file", (True, False))


def test_sign_then_extract(tmp_path, small_keys, capsys):
    pub, priv = tmp_path / "pub.txt", tmp_path / "priv.txt"
    assert cli.main(["-n", "keygen", "-p", str(pub), "-P", str(priv)]) == 0
    doc = tmp_path / "doc.bin"
    doc.write_bytes(b"Hello\x00\xffextract")
    assert cli.main(["-n", "sign", "-P", str(priv), "--file", str(doc)]) == 0
    copy = tmp_path / "copy.bin"
    assert cli.main(["-n", "extract", "--signed", str(tmp_path / "doc.bin.signed"), "--output", str(copy)]) == 0
    assert copy.read_bytes() == b"Hello\x00\xffextract"
    capsys.readouterr()
    assert cli.main(["-n", "extract", "-S", str(tmp_path / "doc.bin.signed")]) == 0
    assert "Hello" in capsys.readouterr().out


def test_extract_malformed_envelope(tmp_path, capsys):
    bad = tmp_path / "bad.signed"
    bad.write_text("not an envelope\n", encoding="ascii")
    assert cli.main(["-n", "extract", "--signed", str(bad)]) == 1
    assert "footer" in capsys.readouterr().err


def test_keysize_default_follows_keygen():
    assert cli.help_dict["keysize"].default == str(keygen.DEFAULT_KEY_BITS)
    assert cli.help_dict["keysize"].default in cli.help_dict["keysize"].choices
