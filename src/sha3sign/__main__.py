"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface): every argument missing on the command
line is asked for interactively, unless non-interactive mode is on, in which case defaults are used and a missing
argument without one is an error.

Typical usage example:

    sha3sign keygen -n
    sha3sign sign --file report.pdf
    sha3sign extract --signed report.pdf.signed --output report.pdf
    python -m sha3sign verify --signed report.pdf.signed
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import sys
import typing

import sha3sign
from sha3sign import keygen as keygen_mod
from sha3sign import rsa
from sha3sign.errors import KeyGenerationError


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in sha3sign.",
            choices=["keygen", "sign", "verify", "extract"],
        ),
    "keygen":
        HelpData("Generate an RSA key pair."),
    "sign":
        HelpData("Sign a file into a signed envelope."),
    "verify":
        HelpData("Verify a signed envelope."),
    "extract":
        HelpData("Print or save the message embedded in a signed envelope."),
    "public_key":
        HelpData(
            description="Location of the public key file.",
            format=pathlib.Path,
            default=pathlib.Path("public_key.txt"),
        ),
    "private_key":
        HelpData(
            description="Location of the private key file.",
            format=pathlib.Path,
            default=pathlib.Path("private_key.txt"),
        ),
    "keysize":
        HelpData(
            description="Key size (in bits).",
            choices=["1024", "2048", "3072", "4096"],
            default=str(keygen_mod.DEFAULT_KEY_BITS),
        ),
    "key_format":
        HelpData(
            description="Key file format written by keygen.",
            choices=list(rsa.KEY_FORMATS),
            advanced=True,
            default="hex",
        ),
    "file":
        HelpData(
            description="The file to sign.",
            format=pathlib.Path,
        ),
    "output":
        HelpData(
            description="Where to write the result. Empty for <file>.signed when signing, the terminal when extracting.",
            format=str,
            advanced=True,
            default="",
        ),
    "signed":
        HelpData(
            description="The signed envelope to read.",
            format=pathlib.Path,
        ),
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            choices=["Y", "N"],
            default="N",
        )
}

needs = {
    "keygen": ("public_key", "private_key", "keysize", "key_format"),
    "sign": ("private_key", "file", "output"),
    "verify": ("public_key", "signed"),
    "extract": ("signed", "output"),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public_key", "-p", type=help_dict["public_key"].format, help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private_key",
                     "-P",
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
corep = argparse.ArgumentParser(prog="sha3sign")
corep.add_argument("--version", action="version", version=f"%(prog)s {sha3sign.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-v", action="count", default=0, help="Log more. Repeat for debug output")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

keygen = commands.add_parser("keygen", parents=[privkey, pubkey], help=help_dict["keygen"].description)
keygen.add_argument("--keysize", choices=help_dict["keysize"].choices, help=help_dict["keysize"].description)
keygen.add_argument("--key-format",
                    "-f",
                    choices=help_dict["key_format"].choices,
                    help=help_dict["key_format"].description)
keygen.add_argument("--overwrite", "-o", action="store_const", const="Y", help=help_dict["overwrite"].description)

sign = commands.add_parser("sign", parents=[privkey], help=help_dict["sign"].description)
sign.add_argument("--file", type=help_dict["file"].format, help=help_dict["file"].description)
sign.add_argument("--output", type=help_dict["output"].format, help=help_dict["output"].description)

verify = commands.add_parser("verify", parents=[pubkey], help=help_dict["verify"].description)
verify.add_argument("--signed", "-S", type=help_dict["signed"].format, help=help_dict["signed"].description)

extract = commands.add_parser("extract", help=help_dict["extract"].description)
extract.add_argument("--signed", "-S", type=help_dict["signed"].format, help=help_dict["signed"].description)
extract.add_argument("--output", type=help_dict["output"].format, help=help_dict["output"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    vald = set(helper_data.choices)
    for choice in helper_data.choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def run(args: argparse.Namespace, pstatus: tuple[bool, bool], pspr: typing.Callable) -> int:
    """Execute the fully specified subcommand."""
    match args.subcommand:
        case "keygen":
            if args.private_key.exists() or args.public_key.exists():
                rs = getattr(args, "overwrite", None)
                if rs is None:
                    rs = choice_handler("overwrite", pstatus, pspr)
                if rs == "N":
                    print("Destination private or public key already exists!", file=sys.stderr)
                    return 1
            pspr(f"Generating {args.keysize}-bit key pair "
                 f"({keygen_mod.MILLER_RABIN_ITERATIONS} Miller-Rabin iterations)...")
            rpk = rsa.RSAPrivKey.generate(int(args.keysize))
            rpk.export(args.private_key, args.key_format)
            rpk.pub.export(args.public_key, args.key_format)
            pspr(f"\nKey pair saved to {args.public_key} and {args.private_key}!")
        case "sign":
            rpk = rsa.RSAPrivKey.import_key(args.private_key)
            out = sha3sign.sign_file(args.file, rpk, pathlib.Path(args.output) if args.output else None)
            pspr(f"Signed file saved as {out}")
        case "verify":
            rpu = rsa.RSAPubKey.import_key(args.public_key)
            _, verdict = sha3sign.verify_file(args.signed, rpu)
            if verdict is not rsa.Verdict.VALID:
                print(f"Signature Verification Failed! ({verdict.value})")
                return 1
            pspr("Signature Verified!")
        case "extract":
            if args.output:
                sha3sign.extract_file(args.signed, pathlib.Path(args.output))
                pspr(f"Message saved to {args.output}")
            else:
                print(sha3sign.extract_file(args.signed).decode("utf-8", errors="replace"))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args(argv)
    pstatus = (args.non_interactive, args.advanced)
    logging.basicConfig(level=logging.WARNING - 10 * min(args.verbose, 2),
                        format="%(levelname)s %(name)s: %(message)s")

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to sha3sign!\n")
    try:
        if not args.subcommand:
            args.subcommand = choice_handler("subcommand", pstatus)
        for reqs in needs[args.subcommand]:
            if getattr(args, reqs, None) is None:
                if help_dict[reqs].choices is not None:
                    res = choice_handler(reqs, pstatus)
                else:
                    res = input_handler(reqs, pstatus)
                setattr(args, reqs, res)
            else:
                pspr(f"{reqs}: {getattr(args, reqs)}")
        pspr("\nInput Complete! Executing...")
        status = run(args, pstatus, pspr)
    except (OSError, ValueError, KeyGenerationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    pspr("Thank you for using sha3sign!")
    return status


if __name__ == "__main__":
    sys.exit(main())
