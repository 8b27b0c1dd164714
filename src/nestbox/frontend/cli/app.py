"""
Command line front end for nestbox.

Structured input is read as JSON from ``--data`` or stdin; results go to
stdout and diagnostics to stderr. Examples:

    echo '{"user": {"name": "ada"}}' | nestbox get user.name
    echo '{}' | nestbox set server.port 8080
    echo '{"id": 7}' | nestbox encrypt --key s3cret --iv salt
    nestbox mask 4111111111111111 --max-length 4 --blocks 1
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from nestbox.core import paths
from nestbox.core.exceptions import NestboxError
from nestbox.core.parsing import object_from_string
from nestbox.core.strings import mask, truncate
from nestbox.security.crypto import supported_methods
from nestbox.security.encryption import decrypt, decrypt_json, encrypt
from nestbox.frontend.cli.context import build_cipher_spec
from nestbox.frontend.cli.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _read_input(args: argparse.Namespace) -> str:
    if args.data is not None and args.data != "-":
        return args.data
    return sys.stdin.read()


def _read_object(args: argparse.Namespace) -> Any:
    text = _read_input(args).strip()
    if not text:
        return {}
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        # fall back to the first {...} span, e.g. a log line with a JSON tail
        return object_from_string(text)


def _parse_value(raw: str) -> Any:
    # values that are not valid JSON are taken as plain strings
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _dump(value: Any) -> None:
    if isinstance(value, str):
        print(value)
    else:
        print(json.dumps(value, ensure_ascii=False))


def _cmd_get(args: argparse.Namespace) -> int:
    default = _parse_value(args.default) if args.default is not None else None
    _dump(paths.get(_read_object(args), args.address, default))
    return 0


def _cmd_set(args: argparse.Namespace) -> int:
    _dump(paths.set(_read_object(args), args.address, _parse_value(args.value)))
    return 0


def _cmd_encrypt(args: argparse.Namespace) -> int:
    spec = build_cipher_spec(args.method, args.key, args.iv)
    payload = _read_object(args)
    if not isinstance(payload, dict):
        raise SystemExit("encrypt expects a JSON object")
    print(encrypt(payload, spec))
    return 0


def _cmd_decrypt(args: argparse.Namespace) -> int:
    spec = build_cipher_spec(args.method, args.key, args.iv)
    ciphertext = _read_input(args).strip()
    if args.json:
        print(json.dumps(decrypt_json(ciphertext, spec), indent=2, ensure_ascii=False))
    else:
        print(decrypt(ciphertext, spec))
    return 0


def _cmd_mask(args: argparse.Namespace) -> int:
    print(mask(args.text, args.max_length, args.blocks, args.mask_char))
    return 0


def _cmd_truncate(args: argparse.Namespace) -> int:
    print(truncate(args.text, args.max_length, args.blocks, args.ellipsis))
    return 0


def _cmd_methods(args: argparse.Namespace) -> int:
    for name in supported_methods():
        print(name)
    return 0


def _add_cipher_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--method", default=None, help="Cipher method (env NESTBOX_CIPHER_METHOD, default aes-256-cbc)")
    parser.add_argument("--key", default=None, help="Secret key (env NESTBOX_CIPHER_KEY)")
    parser.add_argument("--iv", default=None, help="Initialization vector secret (env NESTBOX_CIPHER_IV)")


def _add_data_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--data", default=None, help="Input text; read from stdin when omitted or '-'")


def _add_obfuscation_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("text", help="String to obfuscate")
    parser.add_argument("--max-length", type=int, default=3, help="Characters kept per block")
    parser.add_argument("--blocks", type=int, default=1, help="Number of blocks")


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nestbox",
        description="Read, write, mask and encrypt nested JSON data.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_get = sub.add_parser("get", help="Read the value at a dotted address")
    p_get.add_argument("address")
    p_get.add_argument("--default", default=None, help="JSON value returned when the address is empty")
    _add_data_option(p_get)
    p_get.set_defaults(func=_cmd_get)

    p_set = sub.add_parser("set", help="Write a value at a dotted address")
    p_set.add_argument("address")
    p_set.add_argument("value", help="JSON value (plain text is stored as a string)")
    _add_data_option(p_set)
    p_set.set_defaults(func=_cmd_set)

    p_enc = sub.add_parser("encrypt", help="Encrypt a JSON object")
    _add_cipher_options(p_enc)
    _add_data_option(p_enc)
    p_enc.set_defaults(func=_cmd_encrypt)

    p_dec = sub.add_parser("decrypt", help="Decrypt text produced by encrypt")
    _add_cipher_options(p_dec)
    _add_data_option(p_dec)
    p_dec.add_argument("--json", action="store_true", help="Parse and pretty-print the result")
    p_dec.set_defaults(func=_cmd_decrypt)

    p_mask = sub.add_parser("mask", help="Mask the tail of every block of a string")
    _add_obfuscation_options(p_mask)
    p_mask.add_argument("--mask-char", default="*")
    p_mask.set_defaults(func=_cmd_mask)

    p_trunc = sub.add_parser("truncate", help="Truncate every block of a string")
    _add_obfuscation_options(p_trunc)
    p_trunc.add_argument("--ellipsis", default="...")
    p_trunc.set_defaults(func=_cmd_truncate)

    p_methods = sub.add_parser("methods", help="List supported cipher methods")
    p_methods.set_defaults(func=_cmd_methods)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        return args.func(args)
    except NestboxError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"nestbox: error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
