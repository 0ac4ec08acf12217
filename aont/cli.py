from __future__ import annotations

import argparse
import binascii
import os
import sys
import time
from typing import List, Optional

from aont.blockhash import BlockHash, available_hashes, get_block_hash
from aont.constants import DEFAULT_HASH
from aont.errors import AontError, InvalidParameterLength
from aont.public import derive_public, load_public_file, parse_public_hex, public_from_text
from aont.transform import Decoder, Encoder


def _read_input(path: str) -> bytes:
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as fh:
        return fh.read()


def _write_output(path: str, data: bytes) -> None:
    """Write ``data`` to ``path`` via a temporary file and atomic rename.

    ``-`` writes to stdout.
    """
    if path == "-":
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return
    tmp = path + ".tmp"
    try:
        with open(tmp, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, path)
    except BaseException:
        try:
            os.remove(tmp)
        except OSError:
            pass
        raise


def _make_hash(name: str, hmac_token_hex: Optional[str]) -> BlockHash:
    token = None
    if hmac_token_hex is not None:
        try:
            token = binascii.unhexlify(hmac_token_hex.strip())
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"HMAC token is not valid hex: {exc}") from exc
    return get_block_hash(name, hmac_token=token)


def resolve_public(
    block_size: int,
    *,
    text: Optional[str] = None,
    hex_value: Optional[str] = None,
    path: Optional[str] = None,
    passphrase: Optional[str] = None,
) -> bytes:
    """Pick the public parameter from exactly one of the supported sources."""
    given = [v is not None for v in (text, hex_value, path, passphrase)]
    if sum(given) != 1:
        raise ValueError("exactly one public parameter source is required")
    if text is not None:
        return public_from_text(text, block_size)
    if hex_value is not None:
        return parse_public_hex(hex_value, block_size)
    if path is not None:
        return load_public_file(path, block_size)
    return derive_public(passphrase, block_size)


def _status(msg: str, quiet: bool, output: str) -> None:
    if quiet:
        return
    # keep stdout clean when it carries the payload
    stream = sys.stderr if output == "-" else sys.stdout
    print(msg, file=stream, flush=True)


def cmd_encode(
    input_path: str,
    output_path: str,
    *,
    public: bytes,
    block_hash: Optional[BlockHash] = None,
    jobs: int = 1,
    quiet: bool = False,
) -> bool:
    """Encode a whole file.

    Args:
        input_path: Source path, or ``-`` for stdin.
        output_path: Destination path, or ``-`` for stdout.
        public: Public parameter, one block long.
        block_hash: Block hash; defaults to SHA-1.
        jobs: Worker threads.
        quiet: Suppress the summary line.
    """
    enc = Encoder(block_hash, jobs=jobs)
    data = _read_input(input_path)
    t0 = time.time()
    out = enc.encode(data, public)
    _write_output(output_path, out)
    dt = max(0.000001, time.time() - t0)
    blocks = len(data) // enc.block_size
    _status(
        f"Encoded {blocks} block(s) of {enc.block_size} bytes with {enc.block_hash.name} "
        f"-> {len(out)} bytes in {dt:.2f}s",
        quiet,
        output_path,
    )
    return True


def cmd_decode(
    input_path: str,
    output_path: str,
    *,
    public: bytes,
    block_hash: Optional[BlockHash] = None,
    jobs: int = 1,
    quiet: bool = False,
) -> bool:
    """Decode a whole file. See ``cmd_encode`` for arguments."""
    dec = Decoder(block_hash, jobs=jobs)
    data = _read_input(input_path)
    t0 = time.time()
    out = dec.decode(data, public)
    _write_output(output_path, out)
    dt = max(0.000001, time.time() - t0)
    _status(
        f"Decoded {len(out) // dec.block_size} block(s) with {dec.block_hash.name} "
        f"-> {len(out)} bytes in {dt:.2f}s",
        quiet,
        output_path,
    )
    return True


def cmd_info(input_path: Optional[str] = None, *, block_hash: Optional[BlockHash] = None) -> bool:
    """Show block hash parameters and, for a transformed file, its layout."""
    h = block_hash if block_hash is not None else get_block_hash()
    bs = h.output_length()
    print(f"Hash: {h.name}")
    print(f"  Block size: {bs}")
    if input_path is not None:
        if input_path == "-":
            size = len(sys.stdin.buffer.read())
            print("File: <stdin>")
        else:
            size = os.path.getsize(input_path)
            print(f"File: {input_path}")
        print(f"  Size: {size}")
        if size % bs != 0 or size < bs:
            print(f"  Not a transformed buffer for block size {bs}")
            return False
        print(f"  Message blocks: {size // bs - 1}")
        print(f"  Decoded size: {size - bs}")
    return True


def _add_transform_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("input", help="Input path ('-' for stdin)")
    ap.add_argument("output", help="Output path ('-' for stdout)")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--public", help="Public parameter as UTF-8 text (exactly one block)")
    src.add_argument("--public-hex", help="Public parameter as hex")
    src.add_argument("--public-file", help="File holding the raw public parameter (hex if it ends in .hex)")
    src.add_argument("--passphrase", help="Derive the public parameter from a shareable passphrase (Argon2id)")
    _add_hash_args(ap)
    ap.add_argument("--jobs", "-j", type=int, default=1, help="Worker threads (default 1)")
    ap.add_argument("--quiet", help="suppress the summary line", action="store_true")


def _add_hash_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--hash", default=DEFAULT_HASH, choices=available_hashes(), help=f"Block hash (default {DEFAULT_HASH})")
    ap.add_argument("--hmac-token", help="Published HMAC token (hex); keys the block hash with HMAC")


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="aont",
        description="Rivest's all-or-nothing transform",
        epilog=(
            "Not encryption: anyone holding every output block and the public parameter can decode."
        ),
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_encode = sub.add_parser("encode", help="Encode a block-aligned file")
    _add_transform_args(ap_encode)

    ap_decode = sub.add_parser("decode", help="Decode a transformed file")
    _add_transform_args(ap_decode)

    ap_info = sub.add_parser("info", help="Show block size and transformed file layout")
    ap_info.add_argument("input", nargs="?", help="Transformed file to inspect ('-' for stdin)")
    _add_hash_args(ap_info)

    args = ap.parse_args(argv)
    try:
        block_hash = _make_hash(args.hash, args.hmac_token)
        if args.cmd in ("encode", "decode"):
            public = resolve_public(
                block_hash.output_length(),
                text=args.public,
                hex_value=args.public_hex,
                path=args.public_file,
                passphrase=args.passphrase,
            )
            fn = cmd_encode if args.cmd == "encode" else cmd_decode
            fn(args.input, args.output, public=public, block_hash=block_hash, jobs=args.jobs, quiet=args.quiet)
        elif args.cmd == "info":
            ok = cmd_info(args.input, block_hash=block_hash)
            sys.exit(0 if ok else 1)
        else:
            raise RuntimeError("Unknown command")
    except InvalidParameterLength as e:
        print(f"Error: {e}. The public parameter must be exactly one block; check --hash.", file=sys.stderr)
        sys.exit(2)
    except (AontError, ValueError, RuntimeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
