#!/usr/bin/env python3
"""
Permit2 hashing CLI

Usage:
    permit2-hash type-hashes
    permit2-hash domain [--name NAME] [--version VERSION] [--chain-id CHAIN_ID]
    permit2-hash hash REQUEST.json [--json]

A hash request looks like:

    {
        "type": "PermitTransferFrom",
        "permit": {"permitted": {"token": "0xa", "amount": 100}, "nonce": 1, "deadline": 1700000000},
        "caller": "0x123",
        "signer": "0x456",
        "witness": {"commitment": "0x789", "type_string": "\\"witness\\":\\"Order\\")..."},
        "domain": {"chain_id": "SN_MAIN"}
    }

"witness" and "domain" are optional; without "domain" the domain comes
from the environment (see permit2_hash.config).
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import load_domain_config, parse_chain_id
from .domain import (
    PERMIT2_DOMAIN_NAME,
    PERMIT2_DOMAIN_VERSION,
    STARKNET_DOMAIN_TYPE_HASH,
    Permit2Domain,
    message_hash,
)
from .encoding import permit_from_dict, require_dict, to_felt, witness_from_dict
from .errors import PermitHashError
from .struct_hash import hash_struct
from .type_registry import TYPE_HASHES
from .witness import hash_witness, witness_type_hash


def cmd_type_hashes(args) -> int:
    print("Permit2 Type Hashes:")
    print("=" * 50)
    for name, (type_string, type_hash) in TYPE_HASHES.items():
        print(f"{name}: {hex(type_hash)}")
        print(f"    {type_string}")
    print(f"StarknetDomain: {hex(STARKNET_DOMAIN_TYPE_HASH)}")
    return 0


def domain_from_args(args) -> Permit2Domain:
    base = load_domain_config()
    return Permit2Domain(
        chain_id=parse_chain_id(args.chain_id) if args.chain_id else base.chain_id,
        name=args.name or base.name,
        version=args.version or base.version,
    )


def cmd_domain(args) -> int:
    domain = domain_from_args(args)
    print("Computing domain separator...")
    print(f"Name: {domain.name}")
    print(f"Version: {domain.version}")
    print(f"Chain ID: {hex(domain.chain_id)}")
    print(f"Revision: {domain.revision}")
    print(f"\nDomain Separator: {hex(domain.separator)}")
    return 0


def load_request(path: Path) -> dict:
    with open(path, "r") as f:
        return json.load(f)


def hash_request(request: dict) -> dict:
    """Struct hash and message hash for a decoded JSON request"""
    require_dict(request, "request")
    permit = permit_from_dict(request["type"], request["permit"])
    caller = to_felt(request["caller"]) if "caller" in request else None
    signer = to_felt(request["signer"])

    if "domain" in request:
        d = require_dict(request["domain"], "domain")
        domain = Permit2Domain(
            chain_id=parse_chain_id(str(d["chain_id"])),
            name=d.get("name", PERMIT2_DOMAIN_NAME),
            version=d.get("version", PERMIT2_DOMAIN_VERSION),
        )
    else:
        domain = load_domain_config()

    result = {"type": request["type"], "domain_separator": hex(domain.separator)}
    if "witness" in request:
        witness = witness_from_dict(request["witness"])
        struct_hash = hash_witness(permit, witness, caller)
        result["witness_type_hash"] = hex(witness_type_hash(type(permit), witness.type_string))
    else:
        struct_hash = hash_struct(permit, caller=caller)
    result["struct_hash"] = hex(struct_hash)
    result["message_hash"] = hex(message_hash(struct_hash, signer, domain))
    return result


def cmd_hash(args) -> int:
    request_path = Path(args.request)
    if not request_path.exists():
        print(f"❌ Request file not found: {request_path}")
        return 1
    try:
        result = hash_request(load_request(request_path))
    except json.JSONDecodeError as e:
        print(f"❌ Request is not valid JSON: {e}")
        return 1
    except (PermitHashError, KeyError) as e:
        print(f"❌ Invalid request: {e}")
        return 1

    if args.json:
        print(json.dumps(result, indent=2))
        return 0
    print(f"✅ {result['type']}")
    print(f"Domain Separator: {result['domain_separator']}")
    if "witness_type_hash" in result:
        print(f"Witness Type Hash: {result['witness_type_hash']}")
    print(f"Struct Hash: {result['struct_hash']}")
    print(f"Message Hash: {result['message_hash']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute Permit2 SNIP-12 type hashes, struct hashes and message hashes")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("type-hashes", help="Print every fixed type descriptor and its type hash")

    domain = sub.add_parser("domain", help="Print the domain separator")
    domain.add_argument("--name", help="Domain name (default from environment)")
    domain.add_argument("--version", help="Domain version (default from environment)")
    domain.add_argument("--chain-id", help="Chain id as a short string (SN_MAIN) or 0x felt")

    hash_cmd = sub.add_parser("hash", help="Hash a permit described by a JSON request file")
    hash_cmd.add_argument("request", help="Path to the JSON request")
    hash_cmd.add_argument("--json", action="store_true", help="Print the result as JSON")
    return parser


COMMANDS = {
    "type-hashes": cmd_type_hashes,
    "domain": cmd_domain,
    "hash": cmd_hash,
}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
