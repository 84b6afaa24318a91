"""
Domain configuration from the environment.

Values come from the process environment, optionally seeded from a .env
file:

    PERMIT2_DOMAIN_NAME     (default "Permit2")
    PERMIT2_DOMAIN_VERSION  (default "v1")
    STARKNET_CHAIN_ID       (default "SN_SEPOLIA"; short string or 0x felt)
"""

import os
from typing import Optional

from dotenv import load_dotenv

from .domain import PERMIT2_DOMAIN_NAME, PERMIT2_DOMAIN_VERSION, Permit2Domain
from .encoding import to_felt

DEFAULT_CHAIN_ID = "SN_SEPOLIA"


def parse_chain_id(raw: str):
    if raw.startswith("0x") or raw.isdigit():
        return to_felt(raw)
    return raw


def load_domain_config(dotenv_path: Optional[str] = None) -> Permit2Domain:
    load_dotenv(dotenv_path)
    return Permit2Domain(
        chain_id=parse_chain_id(os.environ.get("STARKNET_CHAIN_ID", DEFAULT_CHAIN_ID)),
        name=os.environ.get("PERMIT2_DOMAIN_NAME", PERMIT2_DOMAIN_NAME),
        version=os.environ.get("PERMIT2_DOMAIN_VERSION", PERMIT2_DOMAIN_VERSION),
    )
