"""Known jar contract deployments and native token symbols."""
from __future__ import annotations

from dataclasses import dataclass

from jar_policy.addresses import is_zero_address


@dataclass(slots=True, frozen=True)
class ChainDeployment:
    chain_id: int
    name: str
    contract_address: str


DEPLOYMENTS: dict[int, ChainDeployment] = {
    deployment.chain_id: deployment
    for deployment in (
        ChainDeployment(11155111, "sepolia", "0x1234567890123456789012345678901234567890"),
        ChainDeployment(84531, "base-goerli", "0x2345678901234567890123456789012345678901"),
        ChainDeployment(420, "optimism-goerli", "0x3456789012345678901234567890123456789012"),
        ChainDeployment(10200, "gnosis-chiado", "0x4567890123456789012345678901234567890123"),
        ChainDeployment(421613, "arbitrum-goerli", "0x5678901234567890123456789012345678901234"),
        ChainDeployment(44787, "celo-alfajores", "0x6789012345678901234567890123456789012345"),
    )
}

GNOSIS_CHAIN_IDS: frozenset[int] = frozenset({100, 10200})
CELO_CHAIN_IDS: frozenset[int] = frozenset({42220, 44787})

TOKEN_SYMBOLS: dict[str, str] = {}


def supported_chain_ids() -> list[int]:
    return sorted(DEPLOYMENTS)


def get_contract_address(chain_id: int | None) -> str | None:
    if not chain_id:
        return None
    deployment = DEPLOYMENTS.get(chain_id)
    return deployment.contract_address if deployment else None


def native_token_symbol(chain_id: int | None) -> str:
    if chain_id in GNOSIS_CHAIN_IDS:
        return "xDAI"
    if chain_id in CELO_CHAIN_IDS:
        return "CELO"
    return "ETH"


def get_token_symbol(token_address: str, chain_id: int | None = None) -> str:
    if is_zero_address(token_address):
        return native_token_symbol(chain_id)
    return TOKEN_SYMBOLS.get(token_address.lower(), "Unknown")
