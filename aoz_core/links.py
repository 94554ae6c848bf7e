"""Explorer and marketplace URL templating."""

from aoz_core.constants import MAGIC_EDEN_ITEM_URL, SOLSCAN_ACCOUNT_URL


def explorer_url(address: str) -> str:
    """Solscan account page for a wallet address."""
    return SOLSCAN_ACCOUNT_URL.format(address=address)


def marketplace_url(address: str) -> str:
    """Magic Eden item page for an oath minted by ``address``."""
    return MAGIC_EDEN_ITEM_URL.format(address=address)
