"""Shared constants for the AOZ oath registry."""

# The only minter whose oaths are displayed as verified
VERIFIED_ADDRESS = "DtMf6R4kyRsAKryyXgyEhjMNTn6wpjNKsBMcqTvqxECF"

# Base58, 32-44 characters
SOLANA_ADDRESS_REGEX = r"^[1-9A-HJ-NP-Za-km-z]{32,44}$"

USDC_MINT_MAINNET = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
USDC_MINT_DEVNET = "4zMMC9srt5Ri5X14GAgXhaHii3GnPAEERYPJgZJDncDU"

DEFAULT_TEE_ATTESTATION = "#0400...0000"

SOLSCAN_ACCOUNT_URL = "https://solscan.io/account/{address}"
MAGIC_EDEN_ITEM_URL = "https://magiceden.io/item-details/{address}"

WALLET_ADDRESS_HEADER = "X-Wallet-Address"
