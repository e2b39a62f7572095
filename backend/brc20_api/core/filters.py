"""Ticker/Address Filter Normalizer - validates and canonicalizes query filters.

Invariants:
    - Malformed tickers/addresses raise ValidationError and never reach the store
    - Tickers are stripped and lower-cased; 4-5 UTF-8 bytes, no whitespace/control chars
    - Ticker lists are deduplicated in first-occurrence order
    - An empty ticker list after normalization means "no filter" (None)
    - Addresses follow Bitcoin grammar: base58check (P2PKH/P2SH, main + test nets)
      or single-case bech32/bech32m segwit; bech32 is canonicalized to lower case
    - Segwit programs regroup to 2-40 bytes with at most 4 zero padding bits;
      witness v0 programs are exactly 20 or 32 bytes
"""

import unicodedata
from typing import Iterable

import base58

from brc20_api.core.domain_types import Address, Ticker
from brc20_api.core.errors import ErrorContext, ValidationError

TICKER_MIN_BYTES = 4
TICKER_MAX_BYTES = 5

_BASE58_VERSIONS = {
    "1": 0x00, "3": 0x05,               # mainnet P2PKH, P2SH
    "m": 0x6F, "n": 0x6F, "2": 0xC4,    # testnet P2PKH, P2SH
}

_BECH32_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_BECH32_HRPS = ("bcrt", "bc", "tb")
_BECH32_CONST = 1
_BECH32M_CONST = 0x2BC830A3
_BECH32_GENERATOR = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)


# ─── Tickers ─────────────────────────────────────────────────────

def normalize_ticker(raw: str) -> Ticker:
    """Validate a single ticker and return its canonical form."""
    if not isinstance(raw, str):
        raise ValidationError("ticker must be a string", "ticker")
    ticker = raw.strip().lower()
    if any(ch.isspace() or unicodedata.category(ch).startswith("C") for ch in ticker):
        raise ValidationError(
            f"ticker '{raw}' contains whitespace or control characters", "ticker",
        )
    size = len(ticker.encode("utf-8"))
    if size < TICKER_MIN_BYTES or size > TICKER_MAX_BYTES:
        raise ValidationError(
            f"ticker '{raw}' must be {TICKER_MIN_BYTES}-{TICKER_MAX_BYTES} bytes, got {size}",
            "ticker",
        )
    return Ticker(ticker)


def normalize_tickers(raw: Iterable[str] | None) -> list[Ticker] | None:
    """Validate a ticker list. Returns None when no filter applies."""
    if raw is None:
        return None
    seen: set[Ticker] = set()
    tickers: list[Ticker] = []
    for item in raw:
        ticker = normalize_ticker(item)
        if ticker not in seen:
            seen.add(ticker)
            tickers.append(ticker)
    return tickers or None


# ─── Addresses ───────────────────────────────────────────────────

def normalize_address(raw: str) -> Address:
    """Validate a Bitcoin address and return its canonical form."""
    if not isinstance(raw, str):
        raise ValidationError("address must be a string", "address")
    address = raw.strip()
    lowered = address.lower()
    if lowered.startswith(tuple(f"{hrp}1" for hrp in _BECH32_HRPS)):
        if address != lowered and address != address.upper():
            raise ValidationError(
                f"address '{raw}' mixes upper and lower case", "address",
                ErrorContext(address=raw),
            )
        if not _is_valid_segwit(lowered):
            raise ValidationError(
                f"address '{raw}' is not a valid segwit address", "address",
                ErrorContext(address=raw),
            )
        return Address(lowered)
    if not _is_valid_base58check(address):
        raise ValidationError(
            f"address '{raw}' is not a valid Bitcoin address", "address",
            ErrorContext(address=raw),
        )
    return Address(address)


def _is_valid_base58check(address: str) -> bool:
    if not 26 <= len(address) <= 35:
        return False
    version = _BASE58_VERSIONS.get(address[:1])
    if version is None:
        return False
    try:
        payload = base58.b58decode_check(address)
    except ValueError:
        return False
    return len(payload) == 21 and payload[0] == version


def _is_valid_segwit(address: str) -> bool:
    if not 14 <= len(address) <= 90:
        return False
    hrp, _, data_part = address.rpartition("1")
    if hrp not in _BECH32_HRPS or len(data_part) < 7:
        return False
    if any(ch not in _BECH32_CHARSET for ch in data_part):
        return False
    data = [_BECH32_CHARSET.index(ch) for ch in data_part]
    witness_version = data[0]
    if witness_version > 16:
        return False
    const = _bech32_polymod(_hrp_expand(hrp) + data)
    # v0 uses bech32, v1+ (taproot onwards) uses bech32m
    expected = _BECH32_CONST if witness_version == 0 else _BECH32M_CONST
    if const != expected:
        return False
    program = _convert_bits(data[1:-6], 5, 8)
    if program is None or not 2 <= len(program) <= 40:
        return False
    return witness_version != 0 or len(program) in (20, 32)


def _convert_bits(data: list[int], from_bits: int, to_bits: int) -> list[int] | None:
    """Regroup bits without padding; None when the leftover bits are not zero padding."""
    acc = 0
    bits = 0
    out: list[int] = []
    max_value = (1 << to_bits) - 1
    for value in data:
        acc = (acc << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & max_value)
    if bits >= from_bits or (acc << (to_bits - bits)) & max_value:
        return None
    return out


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(ch) >> 5 for ch in hrp] + [0] + [ord(ch) & 31 for ch in hrp]


def _bech32_polymod(values: list[int]) -> int:
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1FFFFFF) << 5 ^ value
        for i, gen in enumerate(_BECH32_GENERATOR):
            if (top >> i) & 1:
                chk ^= gen
    return chk
