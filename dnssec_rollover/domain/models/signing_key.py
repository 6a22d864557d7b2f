"""Signing key domain model and DNSKEY parsing.

PowerDNS stores each cryptokey with its DNSKEY flags and the full DNSKEY
RDATA (``flags protocol algorithm publickey``). The rollover job needs two
facts out of that: the key role (KSK/ZSK/CSK) and the algorithm mnemonic,
which together decide how keys are grouped when a rollover completes.

Usage:
    key = SigningKey(id=4, zone_id=1, active=True, flags=257,
                     content="257 3 13 mdsswUyr3DPW...")
    key.keytype      # KeyType.KSK
    key.algorithm    # "ECDSAP256SHA256"
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# IANA DNSSEC algorithm numbers the job knows by name
ALGORITHM_NAMES: dict[int, str] = {
    8: "RSASHA256",
    10: "RSASHA512",
    13: "ECDSAP256SHA256",
    14: "ECDSAP384SHA384",
    15: "ED25519",
    16: "ED448",
}

KSK_FLAGS = 257
ZSK_FLAGS = 256


class KeyType(str, Enum):
    """Signing key role as named by the PowerDNS API."""

    KSK = "ksk"
    ZSK = "zsk"
    CSK = "csk"

    @classmethod
    def from_flags(cls, flags: int) -> KeyType:
        """Derive the key role from DNSKEY flags.

        257 (SEP bit set) is a KSK, 256 a ZSK; anything else is treated as
        a combined signing key.
        """
        if flags == KSK_FLAGS:
            return cls.KSK
        if flags == ZSK_FLAGS:
            return cls.ZSK
        return cls.CSK


def parse_algorithm_number(content: str) -> int | None:
    """Extract the algorithm number from DNSKEY RDATA.

    Args:
        content: DNSKEY RDATA as stored by PowerDNS.

    Returns:
        The third whitespace-delimited token as an int, or None when it is
        missing or not numeric.
    """
    parts = content.split()
    if len(parts) < 3:
        return None
    try:
        return int(parts[2])
    except ValueError:
        return None


def algorithm_name(number: int | None) -> str:
    """Render an algorithm number as its mnemonic.

    Unknown numbers render as ``ALG<n>``; a missing number as ``ALG``.

    Examples:
        >>> algorithm_name(13)
        'ECDSAP256SHA256'
        >>> algorithm_name(99)
        'ALG99'
    """
    if number is None:
        return "ALG"
    return ALGORITHM_NAMES.get(number, f"ALG{number}")


@dataclass(frozen=True, eq=True)
class SigningKey:
    """A DNSSEC signing key as observed in the PowerDNS backend.

    The key's lifecycle is owned by the PowerDNS API; this model is a
    read-only snapshot taken at the start of a zone's processing.

    Attributes:
        id: Cryptokey id, unique per server and increasing with creation.
        zone_id: Owning zone id.
        active: Whether PowerDNS currently signs with this key.
        flags: DNSKEY flags field.
        content: Raw DNSKEY RDATA.
    """

    id: int
    zone_id: int
    active: bool
    flags: int
    content: str

    @property
    def keytype(self) -> KeyType:
        """Key role derived from the flags."""
        return KeyType.from_flags(self.flags)

    @property
    def algorithm_number(self) -> int | None:
        """IANA algorithm number parsed from the DNSKEY RDATA."""
        return parse_algorithm_number(self.content)

    @property
    def algorithm(self) -> str:
        """Algorithm mnemonic, e.g. ``RSASHA256``."""
        return algorithm_name(self.algorithm_number)

    @property
    def group(self) -> tuple[KeyType, str]:
        """Grouping key used when pruning superseded keys."""
        return (self.keytype, self.algorithm)
