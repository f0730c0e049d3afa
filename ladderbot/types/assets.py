"""
Asset identifiers.

The ledger knows two kinds of assets: the native one (no issuer, no trust
line) and credit assets identified by a code and an issuing account.
"""

from dataclasses import dataclass
from typing import Optional

NATIVE_CODE = "XLM"


@dataclass(frozen=True, slots=True)
class Asset:
    """An asset on the ledger. `issuer` is None for the native asset."""
    code: str
    issuer: Optional[str] = None

    @property
    def is_native(self) -> bool:
        return self.issuer is None

    @classmethod
    def native(cls) -> "Asset":
        return cls(code=NATIVE_CODE)

    @classmethod
    def parse(cls, text: str) -> "Asset":
        """
        Parse "native", "XLM" or "CODE:ISSUER".

        Raises:
            ValueError: If the string is empty or a credit asset has no issuer
        """
        text = (text or "").strip()
        if not text:
            raise ValueError("asset string is empty")
        if text.lower() == "native" or text.upper() == NATIVE_CODE:
            return cls.native()
        code, sep, issuer = text.partition(":")
        if not sep or not code or not issuer:
            raise ValueError(f"credit asset must be CODE:ISSUER, got {text!r}")
        return cls(code=code, issuer=issuer)

    @classmethod
    def from_horizon(cls, record: dict) -> "Asset":
        """Build from a Horizon asset record (asset_type/asset_code/asset_issuer)."""
        if record.get("asset_type") == "native":
            return cls.native()
        return cls(code=record.get("asset_code", ""), issuer=record.get("asset_issuer"))

    def __str__(self) -> str:
        if self.is_native:
            return NATIVE_CODE
        return f"{self.code}:{self.issuer}"
