"""Data model for stablecoin yield pools."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from config import API_ENDPOINTS


@dataclass
class Pool:
    """A yield pool reported by the DefiLlama yields API."""

    pool: str
    project: str
    chain: str
    symbol: str
    tvl_usd: float
    apy: float
    apy_mean_7d: Optional[float] = None
    apy_mean_30d: Optional[float] = None
    apy_base: Optional[float] = None
    apy_reward: Optional[float] = None
    reward_tokens: List[str] = field(default_factory=list)
    underlying_tokens: List[str] = field(default_factory=list)
    il_risk: Optional[str] = None
    is_audit: bool = False

    @property
    def source_url(self) -> str:
        """Return the DefiLlama page for this pool."""
        return f"{API_ENDPOINTS['defillama_pool_page']}{self.pool}"

    @property
    def formatted_apy(self) -> str:
        """Return APY as formatted percentage string."""
        return f"{self.apy:.2f}%"

    @property
    def formatted_apy_mean_30d(self) -> str:
        """Return the 30-day mean APY, or ``--`` when upstream has none."""
        if self.apy_mean_30d is None:
            return "--"
        return f"{self.apy_mean_30d:.2f}%"

    @property
    def formatted_tvl(self) -> str:
        """Return TVL in billions or millions."""
        if self.tvl_usd >= 1_000_000_000:
            return f"${self.tvl_usd / 1_000_000_000:.1f}B"
        return f"${self.tvl_usd / 1_000_000:.1f}M"

    @property
    def risk_label(self) -> str:
        """Return the yield risk badge: ROBUST, MODERATE or HIGH RISK."""
        if self.apy < 8:
            return "ROBUST"
        if self.apy < 15:
            return "MODERATE"
        return "HIGH RISK"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "pool": self.pool,
            "project": self.project,
            "chain": self.chain,
            "symbol": self.symbol,
            "tvl_usd": self.tvl_usd,
            "apy": self.apy,
            "apy_mean_7d": self.apy_mean_7d,
            "apy_mean_30d": self.apy_mean_30d,
            "apy_base": self.apy_base,
            "apy_reward": self.apy_reward,
            "reward_tokens": self.reward_tokens,
            "underlying_tokens": self.underlying_tokens,
            "il_risk": self.il_risk,
            "is_audit": self.is_audit,
            "source_url": self.source_url,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any], is_audit: bool = False) -> "Pool":
        """Create instance from a raw ``/pools`` record.

        Raises:
            KeyError: If an identifying field is missing.
        """
        return cls(
            pool=str(record["pool"]),
            project=record.get("project") or "",
            chain=record.get("chain") or "",
            symbol=record["symbol"],
            tvl_usd=float(record["tvlUsd"]),
            apy=float(record.get("apy") or 0.0),
            apy_mean_7d=record.get("apyMean7d"),
            apy_mean_30d=record.get("apyMean30d"),
            apy_base=record.get("apyBase"),
            apy_reward=record.get("apyReward"),
            reward_tokens=record.get("rewardTokens") or [],
            underlying_tokens=record.get("underlyingTokens") or [],
            il_risk=record.get("ilRisk"),
            is_audit=is_audit,
        )
