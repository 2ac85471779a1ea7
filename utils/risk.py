"""Safety scoring for yield pools."""

import math

from models.pool import Pool


class RiskAssessor:
    """Calculates safety scores for yield pools."""

    # Weight of a positive audit (half of 100)
    AUDIT_BONUS = 100
    AUDIT_WEIGHT = 0.5

    # TVL depth: 15 points per order of magnitude above $1M, capped
    TVL_UNIT = 1_000_000
    TVL_MULTIPLIER = 15
    TVL_CAP = 60

    # Yield penalty: 1.5 points per APY percent, capped
    APY_MULTIPLIER = 1.5
    APY_CAP = 40

    @classmethod
    def tvl_factor(cls, tvl_usd: float) -> float:
        """Return the liquidity component.

        Pools under $1M score negative and there is no lower bound; an empty
        pool scores negative infinity.
        """
        if tvl_usd <= 0:
            return float("-inf")
        return min(math.log10(tvl_usd / cls.TVL_UNIT) * cls.TVL_MULTIPLIER, cls.TVL_CAP)

    @classmethod
    def apy_penalty(cls, apy: float) -> float:
        """Return the yield penalty. Negative APY gives a negative penalty."""
        return min(apy * cls.APY_MULTIPLIER, cls.APY_CAP)

    @classmethod
    def safety_score(cls, pool: Pool) -> float:
        """Calculate the composite safety score for a pool.

        Args:
            pool: Pool with ``is_audit``, ``tvl_usd`` and ``apy`` set.

        Returns:
            Score where audits add up to 50, depth up to 60 and high yield
            subtracts up to 40.
        """
        audit_bonus = cls.AUDIT_BONUS if pool.is_audit else 0
        return (
            audit_bonus * cls.AUDIT_WEIGHT
            + cls.tvl_factor(pool.tvl_usd)
            - cls.apy_penalty(pool.apy)
        )


SAFETY_METHODOLOGY = [
    (
        "1. Audit bonus (weight 50%)",
        "Protocols audited by a recognized security firm, or listed as known "
        "audited projects, receive the base safety score.",
    ),
    (
        "2. Capital depth (weight 30%)",
        "Higher TVL means deeper liquidity and more market trust. Scored on a "
        "logarithmic scale above $1M.",
    ),
    (
        "3. Yield penalty (negative weight 20%)",
        "Outsized yields usually carry outsized risk. Pools far above baseline "
        "rates lose points.",
    ),
]
