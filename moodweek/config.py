"""
Centralized configuration for all thresholds, weights, and window parameters.

Every tunable constant lives here. Insight generators read their minimum
sample sizes from this module, so boundary behavior can be asserted exactly.
"""

from dataclasses import dataclass, field


# ---------------------------------------------------------------------------
# Minimum-data gates
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InsightThresholds:
    """Sample-size gates for the composite and each weekday generator."""

    # Composite gate: scored days required before any generator runs
    min_total_days: int = 14

    # Per-weekday bucket size for mood/activity averages and recovery totals
    min_weekday_entries: int = 3

    # Standard deviation needs more samples to be meaningful
    min_volatility_entries: int = 5

    # Recovery needs at least one adjacent pair
    min_recovery_records: int = 2


# ---------------------------------------------------------------------------
# Recovery index
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RecoveryParams:
    """What counts as a next-day pair and as a rebound."""

    min_gap_days: float = 0.5
    max_gap_days: float = 1.5
    min_rebound: int = 2


# ---------------------------------------------------------------------------
# Burnout pattern
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BurnoutParams:
    """
    Monday-low / Friday-high heuristic.

    Detected when early_mean < global - margin and late_mean > global + margin.

    confidence = sample_weight * min(1, n / sample_saturation)
               + gap_weight * min(1, gap_excess / gap_saturation)
    """

    early_weekday: int = 0     # Monday
    late_weekday: int = 4      # Friday
    margin: float = 1.0
    sample_saturation: int = 20
    gap_saturation: float = 4.0
    sample_weight: float = 0.6
    gap_weight: float = 0.4

    def __post_init__(self):
        total = self.sample_weight + self.gap_weight
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"Burnout confidence weights must sum to 1.0, got {total}")
        for wd in (self.early_weekday, self.late_weekday):
            if not 0 <= wd <= 6:
                raise ValueError(f"Weekday index must be in 0..6, got {wd}")


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RoundingParams:
    """Decimal places: means/averages vs. standard deviations and rates."""

    mean_decimals: int = 1
    spread_decimals: int = 2


# ---------------------------------------------------------------------------
# Overview assembly
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class OverviewParams:
    """Parameters for the mood overview report."""

    trend_window_days: int = 30
    default_timezone: str = "UTC"
    max_workers: int = 6

    def __post_init__(self):
        if self.trend_window_days < 0:
            raise ValueError(f"trend_window_days must be >= 0, got {self.trend_window_days}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")


# ---------------------------------------------------------------------------
# Top-level config aggregate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MoodweekConfig:
    """Complete engine configuration. Pass to any entry point to override defaults."""

    thresholds: InsightThresholds = field(default_factory=InsightThresholds)
    recovery: RecoveryParams = field(default_factory=RecoveryParams)
    burnout: BurnoutParams = field(default_factory=BurnoutParams)
    rounding: RoundingParams = field(default_factory=RoundingParams)
    overview: OverviewParams = field(default_factory=OverviewParams)
