"""Transfer duty rule data types."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class Jurisdiction(Enum):
    NSW = "NSW"
    VIC = "VIC"
    QLD = "QLD"
    SA = "SA"
    WA = "WA"
    TAS = "TAS"
    NT = "NT"
    ACT = "ACT"


class ConcessionKind(Enum):
    FULL_EXEMPTION = "Full Exemption"
    PARTIAL_CONCESSION = "Partial Concession"


@dataclass(frozen=True)
class DutyBracket:
    min: Decimal
    max: Decimal | None  # None = open-ended top bracket
    base: Decimal
    rate: Decimal  # Marginal rate in percent over `min`

    def covers(self, value: Decimal) -> bool:
        return self.max is None or value <= self.max


@dataclass(frozen=True)
class FlatRateRule:
    """No duty at or below threshold, otherwise value * rate on the whole price."""
    threshold: Decimal
    rate: Decimal  # Fraction, e.g. 0.0645


@dataclass(frozen=True)
class FirstHomeBuyerConcession:
    full_exemption: Decimal | None = None  # Duty waived at or below this value
    partial_exemption: Decimal | None = None  # Linear taper up to this value


@dataclass(frozen=True)
class DutyRules:
    brackets: tuple[DutyBracket, ...] = ()
    flat_rate: FlatRateRule | None = None
    first_home_buyer: FirstHomeBuyerConcession = field(
        default_factory=FirstHomeBuyerConcession
    )
