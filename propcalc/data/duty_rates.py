"""Australian transfer (stamp) duty tables.

Point-in-time snapshot of general residential rates and first home buyer
thresholds by state/territory. Not sourced live: verify against the relevant
state revenue office before relying on a figure.
"""

from decimal import Decimal
from types import MappingProxyType

from propcalc.models.stamp_duty import (
    DutyBracket,
    DutyRules,
    FirstHomeBuyerConcession,
    FlatRateRule,
    Jurisdiction,
)


def _brackets(*rows: tuple[str, str | None, str, str]) -> tuple[DutyBracket, ...]:
    return tuple(
        DutyBracket(
            min=Decimal(lo),
            max=Decimal(hi) if hi is not None else None,
            base=Decimal(base),
            rate=Decimal(rate),
        )
        for lo, hi, base, rate in rows
    )


_RULES: dict[str, DutyRules] = {
    Jurisdiction.NSW.value: DutyRules(
        brackets=_brackets(
            ("0", "16000", "0", "1.25"),
            ("16000", "32000", "200", "1.5"),
            ("32000", "85000", "440", "1.75"),
            ("85000", "319000", "1368", "3.5"),
            ("319000", "1064000", "9558", "4.5"),
            ("1064000", "3238000", "43083", "5.5"),
            ("3238000", None, "162660", "7"),
        ),
        first_home_buyer=FirstHomeBuyerConcession(
            full_exemption=Decimal("800000"),
            partial_exemption=Decimal("1000000"),
        ),
    ),
    Jurisdiction.VIC.value: DutyRules(
        brackets=_brackets(
            ("0", "25000", "0", "1.4"),
            ("25000", "130000", "350", "2.4"),
            ("130000", "960000", "2870", "6"),
            ("960000", None, "52670", "5.5"),
        ),
        first_home_buyer=FirstHomeBuyerConcession(
            full_exemption=Decimal("600000"),
            partial_exemption=Decimal("750000"),
        ),
    ),
    Jurisdiction.QLD.value: DutyRules(
        brackets=_brackets(
            ("0", "5000", "0", "0"),
            ("5000", "75000", "0", "1.5"),
            ("75000", "540000", "1050", "3.5"),
            ("540000", "1000000", "17325", "4.5"),
            ("1000000", None, "38025", "5.75"),
        ),
        first_home_buyer=FirstHomeBuyerConcession(full_exemption=Decimal("500000")),
    ),
    Jurisdiction.SA.value: DutyRules(
        brackets=_brackets(
            ("0", "12000", "0", "1"),
            ("12000", "30000", "120", "2"),
            ("30000", "50000", "480", "3"),
            ("50000", "100000", "1080", "3.5"),
            ("100000", "200000", "2830", "4"),
            ("200000", "250000", "6830", "4.25"),
            ("250000", "300000", "8955", "4.75"),
            ("300000", "500000", "11330", "5"),
            ("500000", None, "21330", "5.5"),
        ),
        first_home_buyer=FirstHomeBuyerConcession(full_exemption=Decimal("650000")),
    ),
    Jurisdiction.WA.value: DutyRules(
        brackets=_brackets(
            ("0", "120000", "0", "1.9"),
            ("120000", "150000", "2280", "2.85"),
            ("150000", "360000", "3135", "3.8"),
            ("360000", "725000", "11115", "4.75"),
            ("725000", None, "28453", "5.15"),
        ),
        first_home_buyer=FirstHomeBuyerConcession(
            full_exemption=Decimal("430000"),
            partial_exemption=Decimal("530000"),
        ),
    ),
    Jurisdiction.TAS.value: DutyRules(
        brackets=_brackets(
            ("0", "3000", "0", "0"),
            ("3000", "25000", "50", "1.75"),
            ("25000", "75000", "435", "2.25"),
            ("75000", "200000", "1560", "3.5"),
            ("200000", "375000", "5935", "4"),
            ("375000", "725000", "12935", "4.25"),
            ("725000", None, "27810", "4.5"),
        ),
        first_home_buyer=FirstHomeBuyerConcession(full_exemption=Decimal("600000")),
    ),
    # NT: simplified flat rate on the full price above the threshold
    Jurisdiction.NT.value: DutyRules(
        flat_rate=FlatRateRule(threshold=Decimal("525000"), rate=Decimal("0.0645")),
        first_home_buyer=FirstHomeBuyerConcession(full_exemption=Decimal("650000")),
    ),
    Jurisdiction.ACT.value: DutyRules(
        brackets=_brackets(
            ("0", "200000", "0", "0"),
            ("200000", "300000", "100", "2.2"),
            ("300000", "500000", "2300", "3.4"),
            ("500000", "750000", "9100", "4.32"),
            ("750000", "1000000", "19900", "5.9"),
            ("1000000", "1455000", "34650", "6.4"),
            ("1455000", None, "63770", "7"),
        ),
    ),
}

# Read-only view; loaded once per process
DUTY_RULES = MappingProxyType(_RULES)
