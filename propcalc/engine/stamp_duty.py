"""Transfer (stamp) duty with first home buyer concessions.

Rules are injected as a read-only mapping of jurisdiction code -> DutyRules so
alternate tax years or test tables can be substituted.

Pure functions: Decimal in, dataclass out. No I/O.
"""

from collections.abc import Mapping
from decimal import Decimal, ROUND_HALF_UP

from propcalc.data.duty_rates import DUTY_RULES
from propcalc.engine.errors import ConfigurationError, InvalidInput, UnknownJurisdiction
from propcalc.models.results import StampDutyResult
from propcalc.models.stamp_duty import ConcessionKind, DutyRules

WHOLE = Decimal("1")


def resolve_rules(
    jurisdiction: str, rules: Mapping[str, DutyRules] = DUTY_RULES
) -> tuple[str, DutyRules]:
    """Case-insensitive lookup. Returns (normalised code, rules)."""
    code = (jurisdiction or "").strip().upper()
    if code not in rules:
        raise UnknownJurisdiction(jurisdiction, list(rules))
    return code, rules[code]


def full_duty(property_value: Decimal, rules: DutyRules) -> Decimal:
    """Standard duty with no concession, rounded to whole dollars."""
    if rules.flat_rate is not None:
        if property_value <= rules.flat_rate.threshold:
            return Decimal("0")
        return (property_value * rules.flat_rate.rate).quantize(WHOLE, ROUND_HALF_UP)

    for bracket in rules.brackets:
        if bracket.covers(property_value):
            duty = bracket.base + (property_value - bracket.min) * bracket.rate / 100
            return duty.quantize(WHOLE, ROUND_HALF_UP)

    raise ConfigurationError(f"Property value {property_value} exceeds all duty brackets")


def partial_concession(
    property_value: Decimal,
    full_exemption: Decimal,
    partial_exemption: Decimal,
    duty: Decimal,
) -> Decimal:
    """Discount tapering linearly from 100% at the full exemption ceiling to 0%
    at the partial ceiling."""
    span = partial_exemption - full_exemption
    excess = property_value - full_exemption
    return (duty * (1 - excess / span)).quantize(WHOLE, ROUND_HALF_UP)


def calculate_stamp_duty(
    property_value: Decimal,
    jurisdiction: str,
    is_first_time_buyer: bool = False,
    rules: Mapping[str, DutyRules] = DUTY_RULES,
) -> StampDutyResult:
    """Duty payable on a purchase, applying first home buyer concessions.

    Evaluation order: full exemption, then partial concession, then standard.
    """
    code, juris_rules = resolve_rules(jurisdiction, rules)
    if property_value < 0:
        raise InvalidInput("Property value must not be negative")

    duty = full_duty(property_value, juris_rules)

    if is_first_time_buyer:
        fhb = juris_rules.first_home_buyer
        if fhb.full_exemption is not None and property_value <= fhb.full_exemption:
            return StampDutyResult(
                jurisdiction=code,
                property_value=property_value,
                is_first_time_buyer=True,
                total=Decimal("0"),
                concession_applied=True,
                concession_kind=ConcessionKind.FULL_EXEMPTION,
                amount_saved=duty,
            )

        if fhb.partial_exemption is not None and property_value <= fhb.partial_exemption:
            discount = partial_concession(
                property_value,
                fhb.full_exemption or Decimal("0"),
                fhb.partial_exemption,
                duty,
            )
            return StampDutyResult(
                jurisdiction=code,
                property_value=property_value,
                is_first_time_buyer=True,
                total=duty - discount,
                concession_applied=True,
                concession_kind=ConcessionKind.PARTIAL_CONCESSION,
                amount_saved=discount,
            )

    return StampDutyResult(
        jurisdiction=code,
        property_value=property_value,
        is_first_time_buyer=is_first_time_buyer,
        total=duty,
    )


def validate_duty_rules(rules: Mapping[str, DutyRules]) -> None:
    """Check every table covers [0, inf) with contiguous brackets.

    Raises ConfigurationError on the first inconsistency found.
    """
    for code, juris in rules.items():
        if juris.flat_rate is not None:
            if juris.brackets:
                raise ConfigurationError(f"{code}: both flat rate and brackets defined")
        elif not juris.brackets:
            raise ConfigurationError(f"{code}: no duty brackets defined")
        else:
            expected_min = Decimal("0")
            for i, bracket in enumerate(juris.brackets):
                if bracket.min != expected_min:
                    raise ConfigurationError(
                        f"{code}: bracket {i} starts at {bracket.min}, expected {expected_min}"
                    )
                is_last = i == len(juris.brackets) - 1
                if bracket.max is None:
                    if not is_last:
                        raise ConfigurationError(f"{code}: open-ended bracket {i} is not last")
                    break
                if bracket.max <= bracket.min:
                    raise ConfigurationError(f"{code}: bracket {i} is empty")
                if is_last:
                    raise ConfigurationError(f"{code}: top bracket must be open-ended")
                expected_min = bracket.max

        fhb = juris.first_home_buyer
        if (
            fhb.partial_exemption is not None
            and fhb.full_exemption is not None
            and fhb.partial_exemption <= fhb.full_exemption
        ):
            raise ConfigurationError(
                f"{code}: partial concession ceiling must exceed full exemption ceiling"
            )


validate_duty_rules(DUTY_RULES)
