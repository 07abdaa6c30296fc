"""FastAPI dependency injection."""

from collections.abc import Mapping

from propcalc.data.duty_rates import DUTY_RULES
from propcalc.models.stamp_duty import DutyRules


def get_duty_rules() -> Mapping[str, DutyRules]:
    return DUTY_RULES
