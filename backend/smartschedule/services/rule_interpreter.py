from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from smartschedule.core.config import Settings
from smartschedule.core.exceptions import ConfigurationError
from smartschedule.schemas.catalog import DAYS, MIDDAY_SLOT
from smartschedule.schemas.scheduling import RuleSettings, SchedulingRulePayload

logger = logging.getLogger(__name__)

LAB_HOUR_PATTERN = re.compile(r"\d{1,2}")
DAILY_HOURS_PATTERN = re.compile(r"\d+")


def baseline_rule_settings(settings: Settings) -> RuleSettings:
    if not 0 <= settings.default_lab_after_hour <= 23:
        raise ConfigurationError(
            f"default_lab_after_hour must be between 0 and 23, got {settings.default_lab_after_hour}"
        )
    return RuleSettings(
        lab_after_hour=settings.default_lab_after_hour,
        max_daily_hours=settings.default_max_daily_hours,
    )


def _rule_text(rule: SchedulingRulePayload | str) -> str | None:
    if isinstance(rule, str):
        return rule
    if not rule.is_active:
        return None
    return rule.rule_description


def interpret_rules(
    rules: Iterable[SchedulingRulePayload | str],
    *,
    baseline: RuleSettings | None = None,
) -> RuleSettings:
    """Turn free-text scheduling rules into a RuleSettings.

    Matching is a fixed list of lowercase substring cues:

    * ``12:00`` or ``lunch`` blocks the midday slot (always blocked anyway).
    * ``lab`` + ``after`` sets the lab start hour from the first 1-2 digit number.
    * ``hour`` + ``day`` sets the daily hour cap from the first integer.
    * ``no class`` + a weekday name blocks that day.

    Later rules overwrite earlier numeric settings. Text that matches nothing
    leaves the baseline untouched; this function never rejects input.
    """
    base = baseline or RuleSettings()
    lunch_breaks = set(base.lunch_breaks) | {MIDDAY_SLOT}
    lab_after_hour = base.lab_after_hour
    max_daily_hours = base.max_daily_hours
    blocked_days = set(base.blocked_days)

    for rule in rules:
        text = _rule_text(rule)
        if not text:
            continue
        desc = text.lower()

        if "12:00" in desc or "lunch" in desc:
            lunch_breaks.add(MIDDAY_SLOT)

        if "lab" in desc and "after" in desc:
            match = LAB_HOUR_PATTERN.search(desc)
            if match:
                lab_after_hour = int(match.group(0))

        if "hour" in desc and "day" in desc:
            match = DAILY_HOURS_PATTERN.search(desc)
            if match:
                try:
                    max_daily_hours = int(match.group(0))
                except ValueError:
                    # Digit runs past the int conversion limit leave the cap unchanged.
                    pass

        if "no class" in desc:
            for day in DAYS:
                if day.value.lower() in desc:
                    blocked_days.add(day)

    interpreted = RuleSettings(
        lunch_breaks=frozenset(lunch_breaks),
        lab_after_hour=lab_after_hour,
        max_daily_hours=max_daily_hours,
        blocked_days=frozenset(blocked_days),
    )
    logger.debug(
        "RULES INTERPRETED | lunch=%s | lab_after=%s | max_daily=%s | blocked_days=%s",
        sorted(interpreted.lunch_breaks),
        interpreted.lab_after_hour,
        interpreted.max_daily_hours,
        [day.value for day in DAYS if day in interpreted.blocked_days],
    )
    return interpreted
