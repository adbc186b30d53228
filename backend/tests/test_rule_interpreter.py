import pytest

from smartschedule.core.config import Settings
from smartschedule.core.exceptions import ConfigurationError
from smartschedule.schemas.catalog import MIDDAY_SLOT, Day
from smartschedule.schemas.scheduling import RuleSettings, SchedulingRulePayload
from smartschedule.services.rule_interpreter import baseline_rule_settings, interpret_rules


def rule(description, *, active=True):
    return SchedulingRulePayload(rule_name="rule", rule_description=description, is_active=active)


def test_defaults_without_rules():
    settings = interpret_rules([])
    assert settings.lunch_breaks == frozenset({MIDDAY_SLOT})
    assert settings.lab_after_hour == 12
    assert settings.max_daily_hours == 8
    assert settings.blocked_days == frozenset()


def test_lunch_mentions_do_not_duplicate_midday_slot():
    settings = interpret_rules([rule("Lunch break for everyone"), rule("Keep 12:00 free")])
    assert settings.lunch_breaks == frozenset({MIDDAY_SLOT})


def test_lab_after_hour_is_last_match_wins():
    settings = interpret_rules([rule("Labs after 13"), rule("Lab sessions start after 14")])
    assert settings.lab_after_hour == 14


def test_lab_hour_reads_at_most_two_digits():
    assert interpret_rules(["No lab after 123"]).lab_after_hour == 12


def test_max_daily_hours_cue():
    settings = interpret_rules([rule("No more than 6 hours a day")])
    assert settings.max_daily_hours == 6


def test_oversized_daily_hours_number_keeps_previous_cap():
    settings = interpret_rules(["Maximum 6 hours per day", "max " + "9" * 5000 + " hours per day"])
    assert settings.max_daily_hours == 6


def test_no_class_days_are_blocked():
    settings = interpret_rules([rule("No class on Sunday and Tuesday"), rule("no class on sunday")])
    assert settings.blocked_days == frozenset({Day.sunday, Day.tuesday})


def test_scenario_lab_cutoff_and_blocked_day():
    settings = interpret_rules([rule("No lab sessions after 10"), rule("No class on Thursday")])
    assert settings.lab_after_hour == 10
    assert settings.blocked_days == frozenset({Day.thursday})


def test_unmatched_or_inactive_rules_keep_defaults():
    settings = interpret_rules(
        [
            rule("lab after noon"),
            rule("Labs after 9", active=False),
            rule("No class on Friday"),
            rule(""),
            "prefer mornings",
        ]
    )
    assert settings == RuleSettings()


def test_baseline_values_are_starting_point():
    baseline = RuleSettings(lab_after_hour=11, max_daily_hours=5)
    settings = interpret_rules([rule("No class on Monday")], baseline=baseline)
    assert settings.lab_after_hour == 11
    assert settings.max_daily_hours == 5
    assert settings.blocked_days == frozenset({Day.monday})


def test_baseline_from_settings():
    baseline = baseline_rule_settings(Settings(default_lab_after_hour=13, default_max_daily_hours=6))
    assert baseline.lab_after_hour == 13
    assert baseline.max_daily_hours == 6

    with pytest.raises(ConfigurationError):
        baseline_rule_settings(Settings(default_lab_after_hour=30))
