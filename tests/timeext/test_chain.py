"""
Tests for timeext.chain — fluent chaining, deferred calls and
limiter resolution.
"""

import calendar
import pytest
from datetime import date, datetime, timezone, timedelta

from timeext.chain import IterationChain
from timeext.errors import (
    InvalidOptionError,
    IterationLimitExceeded,
    UnknownUnitError,
)
from timeext.moment import Moment
from timeext.options import IterationKind, IterationOptions
from timeext.settings import (
    IterationSettings,
    get_default_settings,
    set_default_settings,
)
from timeext.units import Unit


def m(*args):
    return Moment(datetime(*args))


def ident(t):
    return t


# ── Immediate Iteration ──────────────────────────────────────

class TestImmediateIteration:
    @pytest.mark.parametrize("unit", ["year", "month", "day", "hour", "minute", "second"])
    def test_each_returns_receiver(self, unit):
        t = m(2024, 1, 31, 10)
        assert t.each(unit, lambda _: None) is t

    def test_each_visits_default_window(self):
        t = m(2024, 1, 1, 10)
        seen = []
        t.each(Unit.HOUR, seen.append)
        assert len(seen) == 24
        assert seen[0] == m(2024, 1, 1, 11)
        assert seen[-1] == m(2024, 1, 2, 10)

    def test_leap_year_january_31st_by_day(self):
        days = m(2024, 1, 31, 10).map_each("day", ident)
        assert len(days) == 29
        assert days[0] == m(2024, 2, 1, 10)
        assert days[-1] == m(2024, 2, 29, 10)

    def test_map_each_collects_results(self):
        result = m(2024, 3, 1).until(m(2024, 3, 4)).map_each("day", lambda t: t.value.day)
        assert result == [2, 3, 4]

    def test_map_beginning_of_each(self):
        hours = m(2024, 1, 1, 10, 30).until(m(2024, 1, 1, 13)).map_beginning_of_each(
            "hour", lambda t: t.value.hour
        )
        assert hours == [11, 12, 13]

    def test_beginning_of_each_returns_receiver(self):
        t = m(2024, 1, 1, 10, 30)
        seen = []
        assert t.beginning_of_each("hour", seen.append) is t
        assert all(s.value.minute == 0 for s in seen)

    def test_include_start_and_end(self):
        a, b = m(2024, 3, 1), m(2024, 3, 5)
        assert len(a.until(b).map_each("day", ident, include_start=True)) == 5
        result = a.until(b).map_each("day", ident, include_end=False)
        assert b not in result
        assert a not in result
        assert len(result) == 3

    def test_microseconds(self):
        t = m(2024, 1, 1)
        steps = t.until(t.advance(Unit.MICROSECOND, 3)).map_each("usec", ident)
        assert len(steps) == 3

    def test_year_with_default_bound(self):
        assert m(2024, 6, 1).map_each("year", ident) == [m(2025, 6, 1)]

    def test_backward_iteration(self):
        result = m(2024, 3, 5).until(m(2024, 3, 1)).map_each("day", lambda t: t.value.day)
        assert result == [4, 3, 2, 1]

    def test_inverted_window_is_empty(self):
        t = m(2024, 3, 1)
        assert t.until(t.successor(Unit.DAY)).map_each("day", ident, include_end=False) == []

    def test_until_accepts_date(self):
        result = m(2024, 3, 1).until(date(2024, 3, 3)).map_each("day", ident)
        assert result == [m(2024, 3, 2), m(2024, 3, 3)]

    def test_till_alias(self):
        assert m(2024, 3, 1).till(m(2024, 3, 2)).map_each("day", ident) == [m(2024, 3, 2)]

    def test_unknown_unit_propagates(self):
        with pytest.raises(UnknownUnitError):
            m(2024, 1, 1).each("fortnight", ident)

    def test_unknown_option(self):
        with pytest.raises(InvalidOptionError):
            m(2024, 1, 1).each("day", ident, inclusive=True)

    def test_iter_each(self):
        points = list(m(2024, 3, 1).until(m(2024, 3, 3)).iter_each("day"))
        assert points == [m(2024, 3, 2), m(2024, 3, 3)]
        assert len(list(m(2024, 1, 1).iter_each("hour"))) == 24


# ── Scope (of_the) ───────────────────────────────────────────

class TestScope:
    @pytest.mark.parametrize("month", range(1, 13))
    def test_days_of_the_month_match_calendar(self, month):
        t = m(2024, month, 15, 13, 45)
        days = t.of_the(Unit.MONTH).map_each("day", ident)
        assert len(days) == calendar.monthrange(2024, month)[1]
        assert days[0] == m(2024, month, 1)

    def test_february_non_leap(self):
        assert len(m(2023, 2, 10).of_the_month().map_each_day(ident)) == 28

    def test_scope_overrides_explicit_bound(self):
        hours = m(2024, 1, 1, 5).until(m(2030, 1, 1)).of_the("day").map_each("hour", ident)
        assert len(hours) == 24
        assert hours[0] == m(2024, 1, 1, 0)
        assert hours[-1] == m(2024, 1, 1, 23)

    def test_deferred_then_scope(self):
        t = m(2024, 2, 15, 13, 45)
        days = t.map_each("day").of_the("month", lambda d: d.value.day)
        assert days == list(range(1, 30))

    def test_of_alias(self):
        assert len(m(2024, 4, 3).of("month").map_each("day", ident)) == 30


# ── Deferred Calls ───────────────────────────────────────────

class TestDeferredCalls:
    def test_iterator_without_action_defers(self):
        chain = m(2024, 1, 1).each("day")
        assert isinstance(chain, IterationChain)
        assert chain.pending.kind is IterationKind.EACH
        assert chain.pending.unit is Unit.DAY

    def test_until_resolves_pending(self):
        t = m(2024, 3, 1)
        seen = []
        result = t.each("day").until(m(2024, 3, 3), seen.append)
        assert result is t
        assert seen == [m(2024, 3, 2), m(2024, 3, 3)]

    def test_until_resolves_pending_map(self):
        result = m(2024, 3, 1).map_each("day").until(m(2024, 3, 3), lambda t: t.value.day)
        assert result == [2, 3]

    def test_resolve_clears_pending(self):
        chain = m(2024, 3, 1).each("day")
        chain.until(m(2024, 3, 2), ident)
        assert chain.pending is None

    def test_resolve_without_pending_is_noop(self):
        seen = []
        assert m(2024, 3, 1).until(m(2024, 3, 5), seen.append) is None
        assert m(2024, 3, 1).of_the("month", seen.append) is None
        assert seen == []

    def test_last_deferred_call_wins(self):
        chain = m(2024, 3, 1).each("day").map_each("hour")
        assert chain.pending.kind is IterationKind.MAP_EACH
        assert len(chain.until(m(2024, 3, 1, 3), ident)) == 3

    def test_pending_keeps_call_options(self):
        result = m(2024, 3, 1).map_each("day", include_start=True).until(
            m(2024, 3, 2), ident
        )
        assert result == [m(2024, 3, 1), m(2024, 3, 2)]


# ── from_ ────────────────────────────────────────────────────

class TestFrom:
    def test_from_matches_until(self):
        a, b = m(2024, 3, 1), m(2024, 3, 5)
        forward = a.until(b).map_each("day", ident, include_start=True)
        reverse = b.from_(a).map_each("day", ident, include_start=True)
        manual = [a.advance(Unit.DAY, i) for i in range(5)]
        assert forward == reverse == manual

    def test_from_returns_chain_on_start(self):
        a, b = m(2024, 3, 1), m(2024, 3, 5)
        chain = b.from_(a)
        assert chain.origin == a
        assert chain.bound == b
        assert chain.pending is None

    def test_from_resolves_pending(self):
        a, b = m(2024, 3, 1), m(2024, 3, 3)
        assert b.map_each("day").from_(a, lambda t: t.value.day) == [2, 3]

    def test_from_side_effect_returns_new_origin(self):
        a, b = m(2024, 3, 1), m(2024, 3, 3)
        seen = []
        assert b.each("day").from_(a, seen.append) == a
        assert len(seen) == 2

    def test_from_accepts_date(self):
        b = m(2024, 3, 3)
        assert b.from_(date(2024, 3, 1)).map_each("day", ident) == [m(2024, 3, 2), m(2024, 3, 3)]

    def test_from_with_action_but_nothing_pending(self):
        a, b = m(2024, 3, 1), m(2024, 3, 3)
        seen = []
        chain = b.from_(a, seen.append)
        assert isinstance(chain, IterationChain)
        assert seen == []


# ── State Isolation ──────────────────────────────────────────

class TestStateIsolation:
    def test_bound_does_not_leak_between_expressions(self):
        t = m(2024, 3, 1)
        t.until(m(2024, 3, 3)).each("day", ident)
        assert len(t.map_each("day", ident)) == 31

    def test_scope_does_not_leak_between_expressions(self):
        t = m(2024, 3, 15)
        t.of_the("month").each("day", ident)
        assert t.map_each("hour", ident)[0] == m(2024, 3, 15, 1)

    def test_default_bound_not_stored_on_chain(self):
        chain = m(2024, 3, 1).chain()
        chain.each("day", ident)
        assert chain.bound is None


# ── Settings ─────────────────────────────────────────────────

class TestSettings:
    def test_explicit_settings_max_steps(self):
        chain = m(2024, 1, 1).chain(IterationSettings(max_steps=5))
        calls = []
        with pytest.raises(IterationLimitExceeded):
            chain.each("hour", calls.append)
        assert len(calls) == 5

    def test_default_options_from_settings(self):
        chain = m(2024, 3, 1).chain(
            IterationSettings(default_options=IterationOptions(include_start=True))
        )
        assert chain.until(m(2024, 3, 2)).map_each("day", ident) == [m(2024, 3, 1), m(2024, 3, 2)]

    def test_process_default_settings(self):
        original = get_default_settings()
        set_default_settings(IterationSettings(max_steps=2))
        try:
            with pytest.raises(IterationLimitExceeded):
                m(2024, 1, 1).each("hour", ident)
        finally:
            set_default_settings(original)

    def test_settings_validation(self):
        with pytest.raises(ValueError, match="positive"):
            IterationSettings(max_steps=0)
        with pytest.raises(TypeError):
            IterationSettings(max_steps=True)
        with pytest.raises(TypeError):
            set_default_settings({"max_steps": 3})


# ── Backward Iteration ───────────────────────────────────────

class TestBackward:
    def test_from_later_start_walks_down_to_origin(self):
        result = m(2024, 3, 1).from_(m(2024, 3, 5)).map_each("day", lambda t: t.value.day)
        assert result == [4, 3, 2, 1]

    def test_deferred_from_later_start(self):
        result = m(2024, 3, 1).map_each("day").from_(m(2024, 3, 5), lambda t: t.value.day)
        assert result == [4, 3, 2, 1]

    def test_exclusive_end_still_visits_bound(self):
        result = m(2024, 3, 5).until(m(2024, 3, 1)).map_each(
            "day", lambda t: t.value.day, include_end=False
        )
        assert result == [4, 3, 2, 1]

    def test_include_start(self):
        result = m(2024, 3, 5).until(m(2024, 3, 1)).map_each(
            "day", lambda t: t.value.day, include_start=True
        )
        assert result == [5, 4, 3, 2, 1]

    def test_beginning_of_truncates_then_steps_back(self):
        result = m(2024, 3, 5, 10, 30).until(m(2024, 3, 1)).map_beginning_of_each("day", ident)
        assert result == [m(2024, 3, 4), m(2024, 3, 3), m(2024, 3, 2), m(2024, 3, 1)]

    def test_without_truncation_keeps_time_of_day(self):
        result = m(2024, 3, 5, 10, 30).until(m(2024, 3, 1)).map_each("day", ident)
        assert result[0] == m(2024, 3, 4, 10, 30)
        assert result[-1] == m(2024, 3, 1, 10, 30)


# ── Time Zone Aware Bounds ───────────────────────────────────

class TestAwareBounds:
    def test_until_date_uses_origin_tz(self):
        t = Moment(datetime(2024, 3, 1, tzinfo=timezone.utc))
        result = t.until(date(2024, 3, 3)).map_each("day", lambda x: x.value)
        assert result == [
            datetime(2024, 3, 2, tzinfo=timezone.utc),
            datetime(2024, 3, 3, tzinfo=timezone.utc),
        ]

    def test_from_date_uses_origin_tz(self):
        tz = timezone(timedelta(hours=3))
        b = Moment(datetime(2024, 3, 3, tzinfo=tz))
        result = b.from_(date(2024, 3, 1)).map_each("day", ident)
        assert len(result) == 2
        assert all(x.value.tzinfo is tz for x in result)

    def test_deferred_until_date_on_aware_origin(self):
        t = Moment(datetime(2024, 3, 1, tzinfo=timezone.utc))
        result = t.map_each("day").until(date(2024, 3, 2), lambda x: x.value.day)
        assert result == [2]

    def test_naive_origin_keeps_naive_date_bound(self):
        chain = m(2024, 3, 1).until(date(2024, 3, 3))
        assert chain.bound.value.tzinfo is None
