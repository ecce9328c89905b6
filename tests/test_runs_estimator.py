"""
Tests for runs estimation.

With the default batsmen (6.5 and 6.4 m/s, mean 6.45) on a 20.12 m pitch:
  single = 20.12 / 6.45 + 0.75  ≈ 3.869 s
  double = 2 * single + 0.6     ≈ 8.339 s
  triple = double + single + 0.6 ≈ 12.808 s
"""

import pytest

from creasesim.models.field import (
    Batsman,
    FieldConfig,
    create_default_batsmen,
)
from creasesim.models.shot import (
    CatchResult,
    DismissalType,
    Event,
    InterceptionResult,
    Phase,
)
from creasesim.runs_estimator import (
    average_runner_speed,
    estimate_runs,
    runs_from_available_time,
    time_for_runs,
)
from creasesim.utils.units import Vector2D


def _batsman(speed, batsman_id="striker"):
    return Batsman(id=batsman_id, name=batsman_id.title(), runner_speed=speed,
                   crease_position=Vector2D(0.0, 0.0))


class TestRunningTimes:

    def test_default_pair(self):
        single, double, triple = time_for_runs(create_default_batsmen(), FieldConfig())
        assert single == pytest.approx(3.86938, abs=1e-4)
        assert double == pytest.approx(8.33876, abs=1e-4)
        assert triple == pytest.approx(12.80814, abs=1e-4)

    def test_no_batsmen_uses_default_speed(self):
        assert average_runner_speed([]) == pytest.approx(6.2)
        single, _, _ = time_for_runs([], FieldConfig())
        assert single == pytest.approx(3.99516, abs=1e-4)

    def test_speed_capped(self):
        """Nobody runs faster than 8.1 m/s, whatever the roster says."""
        assert average_runner_speed([_batsman(12.0)]) == pytest.approx(8.1)
        assert average_runner_speed([_batsman(12.0), _batsman(6.1, "non-striker")]) \
            == pytest.approx(7.1)

    def test_longer_pitch_takes_longer(self):
        short, _, _ = time_for_runs(create_default_batsmen(), FieldConfig(pitch_length=18.0))
        standard, _, _ = time_for_runs(create_default_batsmen(), FieldConfig())
        assert short < standard

    @pytest.mark.parametrize("available,expected", [
        (0.0, 0),
        (3.8, 0),
        (3.9, 1),
        (8.3, 1),
        (8.4, 2),
        (12.8, 2),
        (12.9, 3),
        (60.0, 3),
    ])
    def test_thresholds(self, available, expected):
        assert runs_from_available_time(available, create_default_batsmen(),
                                        FieldConfig()) == expected

    def test_exact_threshold_counts(self):
        single, _, _ = time_for_runs(create_default_batsmen(), FieldConfig())
        assert runs_from_available_time(single, create_default_batsmen(),
                                        FieldConfig()) == 1


class TestEstimateRuns:

    def _stop(self, make_sample, time=2.0):
        return make_sample(time, 0.0, 20.0, phase=Phase.STOPPED, event=Event.STOPPED)

    def test_caught_is_dismissal(self, make_sample):
        catch = CatchResult(fielder_id="long-on", time=2.4,
                            position=Vector2D(0.0, 40.0))
        outcome = estimate_runs(FieldConfig(), create_default_batsmen(),
                                self._stop(make_sample), caught=catch)
        assert outcome.runs == 0
        assert outcome.is_dismissal
        assert outcome.dismissal_type is DismissalType.CAUGHT
        assert outcome.intercepted_by == "long-on"
        assert outcome.intercept_time == 2.4
        assert not outcome.is_boundary

    def test_caught_beats_six(self, make_sample):
        boundary = make_sample(3.0, 0.0, 66.0, 5.0, phase=Phase.OUT_OF_PLAY,
                               event=Event.BOUNDARY_SIX)
        catch = CatchResult(fielder_id="long-on", time=2.9,
                            position=Vector2D(0.0, 64.0))
        outcome = estimate_runs(FieldConfig(), create_default_batsmen(), boundary,
                                boundary_sample=boundary, is_six=True, caught=catch)
        assert outcome.is_dismissal
        assert outcome.runs == 0

    def test_six(self, make_sample):
        boundary = make_sample(2.46, 0.0, 65.2, 20.0, phase=Phase.OUT_OF_PLAY,
                               event=Event.BOUNDARY_SIX)
        outcome = estimate_runs(FieldConfig(), create_default_batsmen(), boundary,
                                boundary_sample=boundary, is_six=True)
        assert outcome.runs == 6
        assert outcome.is_boundary
        assert outcome.boundary_time == 2.46

    def test_four_beats_interception(self, make_sample):
        boundary = make_sample(4.0, 0.0, 65.0, phase=Phase.OUT_OF_PLAY,
                               event=Event.BOUNDARY_FOUR)
        interception = InterceptionResult(fielder_id="long-off", intercept_time=3.0,
                                          intercept_position=Vector2D(0.0, 60.0))
        outcome = estimate_runs(FieldConfig(), create_default_batsmen(), boundary,
                                boundary_sample=boundary, interception=interception)
        assert outcome.runs == 4
        assert outcome.is_boundary
        assert outcome.boundary_time == 4.0
        assert outcome.intercepted_by is None

    def test_intercepted(self, make_sample):
        interception = InterceptionResult(fielder_id="deep-cover", intercept_time=5.08,
                                          intercept_position=Vector2D(17.4, 19.9))
        outcome = estimate_runs(FieldConfig(), create_default_batsmen(),
                                self._stop(make_sample, 4.48), interception=interception)
        assert outcome.runs == 1
        assert outcome.intercepted_by == "deep-cover"
        assert outcome.intercept_time == 5.08
        assert not outcome.is_boundary
        assert not outcome.is_dismissal

    def test_empty_interception_falls_through(self, make_sample):
        """reached_boundary without a fielder just means nobody got there."""
        outcome = estimate_runs(FieldConfig(), create_default_batsmen(),
                                self._stop(make_sample, 7.9),
                                interception=InterceptionResult(reached_boundary=False))
        # 7.9 + 0.6 = 8.5 > double
        assert outcome.runs == 2
        assert outcome.intercepted_by is None

    @pytest.mark.parametrize("stop_time,expected", [
        (1.22, 0),
        (3.5, 1),
        (7.8, 2),
    ])
    def test_unfielded_ball_adds_margin(self, make_sample, stop_time, expected):
        outcome = estimate_runs(FieldConfig(), create_default_batsmen(),
                                self._stop(make_sample, stop_time))
        assert outcome.runs == expected
        assert outcome.boundary_time is None
