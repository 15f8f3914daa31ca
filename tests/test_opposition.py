import math

import numpy as np
import pytest

from planet_ephem.opposition import (
    OppositionDetector,
    OppositionRefinementError,
    scan_oppositions,
)

# Mars oppositions: 2016-05-22 and 2018-07-27 05:07 UTC
MARS_2016 = 5986.0
MARS_2018 = 6781.71
# Venus inferior conjunction: 2020-06-03 17:44 UTC
VENUS_2020 = 7459.24


def test_mars_2018_opposition():
    events = scan_oppositions("mars", 6500.0, 7200.0, 10.0)
    assert len(events) == 1
    ev = events[0]
    assert ev.day == pytest.approx(MARS_2018, abs=0.5)
    # geocentric Mars and geocentric Sun lie on one line through the Earth
    mars = ev.position[:2] - ev.earth_position[:2]
    sun = -ev.earth_position[:2]
    cross = mars[0] * sun[1] - mars[1] * sun[0]
    assert abs(cross) / (np.linalg.norm(mars) * np.linalg.norm(sun)) < 3e-4
    assert float(np.dot(mars, sun)) < 0.0
    assert ev.dot > 0.0


def test_venus_inferior_conjunction():
    events = scan_oppositions("venus", 7300.0, 7600.0)
    assert len(events) == 1
    ev = events[0]
    assert ev.day == pytest.approx(VENUS_2020, abs=0.5)
    # inferior: Venus sits between the Sun and the Earth
    assert np.linalg.norm(ev.position) < np.linalg.norm(ev.earth_position)


def test_inside_window_is_noop():
    det = OppositionDetector("mars", 6700.0)
    for k in range(1, 30):
        det.next(6700.0 + 5.0 * k)
    window, found = det.window, list(det.found)
    assert len(found) == 1
    assert det.next(6750.0) is None
    assert det.next(6700.0) is None
    assert det.next(6845.0) is None
    assert det.window is window
    assert [ev.day for ev in det.found] == [ev.day for ev in found]
    assert det.range == (6700.0, 6845.0)


def test_unparsable_day_is_noop():
    det = OppositionDetector("jupiter", "100")
    assert det.next("junk") is None
    assert det.next(None) is None
    assert det.range == (100.0, 100.0)


def test_backward_scan_is_chronological():
    events = scan_oppositions("mars", 7200.0, 5500.0)
    days = [ev.day for ev in events]
    assert days == sorted(days)
    assert days == [pytest.approx(MARS_2016, abs=1.0), pytest.approx(MARS_2018, abs=0.5)]


def test_mixed_direction_scan():
    det = OppositionDetector("mars", 6400.0)
    for k in range(1, 161):
        det.next(6400.0 + 5.0 * k)
        det.next(6400.0 - 5.0 * k)
    assert det.range == (5600.0, 7200.0)
    backward = scan_oppositions("mars", 7200.0, 5500.0)
    assert [ev.day for ev in det.found] == pytest.approx([ev.day for ev in backward], abs=1e-3)


def test_revolutions_do_not_depend_on_step():
    stepped = OppositionDetector("mars", 6000.0)
    for k in range(1, 121):
        stepped.next(6000.0 + 5.0 * k)
    jumped = OppositionDetector("mars", 6000.0)
    jumped.next(6600.0)
    assert jumped.window.last.revs == pytest.approx(stepped.window.last.revs, abs=1e-9)
    assert 0.5 < jumped.window.last.revs < 1.2
    assert jumped.window.first.revs == 0.0


def test_revolutions_between_oppositions():
    first, second = scan_oppositions("mars", 5500.0, 7200.0)
    # at opposition the geocentric and heliocentric directions coincide
    helio = math.atan2(first.position[0] * second.position[1] - first.position[1] * second.position[0],
                       float(np.dot(first.position[:2], second.position[:2]))) / (2.0 * math.pi)
    assert second.revs - first.revs - 1.0 == pytest.approx(helio % 1.0, abs=1e-5)


def test_revolutions_backward_are_negative():
    det = OppositionDetector("saturn", 0.0)
    det.next(-400.0)
    # Saturn drifts forward against the stars, so going back in time unwinds it
    assert -0.2 < det.window.first.revs < 0.0


@pytest.mark.parametrize("planet", ["earth", "Sun", "moon"])
def test_no_oppositions_for_non_planets(planet):
    with pytest.raises(ValueError):
        OppositionDetector(planet, 0.0)


def test_bad_initial_day():
    with pytest.raises(ValueError):
        OppositionDetector("mars", "junk")


def test_unknown_planet():
    with pytest.raises(ValueError):
        OppositionDetector("pluto", 0.0)


def test_scan_step_must_be_positive():
    with pytest.raises(ValueError):
        scan_oppositions("mars", 0.0, 100.0, 0.0)
    with pytest.raises(ValueError):
        scan_oppositions("mars", 0.0, 100.0, -5.0)


def test_failed_refinement_raises(monkeypatch):
    monkeypatch.setattr("planet_ephem.opposition.zbrent", lambda *args, **kwargs: None)
    with pytest.raises(OppositionRefinementError):
        scan_oppositions("mars", 6500.0, 7200.0, 10.0)


def test_debug_line_on_stderr(capsys):
    scan_oppositions("mars", 6700.0, 6850.0, 10.0, debug=True)
    err = capsys.readouterr().err
    assert err.startswith("[opposition] mars at day 678")


class _FixedPlanet(OppositionDetector):
    """Planet parked on the x axis with the Earth turning past it; cross is exactly 0 on day 0."""

    def _positions(self, day):
        a = 0.01 * day
        return np.array([2.0, 0.0, 0.0]), np.array([math.cos(a), math.sin(a), 0.0])


def test_zero_on_edge_reported_once():
    det = _FixedPlanet("mars", -1.0)
    ev = det.next(0.0)
    assert ev is not None and ev.day == 0.0
    assert det.next(1.0) is None
    assert len(det.found) == 1


def test_zero_on_seed_day_not_reported():
    det = _FixedPlanet("mars", 0.0)
    assert det.window.first.cross == 0.0
    assert det.next(1.0) is None
    assert det.next(-1.0) is None
    assert det.found == []


def test_events_compare_by_identity():
    first, second = scan_oppositions("mars", 5500.0, 7200.0)
    assert first == first
    assert first != second
    assert len({first, second, first}) == 2


def test_edges_are_hashable():
    det = OppositionDetector("mars", 0.0)
    assert len({det.window.first, det.window.last}) == 1
