import json
import math

import pytest

from planet_ephem.cli import main


def _run(capsys, *argv):
    rc = main(list(argv))
    out = capsys.readouterr()
    return rc, out


def test_position(capsys):
    rc, out = _run(capsys, "position", "mars", "--date", "2018-07-27")
    assert rc == 0
    data = json.loads(out.out)
    assert data["day"] == 6781.5
    assert data["utc"] == "2018-07-27 00:00:00"
    assert 1.38 < math.sqrt(sum(v * v for v in data["xyz_au"])) < 1.67


def test_direction(capsys):
    rc, out = _run(capsys, "direction", "sun", "--date", "0", "--norm3")
    assert rc == 0
    unit = json.loads(out.out)["unit_xyz"]
    assert math.sqrt(sum(v * v for v in unit)) == pytest.approx(1.0)
    rc, out = _run(capsys, "direction", "sun", "--date", "2000-03-20T07:35")
    lon = json.loads(out.out)["lon_deg"]
    assert min(lon, 360.0 - lon) < 0.05


def test_orbit(capsys):
    rc, out = _run(capsys, "orbit", "mars", "--date", "2020-01-01")
    assert rc == 0
    data = json.loads(out.out)
    assert data["period_days"] == pytest.approx(687.0, rel=0.01)
    assert data["b_au"] < data["a_au"]


def test_tilt_and_moon(capsys):
    rc, out = _run(capsys, "tilt", "--date", "2020-01-01")
    assert rc == 0
    assert len(json.loads(out.out)["tilt"]) == 2
    rc, out = _run(capsys, "moon", "--date", "2020-01-01")
    assert rc == 0
    moon = json.loads(out.out)
    assert 55.0 < moon["r_earth_radii"] < 65.0
    assert abs(moon["lat_deg"]) < 5.5


def test_sun_time(capsys):
    rc, out = _run(capsys, "sun-time", "1", "0", "--near", "2000-03-01")
    assert rc == 0
    assert json.loads(out.out)["utc"].startswith("2000-03-20")


def test_sun_time_bad_direction(capsys):
    rc, out = _run(capsys, "sun-time", "0", "0", "--near", "2000-03-01")
    assert rc == 2
    assert "[ephem] bad direction" in out.err


def test_oppositions(capsys):
    rc, out = _run(capsys, "oppositions", "mars", "--start", "2018-01-01", "--end", "2019-01-01")
    assert rc == 0
    events = json.loads(out.out)
    assert len(events) == 1
    assert events[0]["utc"].startswith("2018-07-27")


def test_oppositions_bad_step(capsys):
    rc, out = _run(capsys, "oppositions", "mars", "--start", "0", "--end", "100", "--step", "0")
    assert rc == 2
    assert "bad step" in out.err


def test_bad_date(capsys):
    rc, out = _run(capsys, "position", "mars", "--date", "not-a-date")
    assert rc == 2
    assert out.out == ""
    assert "[ephem] bad date" in out.err


def test_debug_reports_model(capsys):
    rc, out = _run(capsys, "--debug", "position", "venus", "--date", "1700-01-01")
    assert rc == 0
    assert "jpl-3000bc-3000ad" in out.err


def test_unknown_body_rejected_by_parser(capsys):
    with pytest.raises(SystemExit):
        main(["position", "pluto", "--date", "0"])


def test_far_future_date_is_no_result(capsys):
    rc, out = _run(capsys, "position", "venus", "--date", "5e6")
    assert rc == 2
    assert out.out == ""
    assert "[ephem] no result for position" in out.err
