# SPDX-License-Identifier: GPL-3.0-or-later

# Copyright (C) 2026 Darkmine Pty Ltd

# This file is part of wellsteer.

# wellsteer is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# wellsteer is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with wellsteer.  If not, see <https://www.gnu.org/licenses/>.

"""Tests for station loaders, exporters and QA helpers."""

import pandas as pd
import pytest

from wellsteer.directional import data, validate
from wellsteer.directional.data import PlanStation, SurveyStation
from wellsteer.directional.projection import ScenarioChain


def _survey_table():
    return pd.DataFrame({
        "MD": [200.0, 0.0, 100.0],
        "Inclination": [12.0, 0.0, 6.0],
        "Azimuth": [45.0, 0.0, 40.0],
        "TVD": [None, 0.0, 99.8],
    })


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def test_load_surveys_standardizes_and_sorts():
    stations = data.load_surveys(_survey_table())
    assert [s.md for s in stations] == [0.0, 100.0, 200.0]
    assert stations[1].inc == 6.0
    assert stations[1].tvd == pytest.approx(99.8)
    assert stations[2].tvd is None
    assert not stations[2].is_resolved


def test_load_surveys_accepts_records_and_column_map():
    rows = [{"depth_m": 10.0, "i": 1.0, "a": 2.0}]
    stations = data.load_surveys(rows, column_map={"depth_m": "md", "i": "inc", "a": "azi"})
    assert stations == [SurveyStation(md=10.0, inc=1.0, azi=2.0)]


def test_load_surveys_missing_column_raises():
    with pytest.raises(ValueError, match="missing column"):
        data.load_surveys(pd.DataFrame({"md": [0.0], "inc": [0.0]}))


def test_load_surveys_empty():
    assert data.load_surveys(None) == []


def test_load_plan_reads_positions():
    table = pd.DataFrame({
        "Measured Depth": [0.0, 100.0],
        "Inc": [0.0, 10.0],
        "Azi": [0.0, 90.0],
        "TVD": [0.0, 99.0],
        "Northing": [0.0, 0.0],
        "Easting": [0.0, 8.0],
    })
    plan = data.load_plan(table, name="Rev A", revision="2", vs_azimuth=90.0)
    assert plan.name == "Rev A"
    assert plan.vs_azimuth == 90.0
    assert plan.min_md == 0.0 and plan.max_md == 100.0
    assert plan.sorted_stations[1] == PlanStation(md=100.0, inc=10.0, azi=90.0, tvd=99.0, ns=0.0, ew=8.0)
    assert plan.to_dict()["stations"][1]["ew"] == 8.0


def test_known_or_zero():
    assert data.known_or_zero(None) == 0.0
    assert data.known_or_zero(3) == 3.0


# ---------------------------------------------------------------------------
# Exporting
# ---------------------------------------------------------------------------

def test_scenarios_to_frame():
    chain = ScenarioChain(base=SurveyStation(md=100.0, inc=10.0, azi=90.0, tvd=99.0, ns=0.0, ew=8.0))
    chain.append(30.0, 12.0, 90.0)
    frame = data.scenarios_to_frame(chain.stations)
    assert frame.shape[0] == 1
    for col in ["md", "tvd", "ns", "ew", "vs", "dls", "distance"]:
        assert col in frame.columns
    assert data.scenarios_to_frame([]).empty


def test_stations_to_frame():
    frame = data.stations_to_frame(data.load_surveys(_survey_table()))
    assert list(frame["md"]) == [0.0, 100.0, 200.0]
    assert data.stations_to_frame([]).empty


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def test_validate_stations_reports_issues():
    stations = [
        SurveyStation(md=100.0, inc=5.0, azi=10.0, tvd=99.0, ns=0.0, ew=1.0),
        SurveyStation(md=90.0, inc=190.0, azi=365.0, tvd=None),
    ]
    issues = validate.validate_stations(stations, label="survey")
    types = {issue["type"] for issue in issues}
    assert types == {"non_increasing_md", "inc_out_of_range", "azimuth_out_of_range", "unresolved_position"}
    assert all(issue["index"] == 1 for issue in issues)


def test_warn_non_monotonic_logs(caplog):
    with caplog.at_level("WARNING"):
        assert not validate.warn_non_monotonic([0.0, 10.0, 10.0], label="plan")
    assert "Plan MD sequence" in caplog.text
    assert validate.warn_non_monotonic([0.0, 10.0])
