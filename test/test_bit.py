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

"""Tests for bit projection and landing-rate calculations."""

import math

import pytest

from wellsteer.directional import bit, geometry
from wellsteer.directional.bit import BitProjectionConfig
from wellsteer.directional.data import Plan, SurveyStation
from wellsteer.directional.limits import Limits, Status
from wellsteer.directional.projection import ScenarioChain


@pytest.fixture
def surveys(raw_surveys):
    return geometry.desurvey(raw_surveys, vs_azimuth=90.0)


# ---------------------------------------------------------------------------
# Guards
# ---------------------------------------------------------------------------

def test_no_known_station_returns_none(build_plan):
    assert bit.project_bit([], build_plan) is None
    assert bit.project_bit([], build_plan, scenarios=[], limits=Limits()) is None


def test_no_plan_returns_none(surveys):
    assert bit.project_bit(surveys, None) is None
    assert bit.project_bit(surveys, Plan(name="empty")) is None


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

def test_hold_projection_keeps_orientation(surveys, build_plan):
    config = BitProjectionConfig(survey_to_bit_distance=15.0, apply_rates=False)
    projection = bit.project_bit(surveys, build_plan, config=config)
    last = surveys[-1]
    assert projection.md == pytest.approx(115.0)
    assert projection.survey_md == 100.0
    assert projection.inc == pytest.approx(10.0)
    assert projection.azi == pytest.approx(90.0)
    assert projection.dls == pytest.approx(0.0, abs=1e-5)
    assert projection.tvd == pytest.approx(last.tvd + 15.0 * math.cos(math.radians(10.0)))
    assert not projection.from_scenario


def test_apply_rates_extrapolates_build(surveys, build_plan):
    projection = bit.project_bit(surveys, build_plan, config=BitProjectionConfig())
    assert projection.applied_br == pytest.approx(3.0)
    assert projection.applied_tr == pytest.approx(0.0)
    assert projection.inc == pytest.approx(11.5)
    assert projection.azi == pytest.approx(90.0)
    assert projection.dls == pytest.approx(3.0)


def test_projected_azimuth_wraps(build_plan):
    stations = [
        SurveyStation(md=0.0, inc=20.0, azi=340.0, tvd=0.0, ns=0.0, ew=0.0),
        SurveyStation(md=30.0, inc=20.0, azi=350.0, tvd=28.0, ns=10.0, ew=-2.0),
    ]
    projection = bit.project_bit(stations, build_plan, config=BitProjectionConfig(survey_to_bit_distance=30.0))
    assert projection.azi == pytest.approx(0.0, abs=1e-9)


def test_required_rates_look_ahead_on_plan(surveys, build_plan):
    config = BitProjectionConfig(apply_rates=False)
    projection = bit.project_bit(surveys, build_plan, config=config)
    # bit at 115 m, plan at 145 m has inc 14.5
    assert projection.projection_to_target_md == pytest.approx(30.0)
    assert projection.required_br == pytest.approx((14.5 - 10.0) / 30.0 * 30.0)
    assert projection.required_tr == pytest.approx(0.0)


def test_bit_beyond_plan_end_matches_last_station(surveys, build_plan):
    config = BitProjectionConfig(survey_to_bit_distance=150.0, apply_rates=False)
    projection = bit.project_bit(surveys, build_plan, config=config)
    assert projection is not None
    assert projection.plan.tvd == 195.0
    assert projection.projection_to_target_md == pytest.approx(30.0)


def test_projection_from_scenario_chain(surveys, build_plan):
    chain = ScenarioChain(base=surveys[-1], vs_azimuth=90.0)
    chain.append(30.0, 12.0, 90.0)
    last, previous = bit.last_known_stations(surveys, chain)
    assert last is chain[0]
    assert previous is surveys[-1]

    projection = bit.project_bit(surveys, build_plan, scenarios=chain, config=BitProjectionConfig())
    assert projection.from_scenario
    assert projection.survey_md == pytest.approx(130.0)
    assert projection.md == pytest.approx(145.0)
    assert projection.applied_br == pytest.approx(2.0)
    assert projection.inc == pytest.approx(13.0)


def test_last_known_stations_order(surveys):
    chain = ScenarioChain(base=surveys[-1])
    chain.append(30.0, 12.0, 90.0)
    chain.append(30.0, 14.0, 90.0)
    last, previous = bit.last_known_stations(surveys, chain)
    assert last is chain[1]
    assert previous is chain[0]
    assert bit.last_known_stations(surveys[:1]) == (surveys[0], None)
    assert bit.last_known_stations([]) == (None, None)


def test_bit_status_is_classified(surveys, build_plan):
    tight = Limits(warning_distance_3d=0.001, max_distance_3d=0.002)
    projection = bit.project_bit(surveys, build_plan, limits=tight)
    assert projection.status == Status.ALARM
    assert projection.axis_statuses["distance_3d"] == Status.ALARM


def test_bit_projection_is_hashable(surveys, build_plan):
    projection = bit.project_bit(surveys, build_plan)
    assert projection in {projection}


# ---------------------------------------------------------------------------
# Target landing
# ---------------------------------------------------------------------------

def test_target_tvd_auto_distance(surveys, build_plan):
    config = BitProjectionConfig(apply_rates=False, target_tvd=150.0)
    projection = bit.project_bit(surveys, build_plan, config=config)
    avg_inc = 0.5 * (projection.inc + 20.0)
    expected_distance = (150.0 - projection.tvd) / math.cos(math.radians(avg_inc))
    assert projection.landing_inc == 20.0
    assert projection.distance_to_target == pytest.approx(expected_distance)
    assert projection.required_br_to_target == pytest.approx((20.0 - projection.inc) / expected_distance * 30.0)


def test_target_with_user_inclination_and_distance(surveys, build_plan):
    config = BitProjectionConfig(apply_rates=False, target_tvd=150.0, target_inc=30.0, distance_to_land=50.0)
    projection = bit.project_bit(surveys, build_plan, config=config)
    assert projection.distance_to_target == 50.0
    assert projection.required_br_to_target == pytest.approx((30.0 - projection.inc) / 50.0 * 30.0)


def test_no_target_configured(surveys, build_plan):
    projection = bit.project_bit(surveys, build_plan)
    assert projection.target_tvd is None
    assert projection.distance_to_target is None
    assert projection.required_br_to_target is None


def test_target_equal_to_plan_tvd_is_ignored(surveys, build_plan):
    config = BitProjectionConfig(apply_rates=False)
    plan_tvd = bit.project_bit(surveys, build_plan, config=config).plan.tvd
    projection = bit.project_bit(surveys, build_plan, config=config.update(target_tvd=plan_tvd))
    assert projection.distance_to_target is None


def test_target_rates_edge_cases(build_plan):
    stations = build_plan.sorted_stations
    assert bit.target_rates(200.0, 10.0, 150.0, stations) is None
    assert bit.target_rates(100.0, 10.0, None, stations) is None

    near_horizontal = bit.target_rates(100.0, 88.0, 120.0, stations, target_inc=92.0)
    assert near_horizontal.distance == pytest.approx(40.0)
    assert near_horizontal.required_br == pytest.approx(3.0)
    assert bit.target_rates(100.0, 89.5, 120.0, stations, target_inc=90.0) is None


def test_config_round_trip():
    config = BitProjectionConfig(target_tvd=1500.0)
    assert BitProjectionConfig(**config.to_dict()).to_dict() == config.to_dict()
    assert config.survey_to_bit_distance == 15.0
    assert config.apply_rates is True
