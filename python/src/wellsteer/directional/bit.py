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

"""Projection from the last known station to the drill bit.

The last known station is the end of the scenario chain when one exists,
otherwise the deepest survey. From there the bit is projected by the
survey-to-bit distance, either holding inclination/azimuth or continuing the
build/turn rates observed over the last two known stations, and the
projected position is compared with the plan exactly like a survey station.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Dict, NamedTuple, Optional

from .geometry import RATE_LENGTH, azimuth_delta, normalize_azimuth, rates, resolve_vs_azimuth
from .limits import Limits, Status, axis_statuses as classify_axes, worst
from .projection import ScenarioStation, project_station
from .variance import MD_TOLERANCE, PlanPoint, _Deviation, interpolate_plan

logger = logging.getLogger(__name__)

DEFAULT_SURVEY_TO_BIT = 15.0
# Plan look-ahead used for the bit's required build/turn rates.
LOOK_AHEAD = 30.0
# Below this |cos(average inclination)| TVD gain is too small to size a landing from.
NEAR_HORIZONTAL_COS = 0.05
MIN_ESTIMATED_LANDING = 10.0


class BitProjectionConfig:
    def __init__(self, survey_to_bit_distance=DEFAULT_SURVEY_TO_BIT, apply_rates=True,
                 target_tvd=None, target_inc=None, distance_to_land=None):
        self.survey_to_bit_distance = survey_to_bit_distance
        self.apply_rates = apply_rates
        self.target_tvd = target_tvd
        self.target_inc = target_inc
        self.distance_to_land = distance_to_land

    def update(self, **kwargs):
        for key, val in kwargs.items():
            setattr(self, key, val)
        return self

    def to_dict(self):
        return {
            "survey_to_bit_distance": self.survey_to_bit_distance,
            "apply_rates": self.apply_rates,
            "target_tvd": self.target_tvd,
            "target_inc": self.target_inc,
            "distance_to_land": self.distance_to_land,
        }


class TargetRates(NamedTuple):
    required_br: float
    distance: float
    landing_inc: float


@dataclass(frozen=True)
class BitProjection(_Deviation):
    survey_md: float
    survey_to_bit_distance: float
    md: float
    tvd: float
    ns: float
    ew: float
    vs: float
    inc: float
    azi: float
    dls: float
    applied_br: float
    applied_tr: float
    plan: PlanPoint
    required_br: float
    required_tr: float
    projection_to_target_md: float
    target_tvd: Optional[float] = None
    landing_inc: Optional[float] = None
    distance_to_target: Optional[float] = None
    required_br_to_target: Optional[float] = None
    from_scenario: bool = False
    status: Status = Status.OK
    axis_statuses: Dict[str, Status] = field(default_factory=dict, hash=False)


def last_known_stations(surveys, scenarios=None):
    """``(last, previous)`` known stations, scenario chain first.

    With a single scenario station the previous one is the deepest survey.
    Either element is ``None`` when it does not exist.
    """
    ordered = sorted(surveys or [], key=lambda s: s.md)
    chain = list(scenarios or [])
    if chain:
        previous = chain[-2] if len(chain) >= 2 else (ordered[-1] if ordered else None)
        return chain[-1], previous
    if not ordered:
        return None, None
    return ordered[-1], (ordered[-2] if len(ordered) >= 2 else None)


def _landing_inclination(target_tvd, plan_stations):
    for station in plan_stations:
        if station.tvd >= target_tvd:
            return station.inc
    return plan_stations[-1].inc


def target_rates(current_tvd, current_inc, target_tvd, plan_stations, target_inc=None, distance_to_land=None):
    """Constant build rate that lands at ``target_tvd``.

    The landing inclination is ``target_inc`` or the plan's inclination at the
    target TVD. The distance is ``distance_to_land`` when positive, otherwise
    estimated from the remaining TVD and the average inclination. Returns
    ``None`` when no landing can be sized.
    """
    if target_tvd is None or not plan_stations:
        return None
    landing_inc = target_inc if target_inc is not None else _landing_inclination(target_tvd, plan_stations)

    if distance_to_land is not None and distance_to_land > 0:
        distance = distance_to_land
    else:
        tvd_remaining = target_tvd - current_tvd
        if tvd_remaining <= 0:
            return None
        cos_avg = math.cos(math.radians(0.5 * (current_inc + landing_inc)))
        if abs(cos_avg) < NEAR_HORIZONTAL_COS:
            # rough estimate, TVD gain is negligible this close to horizontal
            distance = abs(landing_inc - current_inc) * 10.0
            if distance < MIN_ESTIMATED_LANDING:
                return None
        else:
            distance = tvd_remaining / cos_avg
    if distance <= 0:
        return None
    return TargetRates((landing_inc - current_inc) / distance * RATE_LENGTH, distance, landing_inc)


def project_to_bit(last_station, previous_station, plan, config=None, limits=None, vs_azimuth=0.0):
    """Project the bit ahead of ``last_station`` and compare it with ``plan``.

    Returns ``None`` without a last station or without plan stations.
    """
    if last_station is None or plan is None:
        return None
    plan_stations = plan.sorted_stations
    if not plan_stations:
        return None
    config = config or BitProjectionConfig()
    limits = limits or Limits()
    distance = config.survey_to_bit_distance

    applied_br = applied_tr = 0.0
    if config.apply_rates and previous_station is not None:
        _, applied_br, applied_tr = rates(
            previous_station.inc, previous_station.azi,
            last_station.inc, last_station.azi,
            last_station.md - previous_station.md,
        )
    bit_inc = last_station.inc + applied_br / RATE_LENGTH * distance
    bit_azi = normalize_azimuth(last_station.azi + applied_tr / RATE_LENGTH * distance)
    bit = project_station(last_station, distance, bit_inc, bit_azi, vs_azimuth)

    plan_point = interpolate_plan(bit.md, plan_stations, vs_azimuth)

    ahead_md = min(bit.md + LOOK_AHEAD, plan_stations[-1].md)
    look_ahead = ahead_md - bit.md
    if look_ahead <= 0:
        look_ahead = LOOK_AHEAD
    ahead = interpolate_plan(ahead_md, plan_stations, vs_azimuth)
    required_br = (ahead.inc - bit_inc) / look_ahead * RATE_LENGTH
    required_tr = azimuth_delta(bit_azi, ahead.azi) / look_ahead * RATE_LENGTH

    target = None
    if config.target_tvd is not None and abs(config.target_tvd - plan_point.tvd) > MD_TOLERANCE:
        target = target_rates(bit.tvd, bit_inc, config.target_tvd, plan_stations,
                              target_inc=config.target_inc, distance_to_land=config.distance_to_land)

    projection = BitProjection(
        survey_md=last_station.md,
        survey_to_bit_distance=distance,
        md=bit.md,
        tvd=bit.tvd,
        ns=bit.ns,
        ew=bit.ew,
        vs=bit.vs,
        inc=bit_inc,
        azi=bit_azi,
        dls=bit.dls,
        applied_br=applied_br,
        applied_tr=applied_tr,
        plan=plan_point,
        required_br=required_br,
        required_tr=required_tr,
        projection_to_target_md=look_ahead,
        target_tvd=config.target_tvd,
        landing_inc=target.landing_inc if target else None,
        distance_to_target=target.distance if target else None,
        required_br_to_target=target.required_br if target else None,
        from_scenario=isinstance(last_station, ScenarioStation),
    )
    statuses = classify_axes(limits, projection.dls, projection.distance_3d,
                             projection.tvd_variance, projection.closure_distance)
    return replace(projection, status=worst(statuses.values()), axis_statuses=statuses)


def project_bit(surveys, plan, scenarios=None, config=None, limits=None, project_vs_azimuth=None):
    """Bit projection from the last known station of ``surveys``/``scenarios``."""
    if plan is None:
        return None
    last, previous = last_known_stations(surveys, scenarios)
    if last is None:
        return None
    vs_azimuth = resolve_vs_azimuth(plan.vs_azimuth, project_vs_azimuth)
    return project_to_bit(last, previous, plan, config=config, limits=limits, vs_azimuth=vs_azimuth)
