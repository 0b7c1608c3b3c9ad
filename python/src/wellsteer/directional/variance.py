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

"""Actual-versus-plan variance for survey stations.

For each survey station the plan is matched at the same MD, deviations in
position and orientation are measured, and the station is classified
against the active limits. Results are rebuilt from scratch on every call.

Plan matching
-------------
- an exact MD match (within ``MD_TOLERANCE``) returns that plan station;
- between two plan stations TVD/NS/EW and inclination are interpolated
  linearly, azimuth along the shorter arc;
- above the first or below the last plan station the nearest end station is
  used.
"""

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Dict

import numpy as np
import pandas as pd

from wellsteer.datamodel import (
    MD,
    INC,
    AZI,
    TVD,
    NS,
    EW,
    VS,
    DLS,
    BR,
    TR,
    PLAN_TVD,
    PLAN_NS,
    PLAN_EW,
    PLAN_VS,
    PLAN_INC,
    PLAN_AZI,
    PLAN_DLS,
    PLAN_BR,
    PLAN_TR,
    CLOSURE_DISTANCE,
    DISTANCE_3D,
    INC_VARIANCE,
    AZI_VARIANCE,
    TVD_VARIANCE,
    VS_VARIANCE,
    REQUIRED_BR,
    REQUIRED_TR,
    STATUS,
    RESOLVED,
)

from .data import known_or_zero
from .geometry import (
    RATE_LENGTH,
    azimuth_delta,
    normalize_azimuth,
    position_of,
    rates,
    resolve_vs_azimuth,
    vertical_section,
)
from .limits import Limits, Status, axis_statuses as classify_axes, worst
from .validate import warn_non_monotonic

logger = logging.getLogger(__name__)

MD_TOLERANCE = 1e-3
# Course length over which the required build/turn rates cancel the current variance.
REQUIRED_RATE_INTERVAL = 30.0


@dataclass(frozen=True)
class PlanPoint:
    md: float
    tvd: float
    ns: float
    ew: float
    vs: float
    inc: float
    azi: float
    dls: float = 0.0
    br: float = 0.0
    tr: float = 0.0


def _plan_bracket(mds, md):
    n = len(mds)
    if n == 1:
        return 0, 0
    hi = int(np.searchsorted(mds, md, side="left"))
    hi = min(max(hi, 1), n - 1)
    return hi - 1, hi


def _point_at(station, md, vs_azimuth, dls, br, tr):
    return PlanPoint(
        md=md,
        tvd=station.tvd,
        ns=station.ns,
        ew=station.ew,
        vs=vertical_section(station.ns, station.ew, vs_azimuth),
        inc=station.inc,
        azi=station.azi,
        dls=dls,
        br=br,
        tr=tr,
    )


def interpolate_plan(md, plan_stations, vs_azimuth=0.0):
    """Plan position, orientation and local rates at ``md``.

    ``plan_stations`` must be sorted by MD. Returns ``None`` for an empty plan.
    Plan rates come from the bracketing pair of stations (the segment arriving
    at an exactly matched station).
    """
    if not plan_stations:
        return None
    mds = np.array([s.md for s in plan_stations], dtype=float)
    lo_idx, hi_idx = _plan_bracket(mds, md)
    lo, hi = plan_stations[lo_idx], plan_stations[hi_idx]
    dls, br, tr = rates(lo.inc, lo.azi, hi.inc, hi.azi, hi.md - lo.md)

    if md <= mds[0] + MD_TOLERANCE:
        return _point_at(plan_stations[0], md, vs_azimuth, dls, br, tr)
    if md >= mds[-1] - MD_TOLERANCE:
        return _point_at(plan_stations[-1], md, vs_azimuth, dls, br, tr)
    if abs(md - hi.md) < MD_TOLERANCE:
        return _point_at(hi, md, vs_azimuth, dls, br, tr)
    if abs(md - lo.md) < MD_TOLERANCE or hi.md <= lo.md:
        return _point_at(lo, md, vs_azimuth, dls, br, tr)

    fraction = (md - lo.md) / (hi.md - lo.md)
    tvd = lo.tvd + fraction * (hi.tvd - lo.tvd)
    ns = lo.ns + fraction * (hi.ns - lo.ns)
    ew = lo.ew + fraction * (hi.ew - lo.ew)
    return PlanPoint(
        md=md,
        tvd=tvd,
        ns=ns,
        ew=ew,
        vs=vertical_section(ns, ew, vs_azimuth),
        inc=lo.inc + fraction * (hi.inc - lo.inc),
        azi=normalize_azimuth(lo.azi + fraction * azimuth_delta(lo.azi, hi.azi)),
        dls=dls,
        br=br,
        tr=tr,
    )


def required_rates(inc_variance, azi_variance, interval=REQUIRED_RATE_INTERVAL):
    """Build/turn rates (deg/30m) that cancel the given variances over ``interval``.

    Positive build means "build more"; the correction has the opposite sign
    of the variance.
    """
    if interval <= 0:
        return 0.0, 0.0
    scale = RATE_LENGTH / interval
    return -inc_variance * scale, -azi_variance * scale


class _Deviation:
    """Deviation arithmetic shared by survey variances and the bit projection."""

    @property
    def tvd_variance(self):
        return self.tvd - self.plan.tvd

    @property
    def vs_variance(self):
        return self.vs - self.plan.vs

    @property
    def closure_distance(self):
        return math.hypot(self.ns - self.plan.ns, self.ew - self.plan.ew)

    @property
    def distance_3d(self):
        return math.sqrt(
            (self.tvd - self.plan.tvd) ** 2
            + (self.ns - self.plan.ns) ** 2
            + (self.ew - self.plan.ew) ** 2
        )

    @property
    def inc_variance(self):
        return self.inc - self.plan.inc

    @property
    def azi_variance(self):
        return azimuth_delta(self.plan.azi, self.azi)


@dataclass(frozen=True)
class Variance(_Deviation):
    """Comparison of one survey station against the plan at the same MD."""
    md: float
    inc: float
    azi: float
    tvd: float
    ns: float
    ew: float
    vs: float
    dls: float
    br: float
    tr: float
    plan: PlanPoint
    required_br: float
    required_tr: float
    projection_distance: float = REQUIRED_RATE_INTERVAL
    survey_resolved: bool = True
    status: Status = Status.OK
    axis_statuses: Dict[str, Status] = field(default_factory=dict, hash=False)

    @property
    def br_variance(self):
        return self.br - self.plan.br

    @property
    def tr_variance(self):
        return self.tr - self.plan.tr

    @property
    def dls_variance(self):
        return self.dls - self.plan.dls

    def to_dict(self):
        row = {
            MD: self.md,
            INC: self.inc,
            AZI: self.azi,
            TVD: self.tvd,
            NS: self.ns,
            EW: self.ew,
            VS: self.vs,
            DLS: self.dls,
            BR: self.br,
            TR: self.tr,
            RESOLVED: self.survey_resolved,
            PLAN_TVD: self.plan.tvd,
            PLAN_NS: self.plan.ns,
            PLAN_EW: self.plan.ew,
            PLAN_VS: self.plan.vs,
            PLAN_INC: self.plan.inc,
            PLAN_AZI: self.plan.azi,
            PLAN_DLS: self.plan.dls,
            PLAN_BR: self.plan.br,
            PLAN_TR: self.plan.tr,
            TVD_VARIANCE: self.tvd_variance,
            VS_VARIANCE: self.vs_variance,
            CLOSURE_DISTANCE: self.closure_distance,
            DISTANCE_3D: self.distance_3d,
            INC_VARIANCE: self.inc_variance,
            AZI_VARIANCE: self.azi_variance,
            "br_variance": self.br_variance,
            "tr_variance": self.tr_variance,
            "dls_variance": self.dls_variance,
            REQUIRED_BR: self.required_br,
            REQUIRED_TR: self.required_tr,
            STATUS: self.status.name.lower(),
        }
        return row


@dataclass(frozen=True)
class VarianceSummary:
    station_count: int = 0
    alarm_count: int = 0
    warning_count: int = 0
    max_distance_3d: float = 0.0
    avg_distance_3d: float = 0.0
    max_dls: float = 0.0
    max_tvd_variance: float = 0.0
    max_closure_distance: float = 0.0

    @property
    def status(self):
        if self.alarm_count:
            return Status.ALARM
        if self.warning_count:
            return Status.WARNING
        return Status.OK


def calculate_variances(surveys, plan, limits=None, project_vs_azimuth=None):
    """One ``Variance`` per survey station, in MD order.

    An empty survey list, a missing plan or a plan without stations gives an
    empty list. Unresolved survey positions are compared as 0.0 and flagged
    through ``survey_resolved``.
    """
    if plan is None:
        return []
    plan_stations = plan.sorted_stations
    ordered = sorted(surveys, key=lambda s: s.md)
    if not plan_stations or not ordered:
        return []

    limits = limits or Limits()
    vs_azimuth = resolve_vs_azimuth(plan.vs_azimuth, project_vs_azimuth)
    warn_non_monotonic([s.md for s in ordered], label="survey")
    warn_non_monotonic([s.md for s in plan_stations], label="plan")

    results = []
    prev = None
    for survey in ordered:
        tvd, ns, ew = position_of(survey)
        if prev is None:
            dls, br, tr = 0.0, 0.0, 0.0
        else:
            dls, br, tr = rates(prev.inc, prev.azi, survey.inc, survey.azi, survey.md - prev.md)
        prev = survey

        plan_point = interpolate_plan(survey.md, plan_stations, vs_azimuth)
        inc_variance = survey.inc - plan_point.inc
        azi_variance = azimuth_delta(plan_point.azi, survey.azi)
        required_br, required_tr = required_rates(inc_variance, azi_variance)

        draft = Variance(
            md=survey.md,
            inc=survey.inc,
            azi=survey.azi,
            tvd=tvd,
            ns=ns,
            ew=ew,
            vs=vertical_section(ns, ew, vs_azimuth),
            dls=dls,
            br=br,
            tr=tr,
            plan=plan_point,
            required_br=required_br,
            required_tr=required_tr,
            survey_resolved=getattr(survey, "is_resolved", True),
        )
        statuses = classify_axes(limits, draft.dls, draft.distance_3d, draft.tvd_variance, draft.closure_distance)
        results.append(replace(draft, status=worst(statuses.values()), axis_statuses=statuses))
    logger.debug("Calculated %d variances against plan '%s'", len(results), plan.name)
    return results


def summarize(variances):
    if not variances:
        return VarianceSummary()
    distance_3d = np.array([v.distance_3d for v in variances], dtype=float)
    dls = np.array([v.dls for v in variances], dtype=float)
    tvd = np.abs(np.array([v.tvd_variance for v in variances], dtype=float))
    closure = np.array([v.closure_distance for v in variances], dtype=float)
    return VarianceSummary(
        station_count=len(variances),
        alarm_count=sum(1 for v in variances if v.status == Status.ALARM),
        warning_count=sum(1 for v in variances if v.status == Status.WARNING),
        max_distance_3d=float(distance_3d.max()),
        avg_distance_3d=float(distance_3d.mean()),
        max_dls=float(dls.max()),
        max_tvd_variance=float(tvd.max()),
        max_closure_distance=float(closure.max()),
    )


def _offset(tvd, threshold, sign=1.0):
    return None if threshold is None else tvd + sign * threshold


def boundary_corridors(plan, limits=None):
    """Warning and alarm TVD corridors around each plan station.

    Columns of an unset threshold hold ``None``.
    """
    limits = limits or Limits()
    columns = [MD, TVD, "warning_upper", "warning_lower", "alarm_upper", "alarm_lower"]
    if plan is None or not plan.stations:
        return pd.DataFrame(columns=columns)
    rows = []
    for station in plan.sorted_stations:
        tvd = known_or_zero(station.tvd)
        rows.append({
            MD: station.md,
            TVD: tvd,
            "warning_upper": _offset(tvd, limits.warning_distance_3d),
            "warning_lower": _offset(tvd, limits.warning_distance_3d, -1.0),
            "alarm_upper": _offset(tvd, limits.max_distance_3d),
            "alarm_lower": _offset(tvd, limits.max_distance_3d, -1.0),
        })
    return pd.DataFrame(rows, columns=columns)
