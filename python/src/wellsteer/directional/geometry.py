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

"""Minimum-curvature geometry and vertical-section projection.

The kernel works on scalar stations rather than tables: ``advance`` is a
pure function of two orientations and a course length, and everything
position-related in the package (survey desurvey, scenario chaining, bit
projection) is built by chaining it. Dependencies are limited to ``math``
for the trigonometry, matching the desurvey routines it grew out of.
"""

import logging
import math
from dataclasses import replace
from typing import NamedTuple

from .data import known_or_zero
from .validate import warn_non_monotonic

logger = logging.getLogger(__name__)

# Below this dogleg (radians) the ratio factor is taken as its limit, 1.0.
RF_THRESHOLD = 1e-4
# Normalizing length for dogleg severity, build and turn rates (deg/30m).
RATE_LENGTH = 30.0


class Segment(NamedTuple):
    tvd_delta: float
    ns_delta: float
    ew_delta: float
    dogleg: float  # radians
    dls: float  # deg/30m


def _deg_to_rad(angle):
    return math.radians(angle)


def normalize_azimuth(azi):
    """Wrap an azimuth into [0, 360)."""
    return azi % 360.0


def azimuth_delta(azi_from, azi_to):
    """Signed shortest angular difference ``azi_to - azi_from`` in [-180, 180]."""
    delta = (azi_to - azi_from) % 360.0
    if delta > 180.0:
        delta -= 360.0
    return delta


def ratio_factor(dogleg):
    if dogleg < RF_THRESHOLD:
        return 1.0
    return (2.0 / dogleg) * math.tan(dogleg / 2.0)


def dogleg_angle(inc1, azi1, inc2, azi2):
    """Total angle change in radians between two orientations given in degrees."""
    i1, a1 = _deg_to_rad(inc1), _deg_to_rad(azi1)
    i2, a2 = _deg_to_rad(inc2), _deg_to_rad(azi2)
    cos_dl = math.cos(i1) * math.cos(i2) + math.sin(i1) * math.sin(i2) * math.cos(a2 - a1)
    return math.acos(max(-1.0, min(1.0, cos_dl)))


def advance(inc1, azi1, inc2, azi2, distance):
    """Position change along a constant-curvature arc.

    Angles are in degrees and ``distance`` is the course length. A zero or
    negative distance yields zero deltas and zero severity; the dogleg angle
    itself is still reported.
    """
    dogleg = dogleg_angle(inc1, azi1, inc2, azi2)
    if distance <= 0:
        return Segment(0.0, 0.0, 0.0, dogleg, 0.0)

    i1, a1 = _deg_to_rad(inc1), _deg_to_rad(azi1)
    i2, a2 = _deg_to_rad(inc2), _deg_to_rad(azi2)
    rf = ratio_factor(dogleg)
    half = 0.5 * distance
    tvd_delta = half * (math.cos(i1) + math.cos(i2)) * rf
    ns_delta = half * (math.sin(i1) * math.cos(a1) + math.sin(i2) * math.cos(a2)) * rf
    ew_delta = half * (math.sin(i1) * math.sin(a1) + math.sin(i2) * math.sin(a2)) * rf
    dls = math.degrees(dogleg) * RATE_LENGTH / distance
    return Segment(tvd_delta, ns_delta, ew_delta, dogleg, dls)


def minimum_curvature(md1, inc1, azi1, md2, inc2, azi2):
    return advance(inc1, azi1, inc2, azi2, md2 - md1)


def rates(inc1, azi1, inc2, azi2, interval):
    """Return ``(dls, br, tr)`` in deg/30m over ``interval``; zeros when it is not positive."""
    if interval <= 0:
        return 0.0, 0.0, 0.0
    br = (inc2 - inc1) / interval * RATE_LENGTH
    tr = azimuth_delta(azi1, azi2) / interval * RATE_LENGTH
    dls = advance(inc1, azi1, inc2, azi2, interval).dls
    return dls, br, tr


def vertical_section(ns, ew, vs_azimuth):
    theta = _deg_to_rad(vs_azimuth)
    return ns * math.cos(theta) + ew * math.sin(theta)


def resolve_vs_azimuth(plan_override=None, project_default=None):
    """Plan-level override, then project default, then 0."""
    if plan_override is not None:
        return float(plan_override)
    if project_default is not None:
        return float(project_default)
    return 0.0


def departure(ns, ew):
    return math.hypot(ns, ew)


def closure_direction(ns, ew):
    if ns == 0 and ew == 0:
        return 0.0
    return normalize_azimuth(math.degrees(math.atan2(ew, ns)))


def desurvey(surveys, vs_azimuth=0.0, tie_in=(0.0, 0.0, 0.0), kb_elevation=None):
    """Resolve positions for a survey list with the minimum curvature method.

    ``tie_in`` is ``(tvd, ns, ew)`` for the first station. Returns new
    ``SurveyStation`` records sorted by MD with tvd/ns/ew/vs/dls/br/tr set,
    plus subsea when a KB elevation is given; inputs are left untouched.
    """
    ordered = sorted(surveys, key=lambda s: s.md)
    if not ordered:
        return []
    warn_non_monotonic([s.md for s in ordered], label="survey")

    tvd, ns, ew = (float(v) for v in tie_in)
    resolved = []
    prev = None
    for station in ordered:
        if prev is None:
            dls = br = tr = 0.0
        else:
            interval = station.md - prev.md
            segment = advance(prev.inc, prev.azi, station.inc, station.azi, interval)
            tvd += segment.tvd_delta
            ns += segment.ns_delta
            ew += segment.ew_delta
            dls, br, tr = rates(prev.inc, prev.azi, station.inc, station.azi, interval)
        resolved.append(replace(
            station,
            tvd=tvd,
            ns=ns,
            ew=ew,
            vs=vertical_section(ns, ew, vs_azimuth),
            dls=dls,
            br=br,
            tr=tr,
            subsea=None if kb_elevation is None else kb_elevation - tvd,
        ))
        prev = station
    logger.debug("Desurveyed %d stations", len(resolved))
    return resolved


def position_of(station):
    """``(tvd, ns, ew)`` of any station-like object, unresolved fields read as 0.0."""
    return (
        known_or_zero(getattr(station, "tvd", None)),
        known_or_zero(getattr(station, "ns", None)),
        known_or_zero(getattr(station, "ew", None)),
    )
