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

"""Alarm thresholds and three-level status classification."""

import math
from enum import IntEnum


class Status(IntEnum):
    """Ordered severity: ``max()`` over statuses gives the worst one."""
    OK = 0
    WARNING = 1
    ALARM = 2

    @property
    def label(self):
        return {Status.OK: "OK", Status.WARNING: "Warning", Status.ALARM: "Alarm"}[self]


AXES = ("dls", "distance_3d", "tvd", "closure")


class Limits:
    """Directional thresholds.

    DLS limits are in deg/30m, distances in metres. The TVD and closure axes
    are optional: while both of an axis' thresholds are ``None`` that axis is
    judged by the 3D distance thresholds instead.
    """

    def __init__(
        self,
        warning_dls=4.5,
        max_dls=6.0,
        warning_distance_3d=5.0,
        max_distance_3d=10.0,
        warning_tvd_variance=None,
        max_tvd_variance=None,
        warning_closure_distance=None,
        max_closure_distance=None,
    ):
        self.warning_dls = warning_dls
        self.max_dls = max_dls
        self.warning_distance_3d = warning_distance_3d
        self.max_distance_3d = max_distance_3d
        self.warning_tvd_variance = warning_tvd_variance
        self.max_tvd_variance = max_tvd_variance
        self.warning_closure_distance = warning_closure_distance
        self.max_closure_distance = max_closure_distance

    @property
    def has_tvd_limits(self):
        return self.warning_tvd_variance is not None or self.max_tvd_variance is not None

    @property
    def has_closure_limits(self):
        return self.warning_closure_distance is not None or self.max_closure_distance is not None

    def update(self, **kwargs):
        for key, val in kwargs.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown limit '{key}'")
            setattr(self, key, val)
        return self

    def to_dict(self):
        return {
            "warning_dls": self.warning_dls,
            "max_dls": self.max_dls,
            "warning_distance_3d": self.warning_distance_3d,
            "max_distance_3d": self.max_distance_3d,
            "warning_tvd_variance": self.warning_tvd_variance,
            "max_tvd_variance": self.max_tvd_variance,
            "warning_closure_distance": self.warning_closure_distance,
            "max_closure_distance": self.max_closure_distance,
        }

    def __repr__(self):
        args = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"Limits({args})"


def classify(value, warning_threshold, alarm_threshold):
    """``value >= alarm`` is an alarm, else ``value >= warning`` is a warning.

    A ``None`` threshold never triggers.
    """
    alarm = math.inf if alarm_threshold is None else alarm_threshold
    warning = math.inf if warning_threshold is None else warning_threshold
    if value >= alarm:
        return Status.ALARM
    if value >= warning:
        return Status.WARNING
    return Status.OK


def worst(statuses):
    return max(statuses, default=Status.OK)


def axis_statuses(limits, dls, distance_3d, tvd_variance, closure_distance):
    """Per-axis statuses for one station or bit position, keyed by ``AXES``."""
    distance_status = classify(distance_3d, limits.warning_distance_3d, limits.max_distance_3d)
    if limits.has_tvd_limits:
        tvd_status = classify(abs(tvd_variance), limits.warning_tvd_variance, limits.max_tvd_variance)
    else:
        tvd_status = distance_status
    if limits.has_closure_limits:
        closure_status = classify(closure_distance, limits.warning_closure_distance, limits.max_closure_distance)
    else:
        closure_status = distance_status
    return {
        "dls": classify(dls, limits.warning_dls, limits.max_dls),
        "distance_3d": distance_status,
        "tvd": tvd_status,
        "closure": closure_status,
    }


def overall_status(limits, dls, distance_3d, tvd_variance, closure_distance):
    return worst(axis_statuses(limits, dls, distance_3d, tvd_variance, closure_distance).values())
