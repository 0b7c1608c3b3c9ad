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

"""QA/QC helpers for station sequences.

Nothing here rejects data: out-of-range values pass through the engine
unchanged, and these checks only report or log them.
"""

import logging

logger = logging.getLogger(__name__)


def non_increasing_indices(mds):
    return [i for i in range(1, len(mds)) if mds[i] <= mds[i - 1]]


def warn_non_monotonic(mds, label="station"):
    """Log a warning when an MD sequence is not strictly increasing."""
    bad = non_increasing_indices(list(mds))
    if bad:
        logger.warning("%s MD sequence is not strictly increasing at index %s", label.capitalize(), bad)
        return False
    return True


def validate_stations(stations, label="station"):
    """Return a list of issue dicts for a station sequence in the given order.

    Issue types: ``non_increasing_md``, ``inc_out_of_range`` (outside
    [0, 180]), ``azimuth_out_of_range`` (outside [0, 360)) and
    ``unresolved_position``.
    """
    issues = []
    prev_md = None
    for idx, station in enumerate(stations):
        if prev_md is not None and station.md <= prev_md:
            issues.append({"label": label, "index": idx, "type": "non_increasing_md", "value": station.md})
        prev_md = station.md

        if station.inc < 0 or station.inc > 180:
            issues.append({"label": label, "index": idx, "type": "inc_out_of_range", "value": station.inc})
        if station.azi < 0 or station.azi >= 360:
            issues.append({"label": label, "index": idx, "type": "azimuth_out_of_range", "value": station.azi})
        if not getattr(station, "is_resolved", True):
            issues.append({"label": label, "index": idx, "type": "unresolved_position", "value": station.md})
    return issues


def report_missing_columns(df, required):
    return [col for col in required if col not in df.columns]
