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

"""Forward projection of stations and what-if scenario chains.

``project_station`` advances any station-like object (real survey, plan
station or earlier scenario) by a course length to a new orientation.
``ScenarioChain`` keeps an ordered, append-only list of such projections in
which every station depends on its immediate predecessor.
"""

import logging
from dataclasses import dataclass
from typing import NamedTuple

from .geometry import advance, position_of, vertical_section

logger = logging.getLogger(__name__)

DEFAULT_SCENARIO_DISTANCE = 30.0


@dataclass(frozen=True)
class ScenarioStation:
    """A projected, non-persisted station.

    ``dls`` is relative to the immediate predecessor and ``distance`` is the
    course length the station was projected by.
    """
    md: float
    inc: float
    azi: float
    tvd: float
    ns: float
    ew: float
    vs: float
    dls: float
    distance: float

    @property
    def is_resolved(self):
        return True


class ScenarioLeg(NamedTuple):
    distance: float
    inc: float
    azi: float


def project_station(predecessor, distance, inc, azi, vs_azimuth=0.0):
    """Project ``predecessor`` by ``distance`` to orientation (``inc``, ``azi``).

    The predecessor only needs ``md``, ``inc`` and ``azi``; ``tvd``, ``ns``
    and ``ew`` read as 0.0 when missing or unresolved.
    """
    if distance <= 0:
        logger.warning("Projecting from MD %.2f by non-positive distance %.3f", predecessor.md, distance)
    tvd, ns, ew = position_of(predecessor)
    segment = advance(predecessor.inc, predecessor.azi, inc, azi, distance)
    tvd += segment.tvd_delta
    ns += segment.ns_delta
    ew += segment.ew_delta
    return ScenarioStation(
        md=predecessor.md + distance,
        inc=inc,
        azi=azi,
        tvd=tvd,
        ns=ns,
        ew=ew,
        vs=vertical_section(ns, ew, vs_azimuth),
        dls=segment.dls,
        distance=distance,
    )


class ScenarioChain:
    """Ordered what-if stations projected from a base station.

    The chain records each station's leg (distance, inc, azi) and re-derives
    positions from the base forward. ``truncate_and_extend`` is the only
    mutator; the other editing methods are thin wrappers around it.
    """

    def __init__(self, base=None, vs_azimuth=0.0, legs=None):
        self.base = base
        self.vs_azimuth = vs_azimuth
        self._legs = []
        self._stations = []
        if legs:
            self.truncate_and_extend(0, legs)

    def __len__(self):
        return len(self._stations)

    def __iter__(self):
        return iter(self._stations)

    def __getitem__(self, index):
        return self._stations[index]

    @property
    def legs(self):
        return tuple(self._legs)

    @property
    def stations(self):
        return tuple(self._stations)

    @property
    def last(self):
        return self._stations[-1] if self._stations else None

    def truncate_and_extend(self, index, legs=()):
        """Drop entries from ``index`` onward, then project ``legs`` after them in order."""
        if not self._in_range(index, len(self._stations)):
            return self
        legs = [ScenarioLeg(*leg) for leg in legs]
        if legs and self.base is None:
            logger.warning("No base station to project scenarios from; edit skipped")
            return self

        del self._legs[index:]
        del self._stations[index:]
        for leg in legs:
            predecessor = self._stations[-1] if self._stations else self.base
            self._stations.append(project_station(predecessor, leg.distance, leg.inc, leg.azi, self.vs_azimuth))
            self._legs.append(leg)
        return self

    def append(self, distance, inc, azi):
        return self.truncate_and_extend(len(self._stations), [(distance, inc, azi)])

    def update(self, index, distance, inc, azi):
        """Replace the leg at ``index`` and re-derive every station after it."""
        if not self._in_range(index, len(self._stations) - 1):
            return self
        following = self._legs[index + 1:]
        return self.truncate_and_extend(index, [(distance, inc, azi)] + following)

    def delete(self, index):
        """Remove the entry at ``index`` and everything after it."""
        if not self._in_range(index, len(self._stations) - 1):
            return self
        return self.truncate_and_extend(index)

    def clear(self):
        return self.truncate_and_extend(0)

    def rebase(self, base, vs_azimuth=None):
        """Re-derive the whole chain from a new base station or VS azimuth."""
        legs = list(self._legs)
        self.base = base
        if vs_azimuth is not None:
            self.vs_azimuth = vs_azimuth
        if base is None:
            if legs:
                logger.warning("Scenario chain base removed; dropping %d scenario stations", len(legs))
            return self.truncate_and_extend(0)
        return self.truncate_and_extend(0, legs)

    def defaults_for_new(self):
        """Hold-angle defaults ``(distance, inc, azi)`` for the next leg."""
        last = self.last or self.base
        if last is None:
            return DEFAULT_SCENARIO_DISTANCE, 0.0, 0.0
        return DEFAULT_SCENARIO_DISTANCE, last.inc, last.azi

    def copy(self):
        return ScenarioChain(base=self.base, vs_azimuth=self.vs_azimuth, legs=self._legs)

    def _in_range(self, index, highest):
        if 0 <= index <= highest:
            return True
        logger.warning("Scenario index %s out of range for chain of %d; edit skipped", index, len(self._stations))
        return False
