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

"""Station records, table loaders and frame exporters for directional data.

Station tables may arrive as pandas DataFrames, lists of dicts or lists of
station records. Loaders apply column standardization towards the wellsteer
data model so the engine can expect consistent keys, and exporters turn
engine results back into DataFrames for display.
"""

from dataclasses import dataclass, field, fields
from typing import Optional, Tuple

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
    SUBSEA,
)

from .validate import report_missing_columns


@dataclass(frozen=True)
class SurveyStation:
    """An actual directional survey measurement.

    Position fields are ``None`` until resolved (e.g. by ``desurvey``).
    """
    md: float
    inc: float
    azi: float
    tvd: Optional[float] = None
    ns: Optional[float] = None
    ew: Optional[float] = None
    vs: Optional[float] = None
    dls: Optional[float] = None
    br: Optional[float] = None
    tr: Optional[float] = None
    subsea: Optional[float] = None

    @property
    def is_resolved(self):
        return self.tvd is not None and self.ns is not None and self.ew is not None


@dataclass(frozen=True)
class PlanStation:
    md: float
    inc: float
    azi: float
    tvd: float = 0.0
    ns: float = 0.0
    ew: float = 0.0
    vs: Optional[float] = None

    @property
    def is_resolved(self):
        return True


@dataclass
class Plan:
    """A named, versioned directional plan owning stations keyed by MD."""
    name: str = ""
    revision: str = ""
    stations: Tuple[PlanStation, ...] = field(default_factory=tuple)
    vs_azimuth: Optional[float] = None
    notes: str = ""

    def __post_init__(self):
        self.stations = tuple(self.stations)

    @property
    def sorted_stations(self):
        return sorted(self.stations, key=lambda s: s.md)

    @property
    def min_md(self):
        stations = self.sorted_stations
        return stations[0].md if stations else 0.0

    @property
    def max_md(self):
        stations = self.sorted_stations
        return stations[-1].md if stations else 0.0

    def to_dict(self):
        return {
            "name": self.name,
            "revision": self.revision,
            "vs_azimuth": self.vs_azimuth,
            "notes": self.notes,
            "stations": [station_to_dict(s) for s in self.sorted_stations],
        }


def known_or_zero(value):
    """Arithmetic view of an optional geometry field: unresolved reads as 0.0."""
    return 0.0 if value is None else float(value)


def station_to_dict(station):
    return {f.name: getattr(station, f.name) for f in fields(station)}


# Best-guess mapping of common source column names to the wellsteer data model.
# Keys from the input source are normalized to lowercase and stripped of whitespace before lookup.
DEFAULT_COLUMN_MAP = {
    MD: ["md", "measured_depth", "measured depth", "depth", "md_m", "mdepth"],
    INC: ["inc", "incl", "inclination", "inc_deg", "inclination_deg"],
    AZI: ["azi", "az", "azm", "azimuth", "azi_deg", "azimuth_deg"],
    TVD: ["tvd", "true_vertical_depth", "tvd_m"],
    NS: ["ns", "ns_m", "n/s", "northing", "north", "n"],
    EW: ["ew", "ew_m", "e/w", "easting", "east", "e"],
    VS: ["vs", "vs_m", "vertical_section", "vertical section", "vsec"],
    DLS: ["dls", "dls_deg_per30m", "dogleg", "dogleg_severity"],
    BR: ["br", "build_rate", "buildrate"],
    TR: ["tr", "turn_rate", "turnrate"],
    SUBSEA: ["subsea", "subsea_m", "tvdss"],
}

_COLUMN_LOOKUP = {}
for standard_col, variations in DEFAULT_COLUMN_MAP.items():
    for variation in variations:
        _COLUMN_LOOKUP[variation.lower().strip()] = standard_col

REQUIRED_COLUMNS = [MD, INC, AZI]


def _frame(df):
    if df is None:
        return pd.DataFrame()
    if isinstance(df, pd.DataFrame):
        return df.copy()
    rows = list(df)
    if rows and hasattr(rows[0], "__dataclass_fields__"):
        rows = [station_to_dict(r) for r in rows]
    return pd.DataFrame(rows)


def standardize_columns(df, column_map=None):
    """Rename source columns to wellsteer names.

    ``column_map`` maps source column names directly to wellsteer names and
    takes precedence over the default aliases.
    """
    lookup = dict(_COLUMN_LOOKUP)
    if column_map:
        for source, target in column_map.items():
            lookup[str(source).lower().strip()] = target

    renamed = {}
    taken = set()
    for col in df.columns:
        target = lookup.get(str(col).lower().strip())
        if target is None or target in taken:
            continue
        renamed[col] = target
        taken.add(target)
    return df.rename(columns=renamed)


def _station_table(df, column_map, label):
    out = standardize_columns(_frame(df), column_map=column_map)
    if out.empty:
        return out
    missing = report_missing_columns(out, REQUIRED_COLUMNS)
    if missing:
        raise ValueError(f"{label} table is missing column(s): {', '.join(missing)}")
    for col in [c for c in DEFAULT_COLUMN_MAP if c in out.columns]:
        out[col] = pd.to_numeric(out[col], errors="coerce")
    out = out[out[MD].notna()]
    return out.sort_values(MD, kind="mergesort").reset_index(drop=True)


def _optional(row, col):
    if col not in row or pd.isna(row[col]):
        return None
    return float(row[col])


def load_surveys(df, column_map=None):
    """Standardize a survey table into ``SurveyStation`` records sorted by MD."""
    table = _station_table(df, column_map, "Survey")
    stations = []
    for _, row in table.iterrows():
        stations.append(SurveyStation(
            md=float(row[MD]),
            inc=float(row[INC]),
            azi=float(row[AZI]),
            tvd=_optional(row, TVD),
            ns=_optional(row, NS),
            ew=_optional(row, EW),
            vs=_optional(row, VS),
            dls=_optional(row, DLS),
            br=_optional(row, BR),
            tr=_optional(row, TR),
            subsea=_optional(row, SUBSEA),
        ))
    return stations


def load_plan(df, name="", revision="", vs_azimuth=None, notes="", column_map=None):
    """Build a ``Plan`` from a station table.

    Plan positions are required for comparison; missing TVD/NS/EW values are
    read as 0.0.
    """
    table = _station_table(df, column_map, "Plan")
    stations = []
    for _, row in table.iterrows():
        stations.append(PlanStation(
            md=float(row[MD]),
            inc=float(row[INC]),
            azi=float(row[AZI]),
            tvd=known_or_zero(_optional(row, TVD)),
            ns=known_or_zero(_optional(row, NS)),
            ew=known_or_zero(_optional(row, EW)),
            vs=_optional(row, VS),
        ))
    return Plan(name=name, revision=revision, stations=stations, vs_azimuth=vs_azimuth, notes=notes)


def stations_to_frame(stations):
    if not stations:
        return pd.DataFrame(columns=[MD, INC, AZI, TVD, NS, EW, VS])
    return pd.DataFrame([station_to_dict(s) for s in stations])


def variances_to_frame(variances):
    """One row per variance record, including the derived deviation columns."""
    rows = [v.to_dict() for v in variances]
    return pd.DataFrame(rows)


def scenarios_to_frame(scenarios):
    if not scenarios:
        return pd.DataFrame(columns=[MD, INC, AZI, TVD, NS, EW, VS, DLS, "distance"])
    return pd.DataFrame([station_to_dict(s) for s in scenarios])
