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

"""Container objects for a well's directional work.

``DirectionalDataset`` keeps surveys, plans, the scenario chain and project
settings together. Nothing is recalculated implicitly: any change clears the
last result, and ``recompute()`` rebuilds variances, summary and bit
projection from scratch.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional, Tuple

import pandas as pd

from . import data
from .bit import BitProjection, BitProjectionConfig, project_bit
from .geometry import desurvey, resolve_vs_azimuth, vertical_section
from .limits import Limits, Status
from .projection import ScenarioChain
from .variance import VarianceSummary, calculate_variances, summarize

logger = logging.getLogger(__name__)


class ProjectConfig:
    def __init__(self, project_id=None, vs_azimuth=None, limits=None, bit=None, metadata=None):
        self.project_id = project_id
        self.vs_azimuth = vs_azimuth
        self.limits = limits or Limits()
        self.bit = bit or BitProjectionConfig()
        self.metadata = metadata or {}

    def update(self, **kwargs):
        for key, val in kwargs.items():
            setattr(self, key, val)
        return self

    def to_dict(self):
        return {
            "project_id": self.project_id,
            "vs_azimuth": self.vs_azimuth,
            "limits": self.limits.to_dict(),
            "bit": self.bit.to_dict(),
            "metadata": self.metadata,
        }


@dataclass(frozen=True)
class DirectionalResult:
    variances: Tuple = ()
    summary: VarianceSummary = VarianceSummary()
    bit_projection: Optional[BitProjection] = None
    scenarios: Tuple = ()
    vs_azimuth: float = 0.0

    @property
    def status(self):
        """Worst of the survey summary and the bit projection."""
        statuses = [self.summary.status]
        if self.bit_projection is not None:
            statuses.append(self.bit_projection.status)
        return max(statuses)

    def variance_frame(self):
        return data.variances_to_frame(self.variances)

    def scenario_frame(self):
        return data.scenarios_to_frame(self.scenarios)


def recompute(surveys, plan, limits=None, config=None, scenarios=None, project_vs_azimuth=None):
    """Derive every result from the given inputs.

    ``scenarios`` may be a ``ScenarioChain`` or any sequence of scenario
    stations already projected from the deepest survey. Their VS is re-derived
    with the effective VS azimuth.
    """
    limits = limits or Limits()
    vs_azimuth = resolve_vs_azimuth(plan.vs_azimuth if plan is not None else None, project_vs_azimuth)
    scenario_stations = tuple(
        replace(s, vs=vertical_section(s.ns, s.ew, vs_azimuth)) for s in (scenarios or ())
    )
    variances = calculate_variances(surveys, plan, limits=limits, project_vs_azimuth=project_vs_azimuth)
    bit_projection = project_bit(
        surveys, plan,
        scenarios=scenario_stations,
        config=config,
        limits=limits,
        project_vs_azimuth=project_vs_azimuth,
    )
    return DirectionalResult(
        variances=tuple(variances),
        summary=summarize(variances),
        bit_projection=bit_projection,
        scenarios=scenario_stations,
        vs_azimuth=vs_azimuth,
    )


class DirectionalDataset:
    def __init__(self, project=None, surveys=None, plans=None, selected_plan=None, metadata=None):
        self.project = project or ProjectConfig()
        self.surveys = self._as_surveys(surveys)
        self.plans = list(plans or [])
        self.selected_plan = selected_plan if selected_plan is not None else (self.plans[0] if self.plans else None)
        self.scenarios = ScenarioChain(base=self.last_survey, vs_azimuth=self.effective_vs_azimuth)
        self.metadata = metadata or {}
        self.result = None

    @staticmethod
    def _as_surveys(surveys):
        if surveys is None:
            return []
        if isinstance(surveys, pd.DataFrame):
            return data.load_surveys(surveys)
        return sorted(surveys, key=lambda s: s.md)

    @property
    def last_survey(self):
        return self.surveys[-1] if self.surveys else None

    @property
    def effective_vs_azimuth(self):
        plan_override = self.selected_plan.vs_azimuth if self.selected_plan is not None else None
        return resolve_vs_azimuth(plan_override, self.project.vs_azimuth)

    def _invalidate(self):
        self.result = None
        return self

    def _rebase_scenarios(self):
        self.scenarios.rebase(self.last_survey, vs_azimuth=self.effective_vs_azimuth)

    def set_surveys(self, surveys):
        self.surveys = self._as_surveys(surveys)
        self._rebase_scenarios()
        return self._invalidate()

    def resolve_surveys(self, tie_in=(0.0, 0.0, 0.0), kb_elevation=None):
        """Replace the survey list with desurveyed copies."""
        self.surveys = desurvey(self.surveys, vs_azimuth=self.effective_vs_azimuth,
                                tie_in=tie_in, kb_elevation=kb_elevation)
        self._rebase_scenarios()
        return self._invalidate()

    def add_plan(self, plan, select=True):
        self.plans.append(plan)
        if select or self.selected_plan is None:
            return self.select_plan(plan)
        return self._invalidate()

    def select_plan(self, plan):
        self.selected_plan = plan
        self._rebase_scenarios()
        return self._invalidate()

    def remove_plan(self, plan):
        self.plans = [p for p in self.plans if p is not plan]
        if self.selected_plan is plan:
            self.selected_plan = self.plans[0] if self.plans else None
            self._rebase_scenarios()
        return self._invalidate()

    def set_vs_azimuth(self, vs_azimuth):
        """Set the project default VS azimuth; a plan override still wins."""
        self.project.vs_azimuth = vs_azimuth
        self._rebase_scenarios()
        return self._invalidate()

    def set_limits(self, **kwargs):
        self.project.limits.update(**kwargs)
        return self._invalidate()

    def configure_bit(self, **kwargs):
        self.project.bit.update(**kwargs)
        return self._invalidate()

    def add_scenario(self, distance, inc, azi):
        self.scenarios.append(distance, inc, azi)
        return self._invalidate()

    def update_scenario(self, index, distance, inc, azi):
        self.scenarios.update(index, distance, inc, azi)
        return self._invalidate()

    def delete_scenario(self, index):
        self.scenarios.delete(index)
        return self._invalidate()

    def clear_scenarios(self):
        self.scenarios.clear()
        return self._invalidate()

    def recompute(self):
        self._rebase_scenarios()
        self.result = recompute(
            self.surveys,
            self.selected_plan,
            limits=self.project.limits,
            config=self.project.bit,
            scenarios=self.scenarios.stations,
            project_vs_azimuth=self.project.vs_azimuth,
        )
        logger.debug(
            "Recomputed %d variances, bit projection %s",
            len(self.result.variances),
            "available" if self.result.bit_projection is not None else "unavailable",
        )
        return self.result

    def overall_status(self):
        if self.result is None:
            return Status.OK
        return self.result.status

    def copy(self):
        dataset = DirectionalDataset(
            project=ProjectConfig(
                project_id=self.project.project_id,
                vs_azimuth=self.project.vs_azimuth,
                limits=Limits(**self.project.limits.to_dict()),
                bit=BitProjectionConfig(**self.project.bit.to_dict()),
                metadata=dict(self.project.metadata),
            ),
            surveys=list(self.surveys),
            plans=list(self.plans),
            selected_plan=self.selected_plan,
            metadata=dict(self.metadata),
        )
        dataset.scenarios = self.scenarios.copy()
        return dataset

    def to_dict(self):
        return {
            "project": self.project.to_dict(),
            "surveys": data.stations_to_frame(self.surveys),
            "plans": [p.to_dict() for p in self.plans],
            "selected_plan": self.selected_plan.name if self.selected_plan is not None else None,
            "scenarios": data.scenarios_to_frame(self.scenarios.stations),
            "metadata": self.metadata,
        }
