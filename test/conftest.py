# SPDX-License-Identifier: GPL-3.0-or-later

# Copyright (C) 2026 Darkmine Pty Ltd

from pathlib import Path
import sys

import pytest


ROOT = Path(__file__).resolve().parents[1]
PYTHON_SRC_PATH = ROOT / "python" / "src"

if str(PYTHON_SRC_PATH) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC_PATH))


from wellsteer.directional.data import Plan, PlanStation, SurveyStation  # noqa: E402


@pytest.fixture
def build_plan():
    """Vertical start building to 20 deg inc towards east."""
    return Plan(
        name="Plan A",
        revision="1",
        vs_azimuth=90.0,
        stations=[
            PlanStation(md=0.0, inc=0.0, azi=0.0, tvd=0.0, ns=0.0, ew=0.0),
            PlanStation(md=100.0, inc=10.0, azi=90.0, tvd=99.0, ns=0.0, ew=8.0),
            PlanStation(md=200.0, inc=20.0, azi=90.0, tvd=195.0, ns=0.0, ew=30.0),
        ],
    )


@pytest.fixture
def raw_surveys():
    return [
        SurveyStation(md=0.0, inc=0.0, azi=90.0),
        SurveyStation(md=100.0, inc=10.0, azi=90.0),
    ]
