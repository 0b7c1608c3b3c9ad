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

"""
Wellsteer Open Data Model

Provides a consistent vocabulary of column names for station tables and
derived results throughout the library.

Table loaders apply a common column mapping, but also accept user-provided column maps to handle variations in source data.
"""

MD = "md"
INC = "inc"
AZI = "azi"
TVD = "tvd"
NS = "ns"
EW = "ew"
VS = "vs"
DLS = "dls"
BR = "br"
TR = "tr"
SUBSEA = "subsea"

PLAN_TVD = "plan_tvd"
PLAN_NS = "plan_ns"
PLAN_EW = "plan_ew"
PLAN_VS = "plan_vs"
PLAN_INC = "plan_inc"
PLAN_AZI = "plan_azi"
PLAN_DLS = "plan_dls"
PLAN_BR = "plan_br"
PLAN_TR = "plan_tr"

TVD_VARIANCE = "tvd_variance"
VS_VARIANCE = "vs_variance"
CLOSURE_DISTANCE = "closure_distance"
DISTANCE_3D = "distance_3d"
INC_VARIANCE = "inc_variance"
AZI_VARIANCE = "azi_variance"
REQUIRED_BR = "required_br"
REQUIRED_TR = "required_tr"
STATUS = "status"
RESOLVED = "resolved"
