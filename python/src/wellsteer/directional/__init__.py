# Copyright (C) 2026 Darkmine Pty Ltd
# SPDX-License-Identifier: GPL-3.0-or-later

from . import bit, data, geometry, limits, model, projection, validate, variance

__all__ = [
	"bit",
	"data",
	"geometry",
	"limits",
	"model",
	"projection",
	"validate",
	"variance",
]
