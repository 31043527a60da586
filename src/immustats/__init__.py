# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Snapshot statistics for immudb nodes built from Prometheus scrapes."""

from immustats.common.exceptions import (
    ImmuStatsError,
    MetricsParseError,
    MissingMetricError,
)
from immustats.common.models import Snapshot
from immustats.stats import (
    aggregate,
    aggregate_exposition,
    classify,
    parse_metric_families,
)

__all__ = [
    "ImmuStatsError",
    "MetricsParseError",
    "MissingMetricError",
    "Snapshot",
    "aggregate",
    "aggregate_exposition",
    "classify",
    "parse_metric_families",
]
