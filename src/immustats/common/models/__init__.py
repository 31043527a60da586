# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from immustats.common.models.base_models import FrozenStatsModel, ImmuStatsBaseModel
from immustats.common.models.metric_family_models import (
    HistogramData,
    MetricFamily,
    MetricSample,
    finite_or_zero,
)
from immustats.common.models.snapshot_models import (
    ClientActivity,
    DBInfo,
    MemStats,
    OperationAggregate,
    RPCDuration,
    Snapshot,
    safe_average,
)

__all__ = [
    "ClientActivity",
    "DBInfo",
    "FrozenStatsModel",
    "HistogramData",
    "ImmuStatsBaseModel",
    "MemStats",
    "MetricFamily",
    "MetricSample",
    "OperationAggregate",
    "RPCDuration",
    "Snapshot",
    "finite_or_zero",
    "safe_average",
]
