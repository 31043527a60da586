# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from immustats.stats.exposition_parser import ExpositionParser, parse_metric_families
from immustats.stats.metric_catalog import READ_METHODS, WRITE_METHODS, classify
from immustats.stats.snapshot_aggregator import (
    SnapshotAggregator,
    aggregate,
    aggregate_exposition,
)

__all__ = [
    "READ_METHODS",
    "WRITE_METHODS",
    "ExpositionParser",
    "SnapshotAggregator",
    "aggregate",
    "aggregate_exposition",
    "classify",
    "parse_metric_families",
]
