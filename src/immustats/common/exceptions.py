# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Exceptions raised by immustats."""


class ImmuStatsError(Exception):
    """Base class for all immustats errors."""


class MissingMetricError(ImmuStatsError):
    """A metric family the snapshot cannot be built without is absent.

    Raised when the family itself is missing from the scrape, or when it is
    present but carries no samples.

    Attributes:
        metric_name: Name of the missing metric family.
    """

    def __init__(self, metric_name: str, reason: str | None = None) -> None:
        self.metric_name = metric_name
        self.reason = reason or "family not found in scrape"
        super().__init__(f"Missing mandatory metric '{metric_name}': {self.reason}")


class MetricsParseError(ImmuStatsError):
    """Prometheus exposition text could not be parsed."""
