# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Structured form of a Prometheus scrape: families of labeled samples."""

import math

from pydantic import Field

from immustats.common.enums import PrometheusMetricType
from immustats.common.models.base_models import ImmuStatsBaseModel


def finite_or_zero(value: float | None) -> float:
    """Return ``value``, or 0.0 when it is None, NaN or infinite."""
    if value is None or not math.isfinite(value):
        return 0.0
    return value


class HistogramData(ImmuStatsBaseModel):
    """Structured histogram data with buckets, sum, and count."""

    buckets: dict[str, float] = Field(
        default_factory=dict,
        description='Bucket upper bounds (le="less than or equal") to counts. Keys are strings (e.g., "0.01", "0.1", "+Inf")',
    )
    sum: float | None = Field(default=None, description="Sum of all observed values")
    count: float | None = Field(
        default=None, description="Total number of observations"
    )


class MetricSample(ImmuStatsBaseModel):
    """Single metric sample with labels and value."""

    labels: dict[str, str] | None = Field(
        default=None,
        description="Metric labels (excluding the histogram 'le' label). None if no labels.",
    )
    value: float | None = Field(
        default=None, description="Simple metric value (counter/gauge/untyped)"
    )
    histogram: HistogramData | None = Field(
        default=None, description="Histogram data if metric is histogram type"
    )

    def label(self, name: str) -> str:
        """Value of label ``name``, or an empty string if the sample lacks it."""
        if not self.labels:
            return ""
        return self.labels.get(name, "")

    @property
    def scalar(self) -> float:
        """Scalar reading of the sample, 0.0 when it carries none or it is not finite.

        Prometheus text allows NaN, +Inf and -Inf sample values.
        """
        return finite_or_zero(self.value)

    @property
    def integer(self) -> int:
        """Scalar reading truncated to an int, 0 when it is missing or not finite."""
        return int(self.scalar)


class MetricFamily(ImmuStatsBaseModel):
    """Group of related metrics with same name and type.

    The family name is not stored here; it is the key of the mapping the
    family is looked up in.
    """

    type: PrometheusMetricType = Field(
        default=PrometheusMetricType.UNKNOWN, description="Metric type as enum"
    )
    description: str = Field(default="", description="Metric description from HELP text")
    samples: list[MetricSample] = Field(
        default_factory=list, description="Metric samples grouped by base labels"
    )

    @property
    def first_sample(self) -> MetricSample | None:
        return self.samples[0] if self.samples else None
