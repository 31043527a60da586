# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Test helpers for building metric families by hand."""

from immustats.common.enums import PrometheusMetricType
from immustats.common.models import HistogramData, MetricFamily, MetricSample


def scalar_family(*samples: tuple[dict[str, str] | None, float]) -> MetricFamily:
    """Build a gauge family from (labels, value) pairs."""
    return MetricFamily(
        type=PrometheusMetricType.GAUGE,
        samples=[MetricSample(labels=labels, value=value) for labels, value in samples],
    )


def histogram_family(*methods: tuple[str, float, float]) -> MetricFamily:
    """Build a grpc_server_handling_seconds family from (method, count, sum)."""
    return MetricFamily(
        type=PrometheusMetricType.HISTOGRAM,
        samples=[
            MetricSample(
                labels={"grpc_method": method, "grpc_type": "unary"},
                histogram=HistogramData(
                    buckets={"0.005": count, "+Inf": count}, sum=sum_, count=count
                ),
            )
            for method, count, sum_ in methods
        ],
    )
