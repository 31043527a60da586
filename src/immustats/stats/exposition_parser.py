# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from collections import defaultdict

from prometheus_client.metrics_core import Metric
from prometheus_client.parser import text_string_to_metric_families

from immustats.common.enums import PrometheusMetricType
from immustats.common.exceptions import MetricsParseError
from immustats.common.models import HistogramData, MetricFamily, MetricSample
from immustats.common.stats_logger import StatsLoggerMixin

__all__ = ["ExpositionParser", "parse_metric_families"]


class ExpositionParser(StatsLoggerMixin):
    """Converts Prometheus exposition text into MetricFamily objects.

    - Uses prometheus_client for robust metric parsing
    - De-duplicates samples by label combination (last value wins)
    - Folds histogram _bucket/_sum/_count samples into HistogramData
    - Skips metric types the snapshot has no use for (summary, info, ...)
    """

    def parse(self, metrics_data: str) -> dict[str, MetricFamily]:
        """Parse Prometheus metrics text into metric families keyed by name.

        Args:
            metrics_data: Raw metrics text in Prometheus exposition format

        Returns:
            dict[str, MetricFamily]: Families that kept at least one sample.
                Empty if metrics_data is empty.

        Raises:
            MetricsParseError: If metrics_data is not valid exposition text
        """
        if not metrics_data.strip():
            return {}

        families: dict[str, MetricFamily] = {}
        try:
            for family in text_string_to_metric_families(metrics_data):
                # _created families are creation timestamps of their parent
                # counter/histogram, not measurements
                if family.name.endswith("_created"):
                    continue

                metric_type = PrometheusMetricType(family.type)
                match metric_type:
                    case PrometheusMetricType.HISTOGRAM:
                        samples = self._process_histogram_family(family)
                    case (
                        PrometheusMetricType.COUNTER
                        | PrometheusMetricType.GAUGE
                        | PrometheusMetricType.UNKNOWN
                    ):
                        samples = self._process_simple_family(family)
                    case _:
                        self.warning(
                            f"Skipping {family.name}: unsupported metric type {metric_type}"
                        )
                        continue

                if samples:
                    families[family.name] = MetricFamily(
                        type=metric_type,
                        description=family.documentation or "",
                        samples=samples,
                    )
        except ValueError as e:
            self.warning(f"Failed to parse Prometheus metrics - invalid format: {e}")
            raise MetricsParseError(f"Invalid Prometheus exposition text: {e}") from e

        self.debug(lambda: f"Parsed {len(families)} metric families")
        return families

    def _process_simple_family(self, family: Metric) -> list[MetricSample]:
        """Process counter, gauge, or untyped metrics with de-duplication."""
        samples_by_labels: dict[tuple, float] = {}

        for sample in family.samples:
            label_key = tuple(sorted(sample.labels.items()))
            samples_by_labels[label_key] = sample.value

        return [
            MetricSample(labels=dict(label_tuple) if label_tuple else None, value=value)
            for label_tuple, value in samples_by_labels.items()
        ]

    def _process_histogram_family(self, family: Metric) -> list[MetricSample]:
        """Process histogram metrics into one HistogramData per label set."""
        histograms: dict[tuple, HistogramData] = defaultdict(HistogramData)

        for sample in family.samples:
            base_labels = {k: v for k, v in sample.labels.items() if k != "le"}
            label_key = tuple(sorted(base_labels.items()))

            if sample.name.endswith("_bucket"):
                le_value = sample.labels.get("le", "+Inf")
                histograms[label_key].buckets[le_value] = sample.value
            elif sample.name.endswith("_sum"):
                histograms[label_key].sum = sample.value
            elif sample.name.endswith("_count"):
                histograms[label_key].count = sample.value

        samples = []
        for label_tuple, hist_data in histograms.items():
            if (
                hist_data.sum is None
                or hist_data.count is None
                or not hist_data.buckets
            ):
                self.debug(
                    lambda hist=hist_data: f"Skipping incomplete histogram in {family.name} (missing sum, count, or buckets): {hist}"
                )
                continue

            samples.append(
                MetricSample(
                    labels=dict(label_tuple) if label_tuple else None,
                    histogram=hist_data,
                )
            )

        return samples


def parse_metric_families(metrics_data: str) -> dict[str, MetricFamily]:
    """Parse Prometheus exposition text into a family mapping for aggregate()."""
    return ExpositionParser().parse(metrics_data)
