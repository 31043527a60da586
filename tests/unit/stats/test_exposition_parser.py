# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Tests for parsing Prometheus exposition text into metric families."""

import pytest

from immustats.common.enums import PrometheusMetricType
from immustats.common.exceptions import MetricsParseError, MissingMetricError
from immustats.stats.exposition_parser import ExpositionParser, parse_metric_families
from immustats.stats.snapshot_aggregator import aggregate_exposition


class TestMetricParsing:
    """Tests for parsing individual metric types."""

    def test_parse_immudb_scrape(self, immudb_exposition_text):
        """Test that every family of an immudb scrape is parsed."""
        families = parse_metric_families(immudb_exposition_text)

        assert set(families) == {
            "immudb_lsm_size_bytes",
            "immudb_vlog_size_bytes",
            "immudb_number_of_stored_entries",
            "immudb_uptime_hours",
            "immudb_number_of_rpcs_per_client",
            "immudb_clients_last_message_at_unix_seconds",
            "grpc_server_handling_seconds",
            "go_memstats_sys_bytes",
            "go_memstats_heap_inuse_bytes",
        }

    def test_parse_counter(self, immudb_exposition_text):
        families = parse_metric_families(immudb_exposition_text)
        clients = families["immudb_number_of_rpcs_per_client"]

        assert clients.type == PrometheusMetricType.COUNTER
        assert clients.description == "Number of handled RPCs per client"
        assert {s.labels["ip"]: s.value for s in clients.samples} == {
            "127.0.0.1": 120.0,
            "192.168.1.20": 8.0,
        }

    def test_parse_untyped(self, immudb_exposition_text):
        """Test that untyped families map to UNKNOWN."""
        lsm = parse_metric_families(immudb_exposition_text)["immudb_lsm_size_bytes"]

        assert lsm.type == PrometheusMetricType.UNKNOWN
        assert lsm.samples[0].labels == {"database": "defaultdb"}
        assert lsm.samples[0].value == 1_200_000.0

    def test_parse_unlabeled_gauge(self, immudb_exposition_text):
        sys_bytes = parse_metric_families(immudb_exposition_text)["go_memstats_sys_bytes"]

        assert sys_bytes.type == PrometheusMetricType.GAUGE
        assert sys_bytes.samples[0].labels is None
        assert sys_bytes.samples[0].value == 73_000_000.0

    def test_parse_histogram(self, immudb_exposition_text):
        """Test that bucket/sum/count samples fold into one sample per method."""
        handling = parse_metric_families(immudb_exposition_text)[
            "grpc_server_handling_seconds"
        ]

        assert handling.type == PrometheusMetricType.HISTOGRAM
        assert len(handling.samples) == 2

        get = next(s for s in handling.samples if s.labels["grpc_method"] == "Get")
        assert "le" not in get.labels
        assert get.labels["grpc_service"] == "immudb.schema.ImmuService"
        assert get.histogram.count == 10.0
        assert get.histogram.sum == 0.05
        assert get.histogram.buckets == {"0.005": 8.0, "+Inf": 10.0}

    @pytest.mark.parametrize("empty_input", ["", "   \n  \n  ", "\t\t\n"])
    def test_empty_metrics(self, empty_input):
        assert parse_metric_families(empty_input) == {}


class TestFiltering:
    """Tests for families the parser drops."""

    def test_duplicate_labels_last_wins(self):
        text = """# TYPE immudb_number_of_rpcs_per_client counter
immudb_number_of_rpcs_per_client{ip="10.0.0.1"} 100
immudb_number_of_rpcs_per_client{ip="10.0.0.1"} 200
"""
        family = parse_metric_families(text)["immudb_number_of_rpcs_per_client"]

        assert len(family.samples) == 1
        assert family.samples[0].value == 200.0

    def test_created_families_skipped(self):
        text = """# TYPE grpc_server_handled_total counter
grpc_server_handled_total{grpc_method="Get"} 10
# TYPE grpc_server_handled_created gauge
grpc_server_handled_created{grpc_method="Get"} 1.7e+09
"""
        families = parse_metric_families(text)

        assert "grpc_server_handled" in families
        assert not any(name.endswith("_created") for name in families)

    def test_summary_skipped(self):
        """Test that summary families are skipped."""
        text = """# TYPE go_gc_duration_seconds summary
go_gc_duration_seconds{quantile="0.5"} 0.0001
go_gc_duration_seconds_sum 0.5
go_gc_duration_seconds_count 120
# TYPE go_goroutines gauge
go_goroutines 42
"""
        families = parse_metric_families(text)

        assert set(families) == {"go_goroutines"}

    def test_incomplete_histogram_skipped(self):
        """Test that a histogram without buckets is dropped with its family."""
        text = """# TYPE grpc_server_handling_seconds histogram
grpc_server_handling_seconds_sum{grpc_method="Get"} 1.5
grpc_server_handling_seconds_count{grpc_method="Get"} 3
"""
        assert parse_metric_families(text) == {}


class TestErrors:
    """Tests for malformed exposition text."""

    def test_invalid_value_raises(self):
        with pytest.raises(MetricsParseError, match="Invalid Prometheus exposition text"):
            parse_metric_families("immudb_uptime_hours not_a_number\n")

    def test_parse_error_keeps_cause(self):
        with pytest.raises(MetricsParseError) as exc_info:
            ExpositionParser().parse("immudb_uptime_hours not_a_number\n")
        assert isinstance(exc_info.value.__cause__, ValueError)


class TestAggregateExposition:
    """Tests for parsing and aggregating in one step."""

    def test_end_to_end(self, immudb_exposition_text):
        snapshot = aggregate_exposition(immudb_exposition_text)

        assert snapshot.db.name == "defaultdb"
        assert snapshot.db.lsm_bytes == 1_200_000
        assert snapshot.db.vlog_bytes == 800_000
        assert snapshot.db.total_bytes == 2_000_000
        assert snapshot.db.entry_count == 1500
        assert snapshot.db.uptime_hours == 36.25

        assert snapshot.nb_clients == 2
        assert snapshot.rpcs_per_client == {"127.0.0.1": 120, "192.168.1.20": 8}
        assert snapshot.last_message_at_per_client["127.0.0.1"] == 1_700_000_000

        assert snapshot.reads.counter == 1
        assert snapshot.reads.avg_duration == pytest.approx(0.005)
        assert snapshot.writes.counter == 4
        assert snapshot.writes.avg_duration == pytest.approx(0.05)

        assert snapshot.memstats.sys_bytes == 73_000_000
        assert snapshot.memstats.heap_in_use_bytes == 15_000_000
        assert snapshot.memstats.heap_alloc_bytes == 0

    def test_missing_storage_in_text(self):
        text = """# TYPE go_goroutines gauge
go_goroutines 42
"""
        with pytest.raises(MissingMetricError, match="immudb_lsm_size_bytes"):
            aggregate_exposition(text)

    def test_non_finite_values_in_text(self, immudb_exposition_text):
        """Test NaN and +Inf sample values are read as 0 instead of failing."""
        replacements = {
            "go_memstats_sys_bytes 7.3e+07": "go_memstats_sys_bytes +Inf",
            "go_memstats_heap_inuse_bytes 1.5e+07": "go_memstats_heap_inuse_bytes NaN",
            '{ip="192.168.1.20"} 8': '{ip="192.168.1.20"} NaN',
        }
        text = immudb_exposition_text
        for old, new in replacements.items():
            text = text.replace(old, new)
        snapshot = aggregate_exposition(text)

        assert snapshot.memstats.sys_bytes == 0
        assert snapshot.memstats.heap_in_use_bytes == 0
        assert snapshot.rpcs_per_client == {"127.0.0.1": 120, "192.168.1.20": 0}
        assert snapshot.db.total_bytes == 2_000_000
