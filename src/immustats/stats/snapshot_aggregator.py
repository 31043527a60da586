# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Builds a Snapshot from the metric families of one immudb scrape.

The aggregation runs four independent passes over the same read-only mapping:

1. Storage: LSM/vlog sizes, entry count and uptime. Mandatory.
2. Clients: per-client RPC counts and last message times.
3. Durations: gRPC handling-time histograms, classified into reads and writes.
4. Memory: Go runtime memstats. Optional.

Reads and writes are accumulated in different units. Each distinct
read-classified method adds 1 to the read counter and its own average to the
read total, so the read average is a mean over methods. Each write-classified
sample adds its call count and summed time, so the write average is a mean over
calls. Non-finite sample values (NaN, +Inf, -Inf) are read as 0.
"""

from collections.abc import Mapping

from immustats.common import constants as names
from immustats.common.enums import OperationClass
from immustats.common.exceptions import MissingMetricError
from immustats.common.models import (
    DBInfo,
    HistogramData,
    MemStats,
    MetricFamily,
    MetricSample,
    OperationAggregate,
    RPCDuration,
    Snapshot,
    finite_or_zero,
)
from immustats.common.stats_logger import StatsLoggerMixin
from immustats.stats.exposition_parser import parse_metric_families
from immustats.stats.metric_catalog import classify

__all__ = ["SnapshotAggregator", "aggregate", "aggregate_exposition"]

_MEMSTATS_FIELDS = {
    names.GO_MEMSTATS_SYS_BYTES: "sys_bytes",
    names.GO_MEMSTATS_HEAP_ALLOC_BYTES: "heap_alloc_bytes",
    names.GO_MEMSTATS_HEAP_IDLE_BYTES: "heap_idle_bytes",
    names.GO_MEMSTATS_HEAP_INUSE_BYTES: "heap_in_use_bytes",
    names.GO_MEMSTATS_STACK_INUSE_BYTES: "stack_in_use_bytes",
}


class SnapshotAggregator(StatsLoggerMixin):
    """Stateless transform from a family mapping to a Snapshot.

    An instance holds no per-call state and may be reused or shared.
    """

    def aggregate(self, families: Mapping[str, MetricFamily]) -> Snapshot:
        """Aggregate one scrape into a Snapshot.

        Args:
            families: Metric family name to family. Not modified.

        Returns:
            A new, immutable Snapshot.

        Raises:
            MissingMetricError: If a storage family or its first sample is absent.
                No partial snapshot is produced.
        """
        db = self._db_info(families)
        nb_clients, rpcs_per_client, last_message_at = self._clients(families)
        durations, reads, writes = self._durations(families)
        memstats = self._memstats(families)

        return Snapshot(
            db=db,
            memstats=memstats,
            reads=reads,
            writes=writes,
            durations_by_method=durations,
            nb_clients=nb_clients,
            rpcs_per_client=rpcs_per_client,
            last_message_at_per_client=last_message_at,
        )

    def _first_sample(
        self, families: Mapping[str, MetricFamily], name: str
    ) -> MetricSample:
        family = families.get(name)
        if family is None:
            raise MissingMetricError(name)
        sample = family.first_sample
        if sample is None:
            raise MissingMetricError(name, "family has no samples")
        return sample

    def _samples(
        self, families: Mapping[str, MetricFamily], name: str
    ) -> list[MetricSample]:
        family = families.get(name)
        if family is None:
            self.debug(lambda: f"{name} not present in scrape")
            return []
        return family.samples

    def _db_info(self, families: Mapping[str, MetricFamily]) -> DBInfo:
        lsm_sample = self._first_sample(families, names.LSM_SIZE_BYTES)
        lsm_bytes = lsm_sample.integer
        vlog_bytes = self._first_sample(families, names.VLOG_SIZE_BYTES).integer
        entry_count = self._first_sample(families, names.NUMBER_OF_STORED_ENTRIES)
        uptime = self._first_sample(families, names.UPTIME_HOURS)

        return DBInfo(
            name=lsm_sample.label(names.DATABASE_LABEL),
            lsm_bytes=lsm_bytes,
            vlog_bytes=vlog_bytes,
            total_bytes=lsm_bytes + vlog_bytes,
            entry_count=entry_count.integer,
            uptime_hours=uptime.scalar,
        )

    def _clients(
        self, families: Mapping[str, MetricFamily]
    ) -> tuple[int, dict[str, int], dict[str, int]]:
        rpc_samples = self._samples(families, names.NUMBER_OF_RPCS_PER_CLIENT)
        rpcs_per_client = {
            sample.label(names.IP_LABEL): sample.integer for sample in rpc_samples
        }

        last_message_at = {
            sample.label(names.IP_LABEL): sample.integer
            for sample in self._samples(
                families, names.CLIENTS_LAST_MESSAGE_AT_UNIX_SECONDS
            )
        }

        self.debug(
            lambda: f"Found {len(rpc_samples)} clients, {len(last_message_at)} with a last message time"
        )
        return len(rpc_samples), rpcs_per_client, last_message_at

    def _durations(
        self, families: Mapping[str, MetricFamily]
    ) -> tuple[dict[str, RPCDuration], OperationAggregate, OperationAggregate]:
        durations: dict[str, RPCDuration] = {}
        writes_counter, writes_total = 0, 0.0

        for sample in self._samples(families, names.GRPC_SERVER_HANDLING_SECONDS):
            method = sample.label(names.GRPC_METHOD_LABEL)
            # A sample without histogram data counts as an empty histogram
            histogram = sample.histogram or HistogramData()
            duration = RPCDuration(
                method=method,
                counter=int(finite_or_zero(histogram.count)),
                total_duration=finite_or_zero(histogram.sum),
            )
            durations[method] = duration

            match classify(method):
                case OperationClass.WRITE:
                    writes_counter += duration.counter
                    writes_total += duration.total_duration
                case OperationClass.UNCLASSIFIED:
                    self.trace(lambda: f"Method '{method}' is neither a read nor a write")

        # Reads count each distinct method once, using its last-seen sample
        read_durations = [
            duration
            for method, duration in durations.items()
            if classify(method) == OperationClass.READ
        ]
        reads = OperationAggregate(
            counter=len(read_durations),
            total_duration=sum(duration.avg_duration for duration in read_durations),
        )
        writes = OperationAggregate(counter=writes_counter, total_duration=writes_total)
        self.debug(
            lambda: f"Aggregated {len(durations)} RPC methods: reads={reads.counter} writes={writes.counter}"
        )
        return durations, reads, writes

    def _memstats(self, families: Mapping[str, MetricFamily]) -> MemStats:
        values: dict[str, int] = {}
        for family_name, field_name in _MEMSTATS_FIELDS.items():
            family = families.get(family_name)
            if family is None:
                continue
            sample = family.first_sample
            if sample is None:
                self.warning(f"{family_name} has no samples, reporting 0")
                continue
            values[field_name] = sample.integer
        return MemStats(**values)


_aggregator = SnapshotAggregator()


def aggregate(families: Mapping[str, MetricFamily]) -> Snapshot:
    """Aggregate a metric family mapping into a Snapshot.

    Raises:
        MissingMetricError: If a storage family or its first sample is absent.
    """
    return _aggregator.aggregate(families)


def aggregate_exposition(metrics_data: str) -> Snapshot:
    """Parse Prometheus exposition text and aggregate it into a Snapshot.

    Raises:
        MetricsParseError: If the text is not valid exposition format.
        MissingMetricError: If a storage family or its first sample is absent.
    """
    return aggregate(parse_metric_families(metrics_data))
