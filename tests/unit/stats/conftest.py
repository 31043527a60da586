# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures for snapshot statistics tests."""

import pytest

from tests.unit.stats.helpers import histogram_family, scalar_family


@pytest.fixture
def storage_families():
    """The four mandatory storage families of a node serving db1."""
    return {
        "immudb_lsm_size_bytes": scalar_family(({"database": "db1"}, 100)),
        "immudb_vlog_size_bytes": scalar_family((None, 50)),
        "immudb_number_of_stored_entries": scalar_family((None, 42)),
        "immudb_uptime_hours": scalar_family((None, 2.5)),
    }


@pytest.fixture
def full_families(storage_families):
    """A complete scrape: storage, clients, RPC durations and memstats."""
    return {
        **storage_families,
        "immudb_number_of_rpcs_per_client": scalar_family(
            ({"ip": "10.0.0.1"}, 12),
            ({"ip": "10.0.0.2"}, 3),
            ({"ip": "10.0.0.3"}, 7),
        ),
        "immudb_clients_last_message_at_unix_seconds": scalar_family(
            ({"ip": "10.0.0.1"}, 1_700_000_000),
            ({"ip": "10.0.0.2"}, 1_699_990_000),
        ),
        "grpc_server_handling_seconds": histogram_family(
            ("Get", 10, 5.0),
            ("Set", 4, 2.0),
        ),
        "go_memstats_sys_bytes": scalar_family((None, 73_000_000)),
        "go_memstats_heap_alloc_bytes": scalar_family((None, 12_000_000)),
        "go_memstats_heap_idle_bytes": scalar_family((None, 50_000_000)),
        "go_memstats_heap_inuse_bytes": scalar_family((None, 15_000_000)),
        "go_memstats_stack_inuse_bytes": scalar_family((None, 1_000_000)),
    }


@pytest.fixture
def immudb_exposition_text():
    """Prometheus text as served by an immudb /metrics endpoint."""
    return """# HELP immudb_lsm_size_bytes Size in bytes of the LSM tree
# TYPE immudb_lsm_size_bytes untyped
immudb_lsm_size_bytes{database="defaultdb"} 1.2e+06
# HELP immudb_vlog_size_bytes Size in bytes of the value log
# TYPE immudb_vlog_size_bytes untyped
immudb_vlog_size_bytes{database="defaultdb"} 800000
# HELP immudb_number_of_stored_entries Number of entries stored in the database
# TYPE immudb_number_of_stored_entries counter
immudb_number_of_stored_entries{database="defaultdb"} 1500
# HELP immudb_uptime_hours Server uptime in hours
# TYPE immudb_uptime_hours counter
immudb_uptime_hours 36.25
# HELP immudb_number_of_rpcs_per_client Number of handled RPCs per client
# TYPE immudb_number_of_rpcs_per_client counter
immudb_number_of_rpcs_per_client{ip="127.0.0.1"} 120
immudb_number_of_rpcs_per_client{ip="192.168.1.20"} 8
# HELP immudb_clients_last_message_at_unix_seconds Timestamp of the last message per client
# TYPE immudb_clients_last_message_at_unix_seconds gauge
immudb_clients_last_message_at_unix_seconds{ip="127.0.0.1"} 1.7e+09
immudb_clients_last_message_at_unix_seconds{ip="192.168.1.20"} 1.69999e+09
# HELP grpc_server_handling_seconds Histogram of response latency (seconds) of gRPC that had been application-level handled by the server.
# TYPE grpc_server_handling_seconds histogram
grpc_server_handling_seconds_bucket{grpc_method="Get",grpc_service="immudb.schema.ImmuService",grpc_type="unary",le="0.005"} 8
grpc_server_handling_seconds_bucket{grpc_method="Get",grpc_service="immudb.schema.ImmuService",grpc_type="unary",le="+Inf"} 10
grpc_server_handling_seconds_sum{grpc_method="Get",grpc_service="immudb.schema.ImmuService",grpc_type="unary"} 0.05
grpc_server_handling_seconds_count{grpc_method="Get",grpc_service="immudb.schema.ImmuService",grpc_type="unary"} 10
grpc_server_handling_seconds_bucket{grpc_method="SafeSet",grpc_service="immudb.schema.ImmuService",grpc_type="unary",le="0.005"} 1
grpc_server_handling_seconds_bucket{grpc_method="SafeSet",grpc_service="immudb.schema.ImmuService",grpc_type="unary",le="+Inf"} 4
grpc_server_handling_seconds_sum{grpc_method="SafeSet",grpc_service="immudb.schema.ImmuService",grpc_type="unary"} 0.2
grpc_server_handling_seconds_count{grpc_method="SafeSet",grpc_service="immudb.schema.ImmuService",grpc_type="unary"} 4
# HELP go_memstats_sys_bytes Number of bytes obtained from system.
# TYPE go_memstats_sys_bytes gauge
go_memstats_sys_bytes 7.3e+07
# HELP go_memstats_heap_inuse_bytes Number of heap bytes that are in use.
# TYPE go_memstats_heap_inuse_bytes gauge
go_memstats_heap_inuse_bytes 1.5e+07
"""
