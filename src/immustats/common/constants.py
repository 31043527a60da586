# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Metric family and label names exposed by an immudb node."""

SECONDS_PER_HOUR = 3600.0

# Storage (mandatory)
LSM_SIZE_BYTES = "immudb_lsm_size_bytes"
VLOG_SIZE_BYTES = "immudb_vlog_size_bytes"
NUMBER_OF_STORED_ENTRIES = "immudb_number_of_stored_entries"
UPTIME_HOURS = "immudb_uptime_hours"

# Clients
NUMBER_OF_RPCS_PER_CLIENT = "immudb_number_of_rpcs_per_client"
CLIENTS_LAST_MESSAGE_AT_UNIX_SECONDS = "immudb_clients_last_message_at_unix_seconds"

# RPC handling time histogram from go-grpc-prometheus
GRPC_SERVER_HANDLING_SECONDS = "grpc_server_handling_seconds"

# Go runtime memory (optional)
GO_MEMSTATS_SYS_BYTES = "go_memstats_sys_bytes"
GO_MEMSTATS_HEAP_ALLOC_BYTES = "go_memstats_heap_alloc_bytes"
GO_MEMSTATS_HEAP_IDLE_BYTES = "go_memstats_heap_idle_bytes"
GO_MEMSTATS_HEAP_INUSE_BYTES = "go_memstats_heap_inuse_bytes"
GO_MEMSTATS_STACK_INUSE_BYTES = "go_memstats_stack_inuse_bytes"

DATABASE_LABEL = "database"
IP_LABEL = "ip"
GRPC_METHOD_LABEL = "grpc_method"
