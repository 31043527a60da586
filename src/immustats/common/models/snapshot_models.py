# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Display-ready view of an immudb node built from a single scrape."""

import time
from collections.abc import Mapping
from datetime import datetime, timezone
from types import MappingProxyType

from pydantic import (
    Field,
    computed_field,
    field_serializer,
    field_validator,
    model_validator,
)
from typing_extensions import Self

from immustats.common.constants import SECONDS_PER_HOUR
from immustats.common.environment import Environment
from immustats.common.models.base_models import FrozenStatsModel


def safe_average(total: float, counter: float) -> float:
    """Return total / counter, or 0.0 when counter is zero."""
    if counter == 0:
        return 0.0
    return total / counter


class OperationAggregate(FrozenStatsModel):
    """Counter and durations reduced over a group of RPC methods."""

    counter: int = Field(default=0, ge=0)
    total_duration: float = Field(
        default=0.0, description="Running total the average is computed from"
    )

    @computed_field
    @property
    def avg_duration(self) -> float:
        return safe_average(self.total_duration, self.counter)


class RPCDuration(FrozenStatsModel):
    """Handling time of a single gRPC method, copied from its histogram."""

    method: str = Field(description="gRPC method name, empty if the label was missing")
    counter: int = Field(default=0, ge=0, description="Histogram sample count")
    total_duration: float = Field(default=0.0, description="Histogram sample sum in seconds")

    @computed_field
    @property
    def avg_duration(self) -> float:
        return safe_average(self.total_duration, self.counter)


class ClientActivity(FrozenStatsModel):
    """RPC count and last contact time of one remote client."""

    rpc_count: int = 0
    last_seen_unix_seconds: int = 0


class DBInfo(FrozenStatsModel):
    """Storage footprint and age of the database."""

    name: str = ""
    lsm_bytes: int = 0
    vlog_bytes: int = 0
    total_bytes: int = 0
    entry_count: int = 0
    uptime_hours: float = 0.0

    @model_validator(mode="after")
    def _check_total(self) -> Self:
        if self.total_bytes != self.lsm_bytes + self.vlog_bytes:
            raise ValueError(
                f"total_bytes ({self.total_bytes}) must equal lsm_bytes + vlog_bytes "
                f"({self.lsm_bytes} + {self.vlog_bytes})"
            )
        return self


class MemStats(FrozenStatsModel):
    """Go runtime memory figures. Fields are 0 when the node does not export them."""

    sys_bytes: int = 0
    heap_alloc_bytes: int = 0
    heap_idle_bytes: int = 0
    heap_in_use_bytes: int = 0
    stack_in_use_bytes: int = 0


class Snapshot(FrozenStatsModel):
    """Everything the statistics view shows about a node at one point in time."""

    db: DBInfo
    memstats: MemStats = Field(default_factory=MemStats)
    reads: OperationAggregate = Field(default_factory=OperationAggregate)
    writes: OperationAggregate = Field(default_factory=OperationAggregate)
    durations_by_method: Mapping[str, RPCDuration] = Field(
        default_factory=dict, validate_default=True
    )
    nb_clients: int = Field(
        default=0, description="Number of samples in the per-client RPC family"
    )
    rpcs_per_client: Mapping[str, int] = Field(
        default_factory=dict, validate_default=True
    )
    last_message_at_per_client: Mapping[str, int] = Field(
        default_factory=dict,
        validate_default=True,
        description="Client id to Unix seconds of its last message",
    )

    @field_validator(
        "durations_by_method",
        "rpcs_per_client",
        "last_message_at_per_client",
        mode="after",
    )
    @classmethod
    def _freeze_mapping(cls, value: Mapping) -> Mapping:
        # Item assignment on a stored mapping raises TypeError
        return MappingProxyType(dict(value))

    @field_serializer(
        "durations_by_method",
        "rpcs_per_client",
        "last_message_at_per_client",
        mode="wrap",
    )
    def _dump_mapping(self, value: Mapping, handler):
        return handler(dict(value))

    @property
    def clients(self) -> dict[str, ClientActivity]:
        """Per-client activity over every client seen in either mapping."""
        client_ids = self.rpcs_per_client.keys() | self.last_message_at_per_client.keys()
        return {
            client_id: ClientActivity(
                rpc_count=self.rpcs_per_client.get(client_id, 0),
                last_seen_unix_seconds=self.last_message_at_per_client.get(client_id, 0),
            )
            for client_id in sorted(client_ids)
        }

    def clients_active_during_last_hour(
        self, now: datetime | float | None = None
    ) -> dict[str, datetime]:
        """Clients whose last message is younger than the active window.

        The window is Environment.STATS.ACTIVE_CLIENT_WINDOW_HOURS (one hour by
        default) and the age is compared in fractional hours.

        Args:
            now: Reference time as an aware datetime or Unix seconds. Defaults to
                the current wall-clock time.

        Returns:
            Client id to the UTC time of its last message.
        """
        if now is None:
            now_seconds = time.time()
        elif isinstance(now, datetime):
            now_seconds = now.timestamp()
        else:
            now_seconds = float(now)

        window_hours = Environment.STATS.ACTIVE_CLIENT_WINDOW_HOURS
        active = {}
        for client_id, last_message_at in self.last_message_at_per_client.items():
            age_hours = (now_seconds - last_message_at) / SECONDS_PER_HOUR
            if age_hours < window_hours:
                active[client_id] = datetime.fromtimestamp(
                    last_message_at, tz=timezone.utc
                )
        return active
