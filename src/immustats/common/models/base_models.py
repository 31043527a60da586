# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from pydantic import BaseModel, ConfigDict


class ImmuStatsBaseModel(BaseModel):
    """Base model for all immustats models."""


class FrozenStatsModel(ImmuStatsBaseModel):
    """Base model for values that must not change once built."""

    model_config = ConfigDict(frozen=True)
