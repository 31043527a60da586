# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from immustats.common.enums.base_enums import CaseInsensitiveStrEnum
from immustats.common.enums.operation_enums import OperationClass
from immustats.common.enums.prometheus_enums import PrometheusMetricType

__all__ = ["CaseInsensitiveStrEnum", "OperationClass", "PrometheusMetricType"]
