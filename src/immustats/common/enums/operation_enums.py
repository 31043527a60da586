# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from immustats.common.enums.base_enums import CaseInsensitiveStrEnum


class OperationClass(CaseInsensitiveStrEnum):
    """Kind of work an immudb RPC method performs."""

    READ = "read"
    WRITE = "write"
    UNCLASSIFIED = "unclassified"
    """Method is not in the catalog and is left out of the read/write aggregates."""
