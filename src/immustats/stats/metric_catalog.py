# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Read/write classification of immudb gRPC methods."""

from immustats.common.enums import OperationClass

READ_METHODS: frozenset[str] = frozenset(
    {
        "ByIndex",
        "ByIndexSV",
        "Consistency",
        "Count",
        "CurrentRoot",
        "Dump",
        "Get",
        "GetBatch",
        "GetBatchSV",
        "GetSV",
        "Health",
        "History",
        "HistorySV",
        "IScan",
        "IScanSV",
        "Inclusion",
        "Login",
        "SafeGet",
        "SafeGetSV",
        "Scan",
        "ScanSV",
        "ZScan",
        "ZScanSV",
    }
)

WRITE_METHODS: frozenset[str] = frozenset(
    {
        "Reference",
        "SafeReference",
        "SafeSet",
        "SafeSetSV",
        "SafeZAdd",
        "Set",
        "SetBatch",
        "SetBatchSV",
        "SetSV",
        "ZAdd",
    }
)


def classify(method_name: str) -> OperationClass:
    """Classify a gRPC method name. Matching is exact and case-sensitive."""
    if method_name in READ_METHODS:
        return OperationClass.READ
    if method_name in WRITE_METHODS:
        return OperationClass.WRITE
    return OperationClass.UNCLASSIFIED
