# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
from enum import Enum
from typing import Any

from typing_extensions import Self


class CaseInsensitiveStrEnum(str, Enum):
    """String enum whose members can be looked up regardless of case.

    Members compare equal to their plain string values, so they can be used
    anywhere a string is expected.
    """

    def __str__(self) -> str:
        return self.value

    @classmethod
    def _missing_(cls, value: Any) -> Self:
        if isinstance(value, str):
            lowered = value.lower()
            for member in cls:
                if member.value.lower() == lowered:
                    return member
        raise ValueError(f"{value!r} is not a valid {cls.__name__}")
