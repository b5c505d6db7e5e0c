"""
Shared business codes used across layers (Domain/Application/CLI).

This package exposes BusinessCode at `shared.codes` as the single
source of truth for error classification.
"""
from enum import IntEnum


class BusinessCode(IntEnum):
    """Unified business status codes (single source of truth)."""

    # Business errors (2xxxx)
    DATASET_LOAD_ERROR = 20007

    # System errors (4xxxx)
    CONFIG_ERROR = 40004


__all__ = ["BusinessCode"]
