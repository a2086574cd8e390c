"""Randomness and time-series helpers for synthetic data generation.

This module provides:
- DeterministicRandomSource: Seeded, reproducible random draws
- TimeSeriesSynthesizer: Trend + seasonal + noise + outlier series
"""

from __future__ import annotations

from photondrift_synthetic.distributions.random_source import DeterministicRandomSource
from photondrift_synthetic.distributions.temporal import TimeSeriesSynthesizer

__all__ = ["DeterministicRandomSource", "TimeSeriesSynthesizer"]
