"""Utilities for network type simulation.

This module provides the random source, metrics export and summaries,
and plotting helpers.
"""
