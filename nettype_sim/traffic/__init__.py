"""Traffic helpers for network type simulation.

This module provides packet size distributions and endpoint selection
shared by topology generation and stepping.
"""
