"""Core components for network type simulation.

This module contains the profile catalog, the topology data model, the
per-type topology generators, the stepper, the metrics synthesizer and the
headless runner.
"""
