"""Experiment module package for running systematic heuristic comparisons.

Provides utilities to generate run configurations, execute them, export the
result rows and aggregate them into grouped statistics.
"""
