"""
DRCA package
============

Disaster Relief Claims Analytics: statistical queries over disaster, claim
and agent datasets.

- The CLI entry point is in `drca/cli.py`.
- The query engine (counts, costs, rankings, density, month buckets) is in `drca/engine.py`.
- Dataset loading is in `drca/loader.py`.
"""

__version__ = '0.1.0'
