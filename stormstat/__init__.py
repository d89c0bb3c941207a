"""
stormstat package
=================

Summarizes which severe weather event types are most harmful to public health
and which have the greatest economic consequences, from the NOAA Storm Data
export.

- The CLI entry point is in `stormstat/cli.py`.
- Dataset loading is in `stormstat/loader.py`.
- Damage unit conversion is in `stormstat/normalize.py`.
- Aggregation and ranking are in `stormstat/aggregate.py` and `stormstat/ranking.py`.
- Tables and charts are in `stormstat/report.py`.
"""

__version__ = '0.1.0'
