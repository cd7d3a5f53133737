"""Plate Share: compact plate notation and short links for assay plate layouts."""

__version__ = "1.0.0"
