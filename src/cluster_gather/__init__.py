"""Cluster version gatherer: collect anonymized diagnostic records from a cluster."""

__version__ = "0.1.0"
