"""
postgis-point — add PostGIS point fields to JHipster entities.
"""

__version__ = "0.1.0"
