"""Landsat band clipping pipeline.

Batch-clips GeoTIFF bands of Landsat scenes to the inflated extent of a
single-feature vector mask, resolving each scene's CRS from its
``_MTL.txt`` metadata file.
"""

__version__ = "1.0.0"
