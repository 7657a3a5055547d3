"""Per-run processing steps.

- metadata: Locate and parse a scene's ``_MTL.txt`` projection info
- crs: Sticky CRS reconciliation and EPSG parsing
- extent: Mask envelope and inflation
"""
