"""Pipeline orchestration.

- clip_pipeline: Directory scan → filter → CRS resolution → clip
"""
