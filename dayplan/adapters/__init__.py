"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports. ``StorageLocal`` keeps
    strategy documents and user settings as JSON files.

Call context:
    Imported by use-case wiring and by tests that exercise real file I/O
    under ``tmp_path``.
"""
