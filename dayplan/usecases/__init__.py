"""Use-case layer for strategy file workflows.

Each module coordinates domain objects and ports without performing file
I/O directly, and maps failures into ``UseCaseError`` for the UI.
"""
