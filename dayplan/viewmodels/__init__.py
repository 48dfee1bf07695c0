"""ViewModel package for UI state and command surfaces.

Dependencies:
    Modules in this package depend on domain types and lightweight logging
    helpers only. Persistence stays in adapters and use cases.

Responsibilities:
    - Expose mutable UI state and command intent callbacks.
    - Translate board gestures into Strategy mutations.
    - Project derived activity groups into view-facing rows.
"""
