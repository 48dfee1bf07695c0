"""Application wiring that sits between a window layer and the view-models."""
