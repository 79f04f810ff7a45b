"""Core data models for the A* engine."""
