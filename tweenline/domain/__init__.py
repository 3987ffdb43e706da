"""
Domain layer - Timeline entities, easing catalog and invariants.

No dependencies on the application layer.
"""
