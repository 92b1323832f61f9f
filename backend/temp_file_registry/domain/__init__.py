"""
Domain Layer

Registry entities, value objects, events and errors.
"""
