"""
Application layer - Services, events, settings and the timeline facade.
"""
