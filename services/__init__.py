"""
Service layer: AI providers, persistence, analytics and audio output.
"""
