"""
Core Module - Application Configuration and Constants

Contains core application components:
- config: Configuration management with JSON storage
- constants: Video extensions, timing defaults and naming constants
"""
