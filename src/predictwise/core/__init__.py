"""
Core Package

Shared data models and schema validation used by the extractor,
predictors and services.
"""
