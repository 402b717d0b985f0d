"""Helpers around the engine: record categorization, property relationships, day status, tracing."""
