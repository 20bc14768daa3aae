"""NBA standings-by-date package."""

__all__ = [
    "api",
    "config",
    "errors",
    "models",
    "pipeline",
    "ranking",
    "response",
    "service",
    "storage",
    "teams",
    "validation",
    "watermark",
]
