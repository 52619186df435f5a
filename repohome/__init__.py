"""repohome — keep cloned repositories under one predictable tree."""

__version__ = "0.1.0"
