"""Setup (config, logging, dependencies)."""
