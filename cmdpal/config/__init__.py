"""Configuration for cmdpal: engine constants and persisted palette preferences."""
