"""Rough sunrise and sunset estimates from a static monthly configuration."""
