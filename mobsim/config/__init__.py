"""Configuration package for the mob simulation.

Constant modules hold the tuned defaults; ``simulation_config`` wraps them
in dataclasses that can be validated and overridden per run.
"""
