"""Taichi data-parallel rendering backend.

Nothing is imported here: spheretrace.accel.integrator allocates Taichi
fields at import time, so ti.init() must run before importing it.
"""
