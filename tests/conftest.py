"""
Pytest configuration for tape machine tests.

Registers hypothesis profiles; select one with HYPOTHESIS_PROFILE=ci.
"""

import os

from hypothesis import settings

settings.register_profile("default", print_blob=True)
settings.register_profile("ci", print_blob=True, derandomize=True, max_examples=200)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))
