"""
Expose common test utilities so tests can import directly:
    from tests import FakeRouter, age_file
"""

from .utils import FOUR_ASSETS, FakeResp, FakeRouter, age_file, serve_all

__all__ = ["FOUR_ASSETS", "FakeResp", "FakeRouter", "age_file", "serve_all"]
