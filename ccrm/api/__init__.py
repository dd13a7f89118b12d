"""
API module for the REST implementation.
"""

from .rest_api import CcrmRestAPI

__all__ = [
    "CcrmRestAPI",
]
