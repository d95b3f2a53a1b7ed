"""
Runtime support for octet buffers: the error model.
"""

from .errors import *
