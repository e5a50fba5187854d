# prodaccess/__init__.py

"""
prodaccess - Production Access Credential Materializer
======================================================

This module takes short-lived credentials issued after authentication and
installs them where SSH, Vault, kubectl and PKCS#12 consumers expect them.
"""

# ---- Package metadata ----
__version__ = "0.9.0"
__title__ = "Production Access"
__short_title__ = "prodaccess"
__author__ = "DreamHack Tech"
__license__ = "MIT"


# ---- Public exports ----
__all__ = [
    "__version__",
    "__title__",
    "__short_title__",
    "__author__",
    "__license__",
]
