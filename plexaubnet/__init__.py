"""CIDR overlap and boundary helpers, and envtest asset setup."""

__version__ = "0.1.0"
__all__ = ["envtest_setup", "netutil"]