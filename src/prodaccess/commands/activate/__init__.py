from .register import register

__all__ = ["register"]
