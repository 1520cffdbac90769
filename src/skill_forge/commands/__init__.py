"""Slash command invocation."""

from .invoker import InvocationResult, Invoker
from .parser import Invocation, InvocationParser

__all__ = [
    "Invocation",
    "InvocationParser",
    "InvocationResult",
    "Invoker",
]
