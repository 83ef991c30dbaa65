"""
Host engine layer.

The real rendering engine is external; `Engine` is the contract the tracking
core consumes and `HeadlessEngine` is an in-process implementation for the
CLI and tests.
"""

from .base import Component, Engine, SceneObject, ViewComponent, XRSessionHandle
from .headless import HeadlessEngine

__all__ = [
    "Component",
    "Engine",
    "SceneObject",
    "ViewComponent",
    "XRSessionHandle",
    "HeadlessEngine",
]
