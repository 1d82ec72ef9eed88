"""Domain ports package."""

from .lifecycle import Initializable, LifecycleState, Startable
from .realm import Principal, Realm

__all__ = ["Initializable", "LifecycleState", "Principal", "Realm", "Startable"]
