"""Domain entities."""

from actcoll.domain.entities.action import Action, ActionVersion
from actcoll.domain.entities.action_collection import (
    ActionCollection,
    CollectionVariable,
    CollectionVersion,
)
from actcoll.domain.entities.page import Page

__all__ = [
    "Action",
    "ActionCollection",
    "ActionVersion",
    "CollectionVariable",
    "CollectionVersion",
    "Page",
]
