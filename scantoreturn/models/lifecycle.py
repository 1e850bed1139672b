"""Views a scanned tag moves through."""
from enum import Enum


class TagView(str, Enum):
    LANDING = "landing"
    RESOLVING = "resolving"
    ACTIVATING = "activating"
    FOUND = "found"
    SUCCESS = "success"
    ERROR = "error"
