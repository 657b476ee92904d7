"""Content and parameter inheritance across product versions."""

from .inheritance_engine import InheritanceEngine, InheritanceLookup, InheritanceOutcome

__all__ = [
    'InheritanceEngine',
    'InheritanceLookup',
    'InheritanceOutcome',
]
