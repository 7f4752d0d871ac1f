"""Vellum Template package — the executor that runs one template body.

Re-exports all public symbols so that ``from vellum.template import Template``
works without knowing the module layout.

"""

from vellum.template.alias import Alias
from vellum.template.core import Template
from vellum.template.operations import OPERATIONS
from vellum.template.sections import Section, SectionMode, SectionStore

__all__ = [
    "OPERATIONS",
    "Alias",
    "Section",
    "SectionMode",
    "SectionStore",
    "Template",
]
