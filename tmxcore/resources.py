"""
Localizable resources that can be ingested into a Tmx document.

Three closed kinds, each with its own payload:
- ResourceString: a single source string and its optional translation
- ResourceArray: an ordered list of source strings and a parallel target list
- ResourcePlural: plural category -> string maps for source and target
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union


@dataclass
class _ResourceBase:
    source_locale: str
    target_locale: Optional[str] = None
    key: Optional[str] = None
    context: Optional[str] = None
    flavor: Optional[str] = None
    project: Optional[str] = None
    datatype: str = "unknown"

    def unit_properties(self) -> Dict[str, Optional[str]]:
        return {
            "x-context": self.context,
            "x-flavor": self.flavor,
            "x-project": self.project,
        }


@dataclass
class ResourceString(_ResourceBase):
    source: str = ""
    target: Optional[str] = None


@dataclass
class ResourceArray(_ResourceBase):
    source_array: List[str] = field(default_factory=list)
    target_array: Optional[List[str]] = None


@dataclass
class ResourcePlural(_ResourceBase):
    # Keys are CLDR plural categories: zero, one, two, few, many, other
    source_plurals: Dict[str, str] = field(default_factory=dict)
    target_plurals: Optional[Dict[str, str]] = None


Resource = Union[ResourceString, ResourceArray, ResourcePlural]
