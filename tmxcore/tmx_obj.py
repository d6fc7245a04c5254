import hashlib
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

# Unit properties that take part in the identity key
IDENTITY_PROPERTIES = ("x-context", "x-flavor", "x-project")


@dataclass(frozen=True)
class TranslationVariant:
    """
    One (locale, text) pair of a translation unit, i.e. a <tuv> element.
    """
    locale: str
    string: str


@dataclass
class TranslationUnit:
    """
    Represents a single translation unit (<tu>) of a TMX file: one source
    segment plus every known translation of it.
    """
    source: str = ""
    source_locale: str = ""
    datatype: str = "unknown"
    comment: Optional[str] = None

    # Insertion ordered; serialized as <prop type="key">value</prop>
    properties: Dict[str, str] = field(default_factory=dict)
    variants: List[TranslationVariant] = field(default_factory=list)

    def hash_key(self) -> str:
        """
        Deterministic identity of the logical string this unit holds.
        Two units with the same key get their variants unioned instead of
        being stored twice.
        """
        parts = [self.source_locale or "", self.source or ""]
        parts.extend(self.properties.get(name) or "" for name in IDENTITY_PROPERTIES)
        sha256 = hashlib.sha256()
        for part in parts:
            encoded = part.encode("utf-8")
            # Length prefix keeps ("ab", "c") and ("a", "bc") apart
            sha256.update(str(len(encoded)).encode("utf-8"))
            sha256.update(b":")
            sha256.update(encoded)
        return sha256.hexdigest()

    def has_variant(self, variant: TranslationVariant) -> bool:
        return variant in self.variants

    def add_variant(self, variant: TranslationVariant) -> bool:
        """Appends the variant unless the same (locale, string) pair is already present."""
        if self.has_variant(variant):
            return False
        self.variants.append(variant)
        return True

    def add_variants(self, variants: Iterable[TranslationVariant]) -> int:
        added = 0
        for variant in variants:
            if self.add_variant(variant):
                added += 1
        return added

    def add_properties(self, properties: Dict[str, Optional[str]]):
        for name, value in properties.items():
            if value is not None:
                self.properties[name] = value

    def get_variants(self) -> List[TranslationVariant]:
        return self.variants

    def get_properties(self) -> Dict[str, str]:
        return self.properties

    def source_variant(self) -> TranslationVariant:
        return TranslationVariant(locale=self.source_locale, string=self.source)

    def clone(self, with_variants: bool = True) -> "TranslationUnit":
        return TranslationUnit(
            source=self.source,
            source_locale=self.source_locale,
            datatype=self.datatype,
            comment=self.comment,
            properties=dict(self.properties),
            variants=list(self.variants) if with_variants else [],
        )

    def to_dict(self):
        return {
            "source": self.source,
            "source_locale": self.source_locale,
            "datatype": self.datatype,
            "properties": dict(self.properties),
            "variants": [{"locale": v.locale, "string": v.string} for v in self.variants],
        }
