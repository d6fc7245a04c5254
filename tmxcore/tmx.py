import os
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

from . import codec
from .config.tmx_options import (
    DEFAULT_CREATION_TOOL,
    DEFAULT_CREATION_TOOL_VERSION,
    SEGMENTATION_MODES,
    TmxOptions,
)
from .logger import get_logger
from .resources import Resource, ResourceArray, ResourcePlural, ResourceString
from .segmenter import SegmentationMode, segment
from .tmx_obj import TranslationUnit, TranslationVariant

logger = get_logger(__name__)

# Plural category that collects the extra categories of richer target languages
OTHER_CATEGORY = "other"


class Tmx:
    """
    A TMX 1.4b translation memory: an insertion ordered list of translation
    units plus an index from unit identity to unit.

    All additions go through add_translation_unit(), so a logical string is
    stored once and re-adding it only unions its variants.
    """

    def __init__(self, options: Union[TmxOptions, Mapping, None] = None, **kwargs):
        if isinstance(options, TmxOptions):
            options = options.model_dump()
        options = TmxOptions.model_validate({**dict(options or {}), **kwargs})

        self.version: float = options.version
        self.source_locale: str = options.source_locale
        self.segtype: str = options.segmentation
        self.datatype: str = options.datatype
        self.properties: Dict[str, str] = dict(options.properties)
        self.creationtool: Optional[str] = options.creationtool
        self.creationtoolversion: Optional[str] = options.creationtoolversion
        self.path: Optional[str] = options.path

        self._units: List[TranslationUnit] = []
        self._index: Dict[str, TranslationUnit] = {}

    # --- Accessors -------------------------------------------------------

    def get_path(self) -> Optional[str]:
        return self.path

    def set_path(self, path: str):
        self.path = path

    def get_properties(self) -> Dict[str, str]:
        return self.properties

    def set_properties(self, properties: Mapping[str, str]):
        self.properties = dict(properties)

    def add_property(self, name: str, value: str):
        self.properties[name] = value

    def get_version(self) -> str:
        return codec.version_string(self.version or 1.4)

    def get_translation_units(self) -> List[TranslationUnit]:
        """Returns a copy of the unit list; mutate only through add_translation_unit()."""
        return list(self._units)

    def size(self) -> int:
        return len(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def creation_tool(self) -> str:
        return self.creationtool or self.properties.get("creationtool") or DEFAULT_CREATION_TOOL

    def creation_tool_version(self) -> str:
        return (
            self.creationtoolversion
            or self.properties.get("creationtoolversion")
            or DEFAULT_CREATION_TOOL_VERSION
        )

    def options(self) -> TmxOptions:
        """The options that recreate an empty document with this one's settings."""
        return TmxOptions(
            source_locale=self.source_locale,
            version=self.version,
            segmentation=self.segtype,
            datatype=self.datatype,
            properties=self.properties,
            creationtool=self.creationtool,
            creationtoolversion=self.creationtoolversion,
            path=self.path,
        )

    def clear(self):
        self._units = []
        self._index = {}

    # --- Units -----------------------------------------------------------

    def add_translation_unit(self, unit: TranslationUnit) -> TranslationUnit:
        """
        Adds a unit, or merges its variants into the unit already stored
        under the same identity. Returns the unit that holds the content.
        """
        key = unit.hash_key()
        existing = self._index.get(key)
        if existing is not None:
            added = existing.add_variants(unit.variants)
            logger.debug(f"Tmx {self.path}: merged {added} new variant(s) into '{existing.source}'")
            return existing

        self._units.append(unit)
        self._index[key] = unit
        logger.debug(f"Tmx {self.path}: added translation unit '{unit.source}' ({unit.source_locale})")
        return unit

    def add_translation_units(self, units: Iterable[TranslationUnit]):
        for unit in units:
            self.add_translation_unit(unit)

    def find_unit(self, unit: TranslationUnit) -> Optional[TranslationUnit]:
        """Returns the stored unit with the same identity as the given one."""
        return self._index.get(unit.hash_key())

    # --- Ingestion -------------------------------------------------------

    def segment_string(self, string: Optional[str], locale: Optional[str]) -> List[str]:
        mode = self.segtype if self.segtype in SEGMENTATION_MODES else SegmentationMode.PARAGRAPH
        return segment(string, locale, mode)

    def _new_unit(self, res: Resource, string: str) -> TranslationUnit:
        tu = TranslationUnit(
            source=string,
            source_locale=res.source_locale,
            datatype=res.datatype,
        )
        tu.add_variant(TranslationVariant(locale=res.source_locale, string=string))
        tu.add_properties(res.unit_properties())
        return tu

    def _add_aligned(self, res: Resource, sources: Sequence[str], targets: Sequence[str]) -> List[TranslationUnit]:
        """One unit per source segment; the i-th target segment translates the i-th source segment."""
        stored = []
        for i, string in enumerate(sources):
            tu = self._new_unit(res, string)
            if i < len(targets) and targets[i]:
                tu.add_variant(TranslationVariant(locale=res.target_locale, string=targets[i]))
            stored.append(self.add_translation_unit(tu))
        return stored

    def _wants_target(self, res: Resource) -> bool:
        return bool(res.target_locale) and res.target_locale != self.source_locale

    def add_resource(self, res: Optional[Resource]):
        """
        Converts a resource into translation units and adds them. Resources
        whose source locale differs from this document's are ignored.
        """
        if res is None:
            return
        if not isinstance(res, (ResourceString, ResourceArray, ResourcePlural)):
            raise TypeError(f"Cannot add a {type(res).__name__} to a tmx document")
        if res.source_locale != self.source_locale:
            logger.debug(
                f"Tmx {self.path}: ignoring resource {res.key} with source locale "
                f"{res.source_locale}, expected {self.source_locale}"
            )
            return

        if isinstance(res, ResourceString):
            self._add_string(res)
        elif isinstance(res, ResourceArray):
            self._add_array(res)
        else:
            self._add_plural(res)

    def add_resources(self, resources: Iterable[Resource]):
        for res in resources:
            self.add_resource(res)

    def _add_string(self, res: ResourceString):
        sources = self.segment_string(res.source, res.source_locale)
        targets = self.segment_string(res.target, res.target_locale) if self._wants_target(res) else []
        self._add_aligned(res, sources, targets)

    def _add_array(self, res: ResourceArray):
        target_array = res.target_array if self._wants_target(res) and res.target_array else []
        for i, element in enumerate(res.source_array):
            sources = self.segment_string(element, res.source_locale)
            target = target_array[i] if i < len(target_array) else None
            targets = self.segment_string(target, res.target_locale)
            self._add_aligned(res, sources, targets)

    def _add_plural(self, res: ResourcePlural):
        target_plurals = res.target_plurals if self._wants_target(res) and res.target_plurals else {}
        other_units: List[TranslationUnit] = []

        for category, string in res.source_plurals.items():
            sources = self.segment_string(string, res.source_locale)
            # The target language may use fewer categories than the source
            targets = self.segment_string(target_plurals.get(category), res.target_locale)
            stored = self._add_aligned(res, sources, targets)
            if category == OTHER_CATEGORY:
                other_units = stored

        # Categories only the target language distinguishes are all forms of
        # the plural concept the source calls "other"
        for category, string in target_plurals.items():
            if category in res.source_plurals:
                continue
            segments = self.segment_string(string, res.target_locale)
            for i, segment_text in enumerate(segments):
                if i >= len(other_units):
                    logger.warning(
                        f"Tmx {self.path}: no '{OTHER_CATEGORY}' source segment for segment {i} "
                        f"of extra plural category '{category}' of {res.key}; dropping it"
                    )
                    break
                other_units[i].add_variant(TranslationVariant(locale=res.target_locale, string=segment_text))

    # --- Merge & diff ----------------------------------------------------

    def merge(self, others: Optional[Iterable["Tmx"]] = None) -> "Tmx":
        """
        Returns a new document holding this document's units and those of
        every other document, variants unioned per unit identity. None of
        the inputs is modified.
        """
        merged = Tmx(self.options())
        for tu in self._units:
            merged.add_translation_unit(tu.clone())
        for other in others or []:
            for tu in other._units:
                merged.add_translation_unit(tu.clone())
        return merged

    def diff(self, other: "Tmx") -> "Tmx":
        """
        Returns a new document with what `other` adds to this one: units
        this document lacks entirely, and for shared units the variants this
        document lacks (preceded by the unit's source variant). Content that
        exists only in this document is never reported.
        """
        result = Tmx(self.options())
        for tu in other._units:
            existing = self._index.get(tu.hash_key())
            if existing is None:
                result.add_translation_unit(tu.clone())
                continue

            new_variants = [v for v in tu.variants if not existing.has_variant(v)]
            if not new_variants:
                continue
            changed = existing.clone(with_variants=False)
            changed.add_variant(existing.source_variant())
            changed.add_variants(new_variants)
            result.add_translation_unit(changed)
        return result

    # --- Serialization ---------------------------------------------------

    def serialize(self) -> str:
        return codec.serialize(self)

    def deserialize(self, xml: Union[str, bytes], strict: bool = False) -> List[TranslationUnit]:
        return codec.deserialize(self, xml, strict=strict)

    def write(self, target_dir: Optional[str] = None):
        """Writes the serialized document to its path, relative to target_dir if given."""
        if not self.path:
            return
        full_path = os.path.join(target_dir, self.path) if target_dir else self.path
        # Serialize first so a unit that cannot be written leaves no partial file behind
        xml = self.serialize()
        directory = os.path.dirname(full_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(full_path, "w", encoding="utf-8") as f:
            f.write(xml)
        logger.debug(f"Wrote {self.size()} translation units to {full_path}")

    @classmethod
    def load(cls, path: str, **options) -> "Tmx":
        if not os.path.exists(path):
            raise FileNotFoundError(f"File not found: {path}")
        tmx = cls(path=path, **options)
        with open(path, "rb") as f:
            tmx.deserialize(f.read())
        return tmx
