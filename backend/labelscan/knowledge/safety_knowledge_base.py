"""
Static safety knowledge base: canonical ingredient name -> SafetyRecord.
Built once at import, exposed read-only; safe to share across concurrent scans.
Lookup is exact first, then the first table-order key matching as a substring
in either direction, then a Caution default. Unknown ingredients are never Safe.
"""
from types import MappingProxyType
from typing import Literal, Mapping, Tuple
import logging

from labelscan.models.scan_result import SafetyRating, SafetyRecord

logger = logging.getLogger(__name__)

MatchKind = Literal["exact", "partial", "default"]

_S = SafetyRating.SAFE
_C = SafetyRating.CAUTION
_A = SafetyRating.AVOID

# Insertion order is significant: the substring fallback returns the first hit.
_ENTRIES: list[tuple[str, SafetyRecord]] = [
    ("water", SafetyRecord(_S, "Water is essential for life and poses no safety concerns.", ("FDA", "EWG"))),
    ("sugar", SafetyRecord(
        _C, "High sugar content may contribute to weight gain and dental issues. Moderate consumption recommended.",
        ("EWG", "WHO"))),
    ("salt", SafetyRecord(
        _C, "Essential mineral but high sodium intake may contribute to hypertension. Moderate consumption recommended.",
        ("FDA", "WHO"))),
    ("high fructose corn syrup", SafetyRecord(
        _A, "Linked to obesity, diabetes, and metabolic issues when consumed in large quantities over time.",
        ("EWG", "WHO"))),
    ("sodium benzoate", SafetyRecord(
        _A, "Preservative that can form benzene in the presence of vitamin C and may cause sensitivity reactions.",
        ("FDA", "EWG", "CSPI"))),
    ("potassium sorbate", SafetyRecord(
        _C, "Common preservative, generally recognized as safe but may irritate sensitive individuals.",
        ("FDA", "EWG"))),
    ("natural flavors", SafetyRecord(
        _C, "While generally safe, \"natural flavors\" can be vague and may contain allergens or chemicals not listed.",
        ("FDA",))),
    ("artificial flavors", SafetyRecord(
        _A, "Synthetic flavoring compounds whose exact composition is not disclosed on the label.",
        ("EWG", "CSPI"))),
    ("artificial colors", SafetyRecord(
        _A, "Artificial food coloring linked to hyperactivity in children and may cause allergic reactions in sensitive individuals.",
        ("EWG",))),
    ("red dye 40", SafetyRecord(
        _A, "Artificial food coloring that may cause hyperactivity in children and allergic reactions.",
        ("EWG", "CSPI"))),
    ("red 40", SafetyRecord(
        _A, "Artificial food coloring that may cause hyperactivity in children and allergic reactions.",
        ("EWG",))),
    ("yellow 5", SafetyRecord(
        _A, "Artificial food coloring linked to hyperactivity in children and may cause allergic reactions in sensitive individuals.",
        ("EWG",))),
    ("yellow 6", SafetyRecord(
        _A, "Artificial food coloring associated with hyperactivity in sensitive children.",
        ("EWG", "CSPI"))),
    ("blue 1", SafetyRecord(_A, "Synthetic dye with limited long-term safety data.", ("CSPI",))),
    ("caramel color", SafetyRecord(
        _C, "Some manufacturing processes produce 4-MEI, a possible carcinogen.", ("CSPI", "EFSA"))),
    ("aspartame", SafetyRecord(
        _A, "Artificial sweetener classified as possibly carcinogenic; avoid with phenylketonuria.", ("WHO", "CSPI"))),
    ("sucralose", SafetyRecord(
        _C, "Artificial sweetener; emerging research on gut health effects.", ("CSPI",))),
    ("partially hydrogenated", SafetyRecord(
        _A, "Source of trans fats, which raise LDL cholesterol and heart disease risk.", ("FDA", "WHO"))),
    ("monosodium glutamate", SafetyRecord(
        _C, "Flavor enhancer generally recognized as safe; some people report short-term sensitivity.", ("FDA",))),
    ("bht", SafetyRecord(_A, "Synthetic antioxidant preservative with unresolved safety questions.", ("EWG", "CSPI"))),
    ("carrageenan", SafetyRecord(
        _C, "Thickener from seaweed; degraded forms are linked to gut inflammation in animal studies.", ("EWG",))),
    ("palm oil", SafetyRecord(
        _C, "High in saturated fat which may raise cholesterol levels. Environmental concerns with production methods.",
        ("EWG",))),
    ("soybean oil", SafetyRecord(
        _S, "Commonly used cooking oil that is generally recognized as safe by regulatory authorities.", ("FDA",))),
    ("olive oil", SafetyRecord(_S, "Source of monounsaturated fats, safe for consumption.", ("FDA", "EFSA"))),
    ("citric acid", SafetyRecord(
        _S, "Natural preservative derived from citrus fruits, generally safe for consumption.", ("FDA", "EWG"))),
    ("ascorbic acid", SafetyRecord(_S, "Vitamin C, used as an antioxidant and nutrient.", ("FDA",))),
    ("wheat flour", SafetyRecord(_S, "Staple grain ingredient; contains gluten.", ("FDA",))),
    ("lecithin", SafetyRecord(_S, "Emulsifier, usually from soy or sunflower, generally recognized as safe.", ("FDA",))),
    ("yeast", SafetyRecord(_S, "Leavening and fermentation agent, safe for consumption.", ("FDA",))),
    ("cocoa", SafetyRecord(
        _S, "Natural cocoa provides antioxidants and is generally safe for consumption.", ("FDA", "EWG"))),
    ("vanilla", SafetyRecord(_S, "Natural flavoring that is safe for consumption.", ("FDA",))),
    ("baking soda", SafetyRecord(
        _S, "Sodium bicarbonate is a safe leavening agent commonly used in baking.", ("FDA",))),
]

SAFETY_TABLE: Mapping[str, SafetyRecord] = MappingProxyType(dict(_ENTRIES))

DEFAULT_RECORD = SafetyRecord(
    SafetyRating.CAUTION,
    "not in database, prefer simpler ingredient lists",
    ("general",),
)


class SafetyKnowledgeBase:
    """
    Read-only lookup over an ordered table. No method mutates state, so one
    instance serves every scan.
    """

    def __init__(self, table: Mapping[str, SafetyRecord] = SAFETY_TABLE):
        self._table: Mapping[str, SafetyRecord] = MappingProxyType(dict(table))

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, name: object) -> bool:
        return name in self._table

    def has_exact(self, name: str) -> bool:
        return name in self._table

    def match(self, name: str) -> Tuple[SafetyRecord, MatchKind]:
        """
        Resolve a canonical name. Returns (record, "exact"|"partial"|"default").
        Partial: first key in table order with key in name or name in key.
        """
        record = self._table.get(name)
        if record is not None:
            return record, "exact"
        if name:
            for key, rec in self._table.items():
                if key in name or name in key:
                    logger.debug("PARTIAL_MATCH name=%s key=%s", name, key)
                    return rec, "partial"
        logger.info("UNKNOWN_INGREDIENT normalized_key=%s", name)
        return DEFAULT_RECORD, "default"

    def lookup(self, name: str) -> SafetyRecord:
        record, _ = self.match(name)
        return record


_KNOWLEDGE_BASE = SafetyKnowledgeBase()


def get_knowledge_base() -> SafetyKnowledgeBase:
    """Process-wide shared instance."""
    return _KNOWLEDGE_BASE
