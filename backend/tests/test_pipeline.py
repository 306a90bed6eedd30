"""
End-to-end pipeline tests: ordering, ratings, failures, notices, serialization, concurrency.
Run from backend: python -m pytest tests/test_pipeline.py -v
"""
import pytest


def test_water_sugar_red_dye():
    """Three ingredients in position order with ratings safe, caution, avoid."""
    from labelscan.pipeline import run_scan
    from labelscan.models.scan_result import SafetyRating
    result = run_scan("Ingredients: Water, Sugar, Red Dye 40", 0.9)
    assert [i.rating for i in result.ingredients] == [
        SafetyRating.SAFE,
        SafetyRating.CAUTION,
        SafetyRating.AVOID,
    ]
    assert [i.position for i in result.ingredients] == [1, 2, 3]
    assert [i.display_name for i in result.ingredients] == ["Water", "Sugar", "Red dye 40"]
    assert result.overall_confidence == 90
    assert result.raw_text == "Ingredients: Water, Sugar, Red Dye 40"


def test_too_short_text_fails():
    from labelscan.errors import EmptyOrTooShortText, ErrorKind
    from labelscan.pipeline import run_scan
    with pytest.raises(EmptyOrTooShortText) as exc:
        run_scan("Hi", 0.8)
    assert exc.value.kind == ErrorKind.EMPTY_OR_TOO_SHORT_TEXT
    assert exc.value.kind.fatal
    with pytest.raises(EmptyOrTooShortText):
        run_scan("   \n\n  ", 0.8)


def test_no_valid_ingredients_fails():
    """Only noise segments -> NoValidIngredientsParsed."""
    from labelscan.errors import NoValidIngredientsParsed, ScanError
    from labelscan.pipeline import run_scan
    with pytest.raises(NoValidIngredientsParsed) as exc:
        run_scan("Ingredients: 1, 2, 3, %, (x)", 0.5)
    assert isinstance(exc.value, ScanError)
    assert exc.value.to_dict()["kind"] == "NO_VALID_INGREDIENTS_PARSED"


def test_unknown_ingredient_is_caution_and_noted():
    from labelscan.errors import ErrorKind
    from labelscan.knowledge import DEFAULT_RECORD
    from labelscan.models.scan_result import SafetyRating
    from labelscan.pipeline import run_scan
    result = run_scan("Ingredients: Xanthan Gum, Water", 0.95)
    gum = result.ingredients[0]
    assert gum.rating == SafetyRating.CAUTION
    assert gum.explanation == DEFAULT_RECORD.explanation
    assert gum.sources == ("general",)
    assert gum.confidence == 70
    assert ErrorKind.UNKNOWN_INGREDIENT in result.notices


def test_missing_marker_uses_whole_text():
    from labelscan.errors import ErrorKind
    from labelscan.pipeline import run_scan
    result = run_scan("Water, Sugar, Salt", 88)
    assert [i.canonical_name for i in result.ingredients] == ["water", "sugar", "salt"]
    assert ErrorKind.NO_INGREDIENT_MARKER_FOUND in result.notices
    assert result.overall_confidence == 88


def test_parenthetical_sub_ingredients_stay_together():
    from labelscan.pipeline import run_scan
    result = run_scan("Ingredients: Vitamin C (Ascorbic Acid, E300), Salt", 1.0)
    assert [i.canonical_name for i in result.ingredients] == ["vitamin c", "salt"]
    assert result.overall_confidence == 100


def test_duplicates_not_merged_and_noise_dropped():
    """Positions count surviving ingredients in order of appearance."""
    from labelscan.pipeline import run_scan
    result = run_scan("Ingredients: Salt, 2%, Salt, ., Sugar", 0.7)
    assert [i.canonical_name for i in result.ingredients] == ["salt", "salt", "sugar"]
    assert [i.position for i in result.ingredients] == [1, 2, 3]


def test_canonical_too_short_dropped():
    """'A (vitamin)' canonicalizes to 'a' and is dropped."""
    from labelscan.pipeline import run_scan
    result = run_scan("Ingredients: A (vitamin), Water", 0.7)
    assert [i.canonical_name for i in result.ingredients] == ["water"]


def test_allergens_concerns_and_sources_carried():
    from labelscan.knowledge import SAFETY_TABLE
    from labelscan.pipeline import run_scan
    result = run_scan("Ingredients: Whole Milk Powder, Sodium Benzoate (Preservative)", 0.6)
    milk, benzoate = result.ingredients
    assert milk.allergens == ("milk",)
    assert benzoate.sources == SAFETY_TABLE["sodium benzoate"].sources
    assert benzoate.concerns == ("may pose health risks", "consider avoiding")
    assert result.allergens == ["milk"]


def test_confidence_bounds():
    from labelscan.pipeline import run_scan
    result = run_scan(
        "Ingredients: Water, Cane Sugar, Artificial Colors, Spirulina, Mystery Blend Extract", 0.42
    )
    for ing in result.ingredients:
        assert 0 <= ing.confidence <= 98
    assert 0 <= result.overall_confidence <= 100


@pytest.mark.parametrize("given,expected", [(0, 0), (0.5, 50), (1, 100), (1.5, 2), (73.4, 73), (100, 100)])
def test_to_percent(given, expected):
    from labelscan.pipeline import to_percent
    assert to_percent(given) == expected


@pytest.mark.parametrize("bad", [-0.1, 100.5])
def test_to_percent_rejects_out_of_range(bad):
    from labelscan.pipeline import to_percent
    with pytest.raises(ValueError):
        to_percent(bad)


def test_single_ingredient_flags_low_confidence_list():
    from labelscan.errors import ErrorKind
    from labelscan.pipeline import run_scan
    result = run_scan("Ingredients: Water", 0.9)
    assert ErrorKind.LOW_CONFIDENCE_LIST in result.notices


def test_to_dict_shape():
    from labelscan.pipeline import run_scan
    d = run_scan("Ingredients: Water, Sugar, Red Dye 40", 0.9).to_dict()
    assert set(d) >= {"ingredients", "confidence", "rawText"}
    assert d["confidence"] == 90
    first = d["ingredients"][0]
    assert set(first) >= {"name", "rating", "explanation", "confidence", "position", "sources"}
    assert first["rating"] == "safe"
    assert d["overallRating"] == "caution"
    assert d["overallScore"] == 60


def test_concurrent_scans_are_independent():
    """Shared read-only knowledge base: parallel runs give identical results."""
    from concurrent.futures import ThreadPoolExecutor
    from labelscan.pipeline import run_scan
    text = "Ingredients: Water, Sugar, Red Dye 40, Xanthan Gum"
    expected = run_scan(text, 0.9)
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: run_scan(text, 0.9), range(32)))
    assert all(r == expected for r in results)


def test_classify_ingredient_single_name():
    """One canonical name classified outside a full scan."""
    from labelscan.knowledge import SAFETY_TABLE
    from labelscan.models.scan_result import SafetyRating
    from labelscan.pipeline import classify_ingredient
    ing = classify_ingredient("sodium benzoate", 4)
    assert ing.position == 4
    assert ing.display_name == "Sodium benzoate"
    assert ing.rating == SafetyRating.AVOID
    assert ing.explanation == SAFETY_TABLE["sodium benzoate"].explanation
    assert ing.confidence == 98
    partial = classify_ingredient("cane sugar", 1)
    assert partial.rating == SafetyRating.CAUTION
    assert partial.confidence == 70


def test_classify_ingredient_with_custom_knowledge_base():
    from labelscan.knowledge.safety_knowledge_base import SafetyKnowledgeBase
    from labelscan.models.scan_result import SafetyRating, SafetyRecord
    from labelscan.pipeline import classify_ingredient
    kb = SafetyKnowledgeBase({"spirulina": SafetyRecord(SafetyRating.SAFE, "algae", ("EFSA",))})
    ing = classify_ingredient("spirulina", 2, kb)
    assert ing.rating == SafetyRating.SAFE
    assert ing.sources == ("EFSA",)
    assert ing.confidence == 98
