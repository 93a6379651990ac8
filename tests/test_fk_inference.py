"""Tests for naming-convention foreign key inference."""

from schemadoc.core.fk_inference import NamingConventionFKDetector


def test_singular_table():
    detector = NamingConventionFKDetector()
    ref = detector.infer("user_id", {"user", "post"})

    assert ref.referenced_table_name == "user"
    assert ref.referenced_column_name == "id"
    assert ref.inferred is True


def test_plural_table():
    ref = NamingConventionFKDetector().infer("category_id", ["categories", "posts"])

    assert ref.referenced_table_name == "categories"
    assert ref.referenced_column_name == "id"


def test_singular_wins_when_both_exist():
    ref = NamingConventionFKDetector().infer("user_id", ["users", "user"])
    assert ref.referenced_table_name == "user"


def test_irregular_plural():
    ref = NamingConventionFKDetector().infer("person_id", ["people"])
    assert ref.referenced_table_name == "people"


def test_no_matching_table():
    assert NamingConventionFKDetector().infer("owner_id", ["users"]) is None


def test_column_without_suffix():
    detector = NamingConventionFKDetector()
    assert detector.infer("user", ["users"]) is None
    assert detector.infer("id", ["users"]) is None
    assert detector.infer("_id", ["users"]) is None


def test_candidates():
    detector = NamingConventionFKDetector()
    assert detector._get_parent_candidates("category_id") == ["category", "categories"]
    assert detector._get_parent_candidates("news_id") == ["news"]
    assert detector._get_parent_candidates("name") == []


def test_configured_suffix_and_column():
    detector = NamingConventionFKDetector({"suffix": "_fk", "referenced_column": "uid"})
    ref = detector.infer("account_fk", ["accounts"])

    assert ref.referenced_table_name == "accounts"
    assert ref.referenced_column_name == "uid"
    assert detector.infer("account_id", ["accounts"]) is None


def test_disabled():
    detector = NamingConventionFKDetector({"enabled": False})
    assert detector.infer("user_id", ["users"]) is None


def test_compound_irregular_plural():
    ref = NamingConventionFKDetector().infer("salesman_id", {"salesmen", "orders"})

    assert ref.referenced_table_name == "salesmen"
    assert ref.referenced_column_name == "id"
