import pytest

from coursecatalog.fields import clean_description, extract_credit_hours, extract_fields, extract_terms
from coursecatalog.prereqs import isolate_clause_with_reason

BODY = "Study of algorithms. Prerequisite: CS 2201, CS 2212. FALL, SPRING. [3]"


@pytest.mark.parametrize("body,expected", [
    ("Intro. [3]", 3.0),
    ("Lab section. [1.5]", 1.5),
    ("Seminar. [ 4 ]\n", 4.0),
    ("No credit bracket here.", None),
    ("Bracket [3] not at the end.", None),
    ("Too precise. [1.25]", None),
    ("Zero credit. [0]", None),
    ("", None),
])
def test_credit_hours(body, expected):
    assert extract_credit_hours(body) == expected


def test_terms_are_a_set():
    assert extract_terms(BODY) == frozenset({"FALL", "SPRING"})
    assert extract_terms("Offered yearly. Fall and Spring. [3]") == frozenset({"FALL", "SPRING"})
    assert extract_terms("Offered yearly.\nfall, SPRING, fall") == frozenset({"FALL", "SPRING"})
    assert extract_terms("No term listed.") == frozenset()


def test_term_words_in_prose_are_kept():
    body = "The fall of Rome and the winter campaigns. [3]"
    fields = extract_fields(body)
    assert fields.terms_offered == frozenset()
    assert fields.description == "The fall of Rome and the winter campaigns."


def test_only_the_term_list_is_removed():
    body = "Spring training and summer research. SUMMER. [1]"
    fields = extract_fields(body)
    assert fields.terms_offered == frozenset({"SUMMER"})
    assert fields.description == "Spring training and summer research."


def test_description_strips_clause_terms_and_credits():
    match = isolate_clause_with_reason(BODY, "CS 3250")
    assert clean_description(BODY, match.span) == "Study of algorithms."


def test_description_without_clause():
    assert clean_description("Introduction to   programming.\nFALL, SPRING, SUMMER. [3]") == "Introduction to programming."


def test_fields_are_independent():
    fields = extract_fields("Topics vary by semester.")
    assert fields.credit_hours is None
    assert fields.terms_offered == frozenset()
    assert fields.description == "Topics vary by semester."

    fields = extract_fields("[3]")
    assert fields.credit_hours == 3.0
    assert fields.description == ""


def test_empty_body():
    assert extract_fields(None) == (None, frozenset(), "")
