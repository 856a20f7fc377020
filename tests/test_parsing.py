"""Unit tests for body cleaning, section detection and field extraction."""

import pytest

from salary_ingest.config.models import FieldMapping, SourceConfig
from salary_ingest.parsing import (
    SectionMatch,
    clean_body,
    clean_value,
    detect_sections,
    extract_fields,
    prepare_body,
)


@pytest.fixture
def small_source():
    return SourceConfig(
        name="Small",
        country="Belgium",
        section_titles=("1. PERSONALIA", "4. SALARY"),
        field_mappings={
            "age": FieldMapping(pattern=r"^[^\w\n]*Age:[ \t]*(.+)$", type="integer"),
            "gross_salary": FieldMapping(
                pattern=r"^[^\w\n]*Gross salary/month:[ \t]*(.+)$", type="currency", required=True
            ),
            "work_city": r"^[^\w\n]*City/region of work:[ \t]*(.+)$",
        },
    )


class TestCleanBody:
    def test_line_endings_and_invisible_characters(self):
        body = "Age:\u200b 30\r\nCity:\u00a0\u00a0Gent\r"
        assert clean_body(body) == "Age: 30\nCity: Gent\n"

    def test_control_characters_removed_lines_kept(self):
        assert clean_body("a\x07b\n\n  c  ") == "ab\n\nc"

    def test_empty(self):
        assert clean_body("") == ""
        assert clean_body(None) == ""

    def test_prepare_body_removes_bold(self):
        assert prepare_body("**Age:** 30\n__City:__ Gent") == "Age: 30\nCity: Gent"


class TestCleanValue:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            (" **€ 3.400** ", "3.400"),
            ("`Data   Engineer`", "Data Engineer"),
            ("~~3000~~ 3200", "3000 3200"),
            ("*Gent*", "Gent"),
            ("snake_case_title", "snake_case_title"),
        ],
    )
    def test_strips_markup(self, raw, expected):
        assert clean_value(raw) == expected

    @pytest.mark.parametrize("raw", [None, "-", "N/A", "/", "  ", "?", "nvt", "NVT"])
    def test_placeholders(self, raw):
        assert clean_value(raw) is None


class TestDetectSections:
    def test_verbatim_titles(self):
        report = detect_sections("1. PERSONALIA\nAge: 30\n4. SALARY", ["1. PERSONALIA", "4. SALARY"])
        assert report.complete
        assert report.matched_by["4. SALARY"] is SectionMatch.VERBATIM

    def test_collapsed_whitespace(self):
        report = detect_sections("1.  PERSONALIA", ["1. PERSONALIA"])
        assert report.found == ["1. PERSONALIA"]

    def test_markup_and_case(self):
        report = detect_sections("## **1\\. Personalia**\nAge: 30", ["1. PERSONALIA"])
        assert report.found == ["1. PERSONALIA"]
        assert report.matched_by["1. PERSONALIA"] is SectionMatch.MARKUP

    def test_missing_titles_in_order(self):
        report = detect_sections("## **1. PERSONALIA**\nAge: 30", ["1. PERSONALIA", "4. SALARY", "6. OTHER"])
        assert report.missing == ["4. SALARY", "6. OTHER"]
        assert not report.complete

    def test_no_titles_configured(self):
        assert detect_sections("anything", ()).complete


class TestExtractFields:
    def test_fields_in_configured_order(self, small_source):
        body = "1. PERSONALIA\n- **Age:** 30\n4. SALARY\n- Gross salary/month: € 3.400"
        fields = extract_fields(body, small_source)

        assert list(fields) == ["age", "gross_salary", "work_city"]
        assert fields["age"].raw_text == "30"
        assert fields["gross_salary"].raw_text == "3.400"
        assert fields["work_city"].raw_text is None
        assert not fields["work_city"].found

    def test_labels_case_insensitive(self, small_source):
        fields = extract_fields("* age: 41", small_source)
        assert fields["age"].raw_text == "41"

    def test_value_stops_at_line_end(self, small_source):
        fields = extract_fields("Age: 30\nCity/region of work: Leuven", small_source)
        assert fields["age"].raw_text == "30"
        assert fields["work_city"].raw_text == "Leuven"

    def test_placeholder_answer_is_not_found(self, small_source):
        fields = extract_fields("Age: -", small_source)
        assert fields["age"].raw_text is None

    def test_default_source_on_full_post(self, besalary_source, complete_post_body):
        fields = extract_fields(complete_post_body, besalary_source)

        assert len(fields) == len(besalary_source.field_mappings)
        assert fields["job_title"].raw_text == "Data Engineer"
        assert fields["work_experience"].raw_text == "6"
        assert fields["multinational"].raw_text == "Yes"
        assert fields["commute_method"].raw_text == "Car"
        assert fields["reports"].raw_text == "0"
        assert fields["mobility_budget"].raw_text == "Company car"
