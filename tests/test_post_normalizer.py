"""Tests for PostNormalizer against full salary template posts."""

import logging
from unittest.mock import patch

import pytest

from salary_ingest.config.models import NormalizationConfig, SourceConfig
from salary_ingest.domain.models import RawPost
from salary_ingest.normalization import PostNormalizer


@pytest.fixture
def normalizer(besalary_source):
    return PostNormalizer(besalary_source)


def _post(post_id, body):
    return RawPost(post_id=post_id, source="BESalary", body=body, flair="Salary")


class TestCompletePost:
    def test_valid(self, normalizer, complete_post_body):
        result = normalizer.normalize(_post("1kq0a1", complete_post_body))

        assert result.is_valid
        assert result.missing_sections == []
        assert result.missing_required == []

    def test_canonical_values(self, normalizer, complete_post_body):
        fields = normalizer.normalize_text(complete_post_body).record.fields

        assert fields["age"] == 29
        assert fields["education"] == "master"
        assert fields["work_experience"] == 6
        assert fields["civil_status"] == "married"
        assert fields["dependents"] == 1
        assert fields["sector"] == "IT"
        assert fields["employee_count"] == "201-500"
        assert fields["multinational"] is True
        assert fields["job_title"] == "Data Engineer"
        assert fields["seniority"] == 3
        assert fields["official_hours"] == 40
        assert fields["average_hours"] == 42
        assert fields["vacation_days"] == 32
        assert fields["gross_salary"] == 4250
        assert fields["net_salary"] == 2810
        assert fields["net_compensation"] == 150
        assert fields["meal_vouchers"] == 8
        assert fields["eco_cheques"] == 250
        assert fields["work_city"] == "Ghent"
        assert fields["commute_distance"] == "35"
        assert fields["commute_method"] == "Car"
        assert fields["telework_days"] == 2
        assert fields["reports"] == 0

    def test_free_text_kept(self, normalizer, complete_post_body):
        fields = normalizer.normalize_text(complete_post_body).record.fields

        assert fields["mobility_budget"] == "Company car"
        assert fields["on_call"] == "No"
        assert fields["day_off_ease"] == "Easy"
        assert fields["stress_level"] == "Sometimes, around releases"

    def test_record_has_one_entry_per_field(self, normalizer, besalary_source, complete_post_body):
        record = normalizer.normalize_text(complete_post_body, post_id="x").record

        assert list(record.fields) == list(besalary_source.field_mappings)
        assert record.source == "BESalary"
        assert record.country == "Belgium"
        assert record.currency == "EUR"
        assert record.post_id == "x"

    def test_json_is_deterministic(self, besalary_source, complete_post_body):
        first = PostNormalizer(besalary_source).normalize_text(complete_post_body, "a").record
        second = PostNormalizer(besalary_source).normalize_text(complete_post_body, "a").record

        assert first.to_json() == second.to_json()
        assert first.fingerprint() == second.fingerprint()
        assert first.to_json().startswith('{"country":"Belgium","currency":"EUR","fields":{')


class TestIncompletePost:
    def test_not_valid(self, normalizer, incomplete_post_body):
        result = normalizer.normalize_text(incomplete_post_body)

        assert not result.is_valid
        assert result.missing_sections == [
            "2. EMPLOYER PROFILE",
            "3. CONTRACT & CONDITIONS",
            "5. MOBILITY",
            "6. OTHER",
        ]
        assert set(result.missing_required) == {"job_title", "work_city"}

    def test_values_still_extracted(self, normalizer, incomplete_post_body):
        fields = normalizer.normalize_text(incomplete_post_body).record.fields

        assert fields["age"] == 34
        assert fields["education"] == "bachelor"
        assert fields["gross_salary"] == 3800
        assert fields["sector"] is None


class TestFrenchCityPost:
    def test_localized_values(self, normalizer, french_city_post_body):
        result = normalizer.normalize_text(french_city_post_body)
        fields = result.record.fields

        assert result.is_valid
        assert fields["education"] == "phd"
        assert fields["work_experience"] == 1
        assert fields["civil_status"] == "single"
        assert fields["sector"] == "Finance"
        assert fields["employee_count"] == "5001+"
        assert fields["multinational"] is True
        assert fields["gross_salary"] == 5500
        assert fields["net_salary"] is None
        assert fields["work_city"] == "Brussels"
        assert fields["commute_distance"] == "10.5"
        assert fields["stress_level"] == "No"


class TestSourceSettings:
    def test_unknown_city_scope_kept_as_text(self):
        source = SourceConfig(
            name="Elsewhere",
            country="Atlantis",
            field_mappings={"work_city": r"^City: (.+)$"},
        )
        fields = PostNormalizer(source).normalize_text("City: Bruxelles").record.fields

        # Unknown countries search every city
        assert fields["work_city"] == "Brussels"

    def test_unrecognized_fields_reported(self):
        source = SourceConfig(
            name="Tiny",
            country="Belgium",
            field_mappings={
                "age": {"pattern": r"^Age: (.+)$", "type": "integer"},
                "multinational": {"pattern": r"^Multinational: (.+)$", "type": "boolean"},
            },
        )
        result = PostNormalizer(source).normalize_text("Age: old\nMultinational: maybe")

        assert result.record.fields == {"age": None, "multinational": None}
        assert result.unrecognized == ["age", "multinational"]
        # No section titles configured, so only required fields decide validity
        assert result.is_valid

    def test_thresholds_from_config(self, besalary_source):
        strict = PostNormalizer(besalary_source, NormalizationConfig(fuzzy_threshold=1.0))
        loose = PostNormalizer(besalary_source)
        body = "- Civil status: Marred"

        assert loose.normalize_text(body).record.fields["civil_status"] == "married"
        assert strict.normalize_text(body).record.fields["civil_status"] is None


class TestBatch:
    def test_failing_post_is_skipped(self, normalizer, complete_post_body, caplog):
        posts = [_post("ok1", complete_post_body), _post("bad", "x"), _post("ok2", complete_post_body)]
        original = normalizer.normalize_text

        def flaky(body, post_id=None):
            if post_id == "bad":
                raise RuntimeError("unexpected")
            return original(body, post_id)

        with patch.object(normalizer, "normalize_text", side_effect=flaky):
            with caplog.at_level(logging.ERROR):
                results = list(normalizer.process_batch(posts))

        assert [r.record.post_id for r in results] == ["ok1", "ok2"]
        assert any(
            getattr(r, "event", None) == "normalization.post.failed" for r in caplog.records
        )
