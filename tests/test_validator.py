"""Tests for the finding validator's matching rules."""

import pytest

from engine import FindingValidator, RejectionReason
from models import ValidatedMatch
from conftest import make_finding


@pytest.fixture
def validator():
    return FindingValidator()


class TestSourceRules:

    def test_missing_url_rejected(self, validator):
        assert validator.check(make_finding(source_url=None)) == RejectionReason.MISSING_SOURCE
        assert validator.check(make_finding(source_url="   ")) == RejectionReason.MISSING_SOURCE

    @pytest.mark.parametrize("url", [
        "https://example.com/profile/1",
        "https://people.example.com/jane",
        "http://localhost:8080/x",
        "https://records.test/1",
    ])
    def test_placeholder_url_rejected(self, validator, url):
        assert validator.check(make_finding(source_url=url)) == RejectionReason.PLACEHOLDER_SOURCE

    def test_url_without_scheme_accepted(self, validator):
        assert validator.check(make_finding(source_url="www.whitepages.com/name/jane")) is None


class TestConfidence:

    def test_below_threshold_rejected(self, validator):
        assert validator.check(make_finding(confidence=49)) == RejectionReason.LOW_CONFIDENCE

    def test_threshold_is_inclusive(self, validator):
        assert validator.check(make_finding(confidence=50)) is None

    def test_strict_threshold(self):
        strict = FindingValidator(min_confidence=70)
        assert strict.check(make_finding(confidence=60)) == RejectionReason.LOW_CONFIDENCE
        assert strict.check(make_finding(confidence=70)) is None

    def test_missing_confidence_defaults_to_70(self, validator):
        finding = make_finding(confidence=None)
        assert finding.confidence == 70
        assert validator.check(finding) is None

    @pytest.mark.parametrize("confidence", ["nan", float("nan"), float("inf"), 500, 100.5, -5])
    def test_out_of_range_confidence_rejected(self, validator, confidence):
        finding = make_finding(confidence=confidence)
        assert validator.check(finding) == RejectionReason.INVALID_CONFIDENCE
        assert validator.validate(finding) is None

    def test_bounds_are_valid(self):
        lenient = FindingValidator(min_confidence=0)
        assert lenient.check(make_finding(confidence=0)) is None
        assert lenient.check(make_finding(confidence=100)) is None


class TestFieldRules:

    def test_empty_fields_rejected(self, validator):
        assert validator.check(make_finding(matched_fields=[])) == RejectionReason.NO_MATCHED_FIELDS

    @pytest.mark.parametrize("fields", [["full_name"], ["name"], ["Full_Name", "name"]])
    def test_name_only_rejected(self, validator, fields):
        assert validator.check(make_finding(matched_fields=fields)) == RejectionReason.NAME_ONLY

    def test_name_with_one_other_field_rejected(self, validator):
        finding = make_finding(matched_fields=["full_name", "email"])
        assert validator.check(finding) == RejectionReason.NAME_UNCORROBORATED

    def test_name_with_two_other_fields_accepted(self, validator):
        finding = make_finding(matched_fields=["full_name", "email", "phone"])
        assert validator.check(finding) is None

    def test_name_with_two_weak_fields_accepted(self, validator):
        finding = make_finding(matched_fields=["full_name", "employer", "relative"])
        assert validator.check(finding) is None

    @pytest.mark.parametrize("field", ["email", "phone", "username", "ssn", "dob", "address", "alias"])
    def test_single_strong_field_accepted(self, validator, field):
        assert validator.check(make_finding(matched_fields=[field])) is None

    def test_username_alone_is_not_a_name_match(self, validator):
        assert validator.check(make_finding(matched_fields=["username"])) is None

    def test_bare_string_field_is_one_label(self, validator):
        finding = make_finding(matched_fields="full_name", data_exposed="Email")
        assert finding.matched_fields == ["full_name"]
        assert finding.data_exposed == ["email"]
        assert validator.check(finding) == RejectionReason.NAME_ONLY
        assert validator.validate(finding) is None

    @pytest.mark.parametrize("value", [42, {"email": True}, True])
    def test_non_list_fields_treated_as_empty(self, validator, value):
        finding = make_finding(matched_fields=value, matched_values=value)
        assert finding.matched_fields == []
        assert finding.matched_values == []
        assert validator.check(finding) == RejectionReason.NO_MATCHED_FIELDS

    def test_single_weak_field_rejected(self, validator):
        assert validator.check(make_finding(matched_fields=["employer"])) == RejectionReason.WEAK_MATCH

    def test_two_weak_fields_accepted(self, validator):
        assert validator.check(make_finding(matched_fields=["employer", "relative"])) is None

    def test_check_identity_ignores_provenance(self, validator):
        finding = make_finding(source_url=None, confidence=10, matched_fields=["email"])
        assert validator.check(finding) is not None
        assert validator.check_identity(finding) is None


class TestValidate:

    def test_returns_validated_match(self, validator):
        result = validator.validate(make_finding(matched_fields=["email", "phone"]))
        assert isinstance(result, ValidatedMatch)
        assert result.matched_fields == ["email", "phone"]
        assert 0 <= result.match_score <= 100

    def test_rejection_returns_none(self, validator):
        assert validator.validate(make_finding(matched_fields=["full_name"])) is None

    def test_deterministic(self, validator):
        finding = make_finding(matched_fields=["full_name", "email", "phone"])
        assert validator.validate(finding) == validator.validate(finding)

    def test_labels_normalized(self, validator):
        finding = make_finding(matched_fields=[" EMAIL ", "", None], source_type="Data_Broker")
        assert finding.matched_fields == ["email"]
        assert finding.source_type == "data_broker"
        assert validator.check(finding) is None

    def test_null_labels_default(self, validator):
        finding = make_finding(source_type=None, severity=None)
        assert finding.source_type == "other"
        assert finding.severity == "low"
        assert validator.check(finding) is None
