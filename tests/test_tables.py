"""Tests for the weight and multiplier tables."""

import pytest

from engine.tables import DEFAULT_TABLES, WeightTables


class TestLookupDefaults:

    def test_unknown_sensitivity_defaults_to_30(self):
        assert DEFAULT_TABLES.sensitivity_weight("favorite_color") == 30
        assert DEFAULT_TABLES.sensitivity_weight(None) == 30

    def test_known_sensitivity_is_case_insensitive(self):
        assert DEFAULT_TABLES.sensitivity_weight("SSN") == 100
        assert DEFAULT_TABLES.sensitivity_weight(" passport ") == 95
        assert DEFAULT_TABLES.sensitivity_weight("medical_id") == 80

    def test_unknown_source_and_severity_default_to_one(self):
        assert DEFAULT_TABLES.source_multiplier("carrier_pigeon") == 1.0
        assert DEFAULT_TABLES.severity_multiplier("urgent") == 1.0
        assert DEFAULT_TABLES.source_multiplier(None) == 1.0

    def test_dark_web_is_highest_reputation(self):
        assert DEFAULT_TABLES.source_multiplier("dark_web") == max(
            DEFAULT_TABLES.source_multipliers.values()
        )


class TestMatchWeights:

    @pytest.mark.parametrize("label,weight", [
        ("ssn_last4", 100),
        ("email", 65),
        ("Email_Address", 65),
        ("home_address", 60),
        ("username", 55),
        ("full_name", 20),
        ("name", 20),
        ("relative", 0),
    ])
    def test_first_substring_match_wins(self, label, weight):
        assert DEFAULT_TABLES.match_weight(label) == weight

    def test_username_is_strong_not_name(self):
        assert DEFAULT_TABLES.is_strong_field("username")
        assert not DEFAULT_TABLES.is_name_field("username")
        assert DEFAULT_TABLES.is_name_field("full_name")
        assert not DEFAULT_TABLES.is_strong_field("employer")


class TestRecency:

    @pytest.mark.parametrize("days,multiplier", [
        (0, 1.3),
        (29, 1.3),
        (30, 1.1),
        (89, 1.1),
        (90, 1.0),
        (400, 1.0),
    ])
    def test_bands(self, days, multiplier):
        assert DEFAULT_TABLES.recency_multiplier(days) == multiplier

    def test_missing_date_assumes_30_days(self):
        assert DEFAULT_TABLES.recency_multiplier(None) == 1.1


class TestPlaceholderHosts:

    @pytest.mark.parametrize("host", [
        "example.com", "www.example.com", "EXAMPLE.ORG", "localhost", "people.test", "foo.invalid",
    ])
    def test_placeholders(self, host):
        assert DEFAULT_TABLES.is_placeholder_host(host)

    @pytest.mark.parametrize("host", ["spokeo.com", "notexample.com", "haveibeenpwned.com"])
    def test_real_hosts(self, host):
        assert not DEFAULT_TABLES.is_placeholder_host(host)


class TestImmutability:

    def test_tables_cannot_be_mutated(self):
        with pytest.raises(TypeError):
            DEFAULT_TABLES.source_multipliers["forum"] = 9.9

    def test_overrides_return_new_instance(self):
        custom = DEFAULT_TABLES.with_overrides(source_multipliers={"forum": 1.5})
        assert custom.source_multiplier("forum") == 1.5
        assert DEFAULT_TABLES.source_multiplier("forum") == 1.3
        assert custom.source_multiplier("paste") == 1.5

    def test_from_settings_applies_forum_multiplier(self):
        class FakeSettings:
            FORUM_MULTIPLIER = 1.5

        assert WeightTables.from_settings(FakeSettings()).source_multiplier("forum") == 1.5
