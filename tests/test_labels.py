"""
Tests for the label tables.
"""

import json

import pytest

from deal_prompt.errors import ConfigurationError
from deal_prompt.labels import (
    CATEGORIES,
    DEFAULT_LABELS,
    UNKNOWN_LABEL,
    LabelTable,
    load_label_table,
    lookup,
    normalize_code,
)


class TestLookup:
    """Test code -> label resolution."""

    def test_known_codes(self):
        assert lookup('assetType', '0') == 'Multifamily'
        assert lookup('assetType', '54') == 'Residential Development'
        assert lookup('loanType', '2') == 'Construction'
        assert lookup('loanTerm', '1') == 'Bridge'

    @pytest.mark.parametrize('category', CATEGORIES)
    def test_unknown_code_in_every_category(self, category):
        assert lookup(category, '999') == UNKNOWN_LABEL
        assert lookup(category, '') == UNKNOWN_LABEL
        assert lookup(category, None) == UNKNOWN_LABEL

    def test_unknown_category(self):
        assert lookup('propertyClass', '0') == 'Unknown'

    def test_numeric_codes_resolve_like_strings(self):
        assert lookup('loanType', 1) == 'Purchase'
        assert lookup('loanTerm', 0) == 'Permanent'
        assert lookup('assetType', 3.0) == 'Office'

    def test_booleans_and_fractions_are_not_codes(self):
        assert lookup('loanTerm', True) == UNKNOWN_LABEL
        assert lookup('assetType', 1.5) == UNKNOWN_LABEL

    def test_whitespace_is_trimmed(self):
        assert lookup('assetType', ' 7 ') == 'Hospitality'

    def test_explicit_table(self):
        table = LabelTable({'loanType': {'0': 'Refi'}})
        assert lookup('loanType', '0', table) == 'Refi'
        assert lookup('loanTerm', '0', table) == UNKNOWN_LABEL


class TestNormalizeCode:
    def test_normalization(self):
        assert normalize_code(5) == '5'
        assert normalize_code(5.0) == '5'
        assert normalize_code(' 5') == '5'
        assert normalize_code(False) is None
        assert normalize_code([5]) is None


class TestLabelTable:
    """Test table immutability and loading."""

    def test_default_categories(self):
        assert DEFAULT_LABELS.categories == ['assetType', 'loanType', 'loanTerm']
        assert len(DEFAULT_LABELS.table('assetType')) == 55

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_LABELS.table('loanType')['3'] = 'Mezzanine'

    def test_source_mapping_changes_do_not_leak(self):
        source = {'loanType': {'0': 'Refinance'}}
        table = LabelTable(source)
        source['loanType']['0'] = 'Changed'
        assert table.lookup('loanType', '0') == 'Refinance'

    def test_load_overrides_and_keeps_defaults(self, tmp_path):
        path = tmp_path / 'labels.json'
        path.write_text(json.dumps({'loanType': {'0': 'Refi', '3': 'Mezzanine'}}))

        table = load_label_table(path)

        assert table.lookup('loanType', '3') == 'Mezzanine'
        assert table.lookup('loanType', '1') == UNKNOWN_LABEL
        assert table.lookup('assetType', '0') == 'Multifamily'

    def test_load_malformed_file(self, tmp_path):
        path = tmp_path / 'labels.json'
        path.write_text('{not json')

        with pytest.raises(ConfigurationError) as exc_info:
            load_label_table(path)
        assert exc_info.value.context['path'] == str(path)

    def test_load_rejects_non_mapping_category(self, tmp_path):
        path = tmp_path / 'labels.json'
        path.write_text(json.dumps({'loanType': ['Refinance']}))

        with pytest.raises(ConfigurationError):
            load_label_table(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_label_table(tmp_path / 'missing.json')
