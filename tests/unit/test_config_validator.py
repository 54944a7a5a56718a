"""
Unit tests for report configuration validation.
"""

import json

import pytest
import yaml

from loadreport.utils.config_validator import (
    ConfigurationError,
    ReportConfigValidator,
    example_config,
    load_report_config,
    validate_config_file,
)


def valid_config():
    return {
        'report': {
            'type': 'hist',
            'histogram_buckets': '[0,100ms,500ms]',
            'below_first_boundary': 'drop',
            'success_status_range': [200, 300],
            'show_urls': True,
            'buckets': [
                {'label': 'API', 'pattern': '/api/'},
                {'label': 'Images', 'pattern': r'\.png$', 'match': 'regex'},
            ],
        }
    }


class TestReportConfigValidator:
    """Test validation of the report section."""

    def test_valid_config(self):
        assert ReportConfigValidator.validate(valid_config()) == []

    def test_example_config_is_valid(self):
        assert ReportConfigValidator.validate(example_config()) == []

    def test_missing_report_section(self):
        errors = ReportConfigValidator.validate({'simulation': {}})
        assert errors == ["Missing report section"]

    def test_invalid_type(self):
        config = valid_config()
        config['report']['type'] = 'xml'
        errors = ReportConfigValidator.validate(config)
        assert any('Invalid report type' in e for e in errors)

    def test_hist_requires_buckets(self):
        config = valid_config()
        del config['report']['histogram_buckets']
        errors = ReportConfigValidator.validate(config)
        assert any('requires histogram_buckets' in e for e in errors)

    def test_bad_histogram_buckets(self):
        config = valid_config()
        config['report']['histogram_buckets'] = '[500ms,100ms]'
        errors = ReportConfigValidator.validate(config)
        assert any('strictly increasing' in e for e in errors)

    def test_histogram_buckets_as_list(self):
        config = valid_config()
        config['report']['histogram_buckets'] = ['10ms', '20ms']
        assert ReportConfigValidator.validate(config) == []
        assert ReportConfigValidator.build(config).histogram_buckets == '[10ms,20ms]'

    def test_bad_below_first_policy(self):
        config = valid_config()
        config['report']['below_first_boundary'] = 'ignore'
        errors = ReportConfigValidator.validate(config)
        assert any('below_first_boundary' in e for e in errors)

    @pytest.mark.parametrize("status_range", [[200], [400, 200], [0, 400], [200, 700], "200-400"])
    def test_bad_status_range(self, status_range):
        config = valid_config()
        config['report']['success_status_range'] = status_range
        errors = ReportConfigValidator.validate(config)
        assert any('success_status_range' in e for e in errors)

    def test_bad_show_urls(self):
        config = valid_config()
        config['report']['show_urls'] = 'yes please'
        errors = ReportConfigValidator.validate(config)
        assert any('show_urls' in e for e in errors)

    def test_bucket_errors_collected(self):
        config = valid_config()
        config['report']['buckets'] = [
            {'label': 'API', 'pattern': '/api/'},
            {'label': 'API', 'pattern': '/v2/'},
            {'label': 'NoPattern'},
            {'label': 'Broken', 'pattern': '([', 'match': 'regex'},
        ]
        errors = ReportConfigValidator.validate(config)
        assert len(errors) == 3
        assert any('Duplicate bucket label' in e for e in errors)
        assert any('missing fields' in e for e in errors)
        assert any('invalid regex' in e for e in errors)

    @pytest.mark.parametrize("bucket", [
        {'label': ['a'], 'pattern': '/'},
        {'label': {'name': 'a'}, 'pattern': '/'},
        {'label': 'API', 'pattern': ['/api/']},
    ])
    def test_non_string_bucket_fields(self, bucket):
        config = valid_config()
        config['report']['buckets'] = [bucket]
        errors = ReportConfigValidator.validate(config)
        assert errors == ["Bucket 0: label and pattern must be strings"]

    def test_build(self):
        report = ReportConfigValidator.build(valid_config())
        assert report.type == 'hist'
        assert report.histogram_buckets == '[0,100ms,500ms]'
        assert report.below_first_boundary == 'drop'
        assert report.success_policy.min_status == 200
        assert report.success_policy.max_status == 300
        assert report.show_urls is True
        assert [b.label for b in report.buckets] == ['API', 'Images']
        assert report.buckets[1].match == 'regex'

    def test_build_defaults(self):
        report = ReportConfigValidator.build({'report': {}})
        assert report.type == 'text'
        assert report.histogram_buckets is None
        assert report.success_policy.min_status == 200
        assert report.success_policy.max_status == 400
        assert report.buckets == []

    def test_build_raises_on_errors(self):
        config = valid_config()
        config['report']['type'] = 'xml'
        with pytest.raises(ConfigurationError, match="1 errors"):
            ReportConfigValidator.build(config)


class TestConfigFiles:
    """Test loading configuration files."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "report.yaml"
        path.write_text(yaml.dump(valid_config()))
        report = load_report_config(path)
        assert report.type == 'hist'
        assert len(report.buckets) == 2

    def test_load_json(self, tmp_path):
        path = tmp_path / "report.json"
        path.write_text(json.dumps(valid_config()))
        assert load_report_config(path).below_first_boundary == 'drop'

    def test_load_invalid_raises(self, tmp_path):
        path = tmp_path / "report.yaml"
        path.write_text("report:\n  type: xml\n")
        with pytest.raises(ConfigurationError):
            load_report_config(path)

    def test_validate_config_file(self, tmp_path):
        path = tmp_path / "report.yml"
        path.write_text("report:\n  type: hist\n")
        is_valid, errors, config = validate_config_file(path)
        assert not is_valid
        assert len(errors) == 1
        assert config == {'report': {'type': 'hist'}}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        is_valid, errors, _ = validate_config_file(path)
        assert not is_valid
        assert errors == ["Missing report section"]
