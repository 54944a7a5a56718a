"""
Report configuration loading and validation.

A report configuration file (YAML or JSON) holds a single ``report``
section describing:
- Which reporter to run and its histogram boundaries
- The success status range used by the metrics aggregator
- URL bucket rules for the text report
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from ..buckets.collection import BucketRule
from ..metrics.aggregator import SuccessPolicy
from ..metrics.histogram import BelowFirstPolicy, parse_boundaries
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

REPORT_TYPES = ("text", "json", "hist")

__all__ = [
    "ConfigurationError",
    "ReportConfig",
    "ReportConfigValidator",
    "example_config",
    "load_config_file",
    "load_report_config",
    "validate_config_file",
]


@dataclass
class ReportConfig:
    """Validated report settings."""

    type: str = "text"
    histogram_buckets: Optional[str] = None
    below_first_boundary: str = BelowFirstPolicy.CLAMP
    success_policy: SuccessPolicy = field(default_factory=SuccessPolicy)
    show_urls: bool = False
    buckets: List[BucketRule] = field(default_factory=list)


def _buckets_literal(value: Union[str, List[Any]]) -> str:
    if isinstance(value, list):
        return "[" + ",".join(str(v) for v in value) + "]"
    return str(value)


class ReportConfigValidator:
    """Validates the ``report`` section of a configuration."""

    KNOWN_FIELDS = {
        'type',
        'histogram_buckets',
        'below_first_boundary',
        'success_status_range',
        'show_urls',
        'buckets',
    }

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> List[str]:
        """Validate a full configuration dictionary."""
        errors = []

        if not isinstance(config, dict) or 'report' not in config:
            errors.append("Missing report section")
            return errors

        report = config['report']
        if not isinstance(report, dict):
            errors.append("report section must be a mapping")
            return errors

        unknown = set(report.keys()) - cls.KNOWN_FIELDS
        if unknown:
            logger.warning(f"Ignoring unknown report fields: {sorted(unknown)}")

        report_type = report.get('type', 'text')
        if report_type not in REPORT_TYPES:
            errors.append(f"Invalid report type: {report_type} (must be text/json/hist)")

        if 'histogram_buckets' in report:
            try:
                parse_boundaries(_buckets_literal(report['histogram_buckets']))
            except ConfigurationError as e:
                errors.append(str(e))
        elif report_type == 'hist':
            errors.append("Histogram report requires histogram_buckets")

        policy = report.get('below_first_boundary', BelowFirstPolicy.CLAMP)
        if policy not in BelowFirstPolicy.ALL:
            errors.append(f"Invalid below_first_boundary: {policy} (must be clamp/drop)")

        if 'success_status_range' in report:
            errors.extend(cls._validate_status_range(report['success_status_range']))

        if not isinstance(report.get('show_urls', False), bool):
            errors.append("show_urls must be true or false")

        if 'buckets' in report:
            errors.extend(cls._validate_buckets(report['buckets']))

        return errors

    @classmethod
    def _validate_status_range(cls, value: Any) -> List[str]:
        if not isinstance(value, list) or len(value) != 2 or not all(isinstance(v, int) for v in value):
            return [f"success_status_range must be two integers [min, max), got {value}"]
        low, high = value
        if not 100 <= low < high <= 600:
            return [f"Invalid success_status_range [{low}, {high}) (need 100 <= min < max <= 600)"]
        return []

    @classmethod
    def _validate_buckets(cls, buckets: Any) -> List[str]:
        if not isinstance(buckets, list):
            return ["buckets must be a list"]

        errors = []
        labels = set()
        for i, bucket in enumerate(buckets):
            if not isinstance(bucket, dict):
                errors.append(f"Bucket {i}: must be a mapping")
                continue
            missing = {'label', 'pattern'} - set(bucket.keys())
            if missing:
                errors.append(f"Bucket {bucket.get('label', i)} missing fields: {missing}")
                continue
            if not isinstance(bucket['label'], str) or not isinstance(bucket['pattern'], str):
                errors.append(f"Bucket {i}: label and pattern must be strings")
                continue
            if bucket['label'] in labels:
                errors.append(f"Duplicate bucket label: {bucket['label']}")
            labels.add(bucket['label'])
            try:
                BucketRule(str(bucket['label']), str(bucket['pattern']), bucket.get('match', 'prefix'))
            except ConfigurationError as e:
                errors.append(str(e))
        return errors

    @classmethod
    def build(cls, config: Dict[str, Any]) -> ReportConfig:
        """Validate and convert to a ReportConfig, raising on any error."""
        errors = cls.validate(config)
        if errors:
            raise ConfigurationError(
                f"Configuration has {len(errors)} errors: " + "; ".join(errors)
            )

        report = config['report']
        buckets_value = report.get('histogram_buckets')
        success_range = report.get('success_status_range', [200, 400])
        return ReportConfig(
            type=report.get('type', 'text'),
            histogram_buckets=_buckets_literal(buckets_value) if buckets_value is not None else None,
            below_first_boundary=report.get('below_first_boundary', BelowFirstPolicy.CLAMP),
            success_policy=SuccessPolicy(success_range[0], success_range[1]),
            show_urls=report.get('show_urls', False),
            buckets=[
                BucketRule(str(b['label']), str(b['pattern']), b.get('match', 'prefix'))
                for b in report.get('buckets', [])
            ],
        )


def load_config_file(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML (``.yaml``/``.yml``) or JSON configuration file."""
    config_file = Path(config_path)
    with open(config_file) as f:
        if config_file.suffix in ['.yaml', '.yml']:
            config = yaml.safe_load(f)
        else:
            config = json.load(f)
    return config or {}


def load_report_config(config_path: Union[str, Path]) -> ReportConfig:
    """Load and validate a configuration file into a ReportConfig."""
    config = ReportConfigValidator.build(load_config_file(config_path))
    logger.info(f"Loaded report configuration from {config_path} ({config.type} report, "
                f"{len(config.buckets)} bucket rules)")
    return config


def validate_config_file(config_path: Union[str, Path]) -> Tuple[bool, List[str], Optional[Dict[str, Any]]]:
    """
    Load and validate a configuration file.

    Returns:
        (is_valid, errors, config)
    """
    config = load_config_file(config_path)
    errors = ReportConfigValidator.validate(config)

    if errors:
        logger.warning(f"Configuration has {len(errors)} validation errors")
        for error in errors[:10]:
            logger.warning(f"  - {error}")
        if len(errors) > 10:
            logger.warning(f"  ... and {len(errors) - 10} more errors")

    return len(errors) == 0, errors, config


def example_config() -> Dict[str, Any]:
    """Example configuration written by ``loadreport generate-config``."""
    return {
        "report": {
            "type": "text",
            "histogram_buckets": "[0,10ms,50ms,100ms,500ms,1s]",
            "below_first_boundary": "clamp",
            "success_status_range": [200, 400],
            "show_urls": True,
            "buckets": [
                {"label": "API", "pattern": "/api/", "match": "regex"},
                {"label": "CDN", "pattern": "https://cdn.example.com/", "match": "prefix"},
                {"label": "Static", "pattern": r"\.(css|js|png)$", "match": "regex"},
            ],
        }
    }
