"""Bucket collection: groups results by URL rule plus a catch-all."""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..results.models import Result
from ..utils.errors import ConfigurationError

logger = logging.getLogger(__name__)

CATCH_ALL_LABEL = "Remaining"


@dataclass(frozen=True)
class BucketRule:
    """Matches result URLs either by prefix or by regular expression."""

    label: str
    pattern: str
    match: str = "prefix"  # "prefix" or "regex"

    MATCH_TYPES = ("prefix", "regex")

    def __post_init__(self) -> None:
        if not self.label:
            raise ConfigurationError("Bucket rule label must not be empty")
        if self.match not in self.MATCH_TYPES:
            raise ConfigurationError(
                f"Bucket {self.label}: invalid match type {self.match!r} (must be prefix or regex)"
            )
        if self.match == "regex":
            try:
                compiled = re.compile(self.pattern)
            except re.error as e:
                raise ConfigurationError(f"Bucket {self.label}: invalid regex {self.pattern!r}: {e}") from e
            object.__setattr__(self, "_compiled", compiled)

    def matches(self, url: str) -> bool:
        if self.match == "prefix":
            return url.startswith(self.pattern)
        return self._compiled.search(url) is not None


@dataclass
class Bucket:
    """A named partition of results and the URLs seen in it."""

    label: str
    results: List[Result] = field(default_factory=list)
    urls: Dict[str, int] = field(default_factory=dict)

    def add(self, result: Result) -> None:
        self.results.append(result)
        self.urls[result.url] = self.urls.get(result.url, 0) + 1

    def __len__(self) -> int:
        return len(self.results)

    def __str__(self) -> str:
        return self.label


class BucketCollection:
    """Accumulates results into rule-defined buckets plus a catch-all.

    Rules are tried in insertion order and the first match wins. Adding the
    same results twice records them twice; the collection keeps no notion of
    result identity.
    """

    def __init__(self, rules: Optional[Iterable[BucketRule]] = None):
        self._rules: List[BucketRule] = []
        self._buckets: Dict[str, Bucket] = {}
        self._catch_all = Bucket(label=CATCH_ALL_LABEL)
        for rule in rules or ():
            self.add_rule(rule)

    @property
    def rules(self) -> List[BucketRule]:
        return list(self._rules)

    def add_rule(self, rule: BucketRule) -> None:
        """Append a rule; its bucket starts empty."""
        if rule.label in self._buckets:
            raise ConfigurationError(f"Duplicate bucket label: {rule.label}")
        self._rules.append(rule)
        self._buckets[rule.label] = Bucket(label=rule.label)
        logger.debug(f"Added bucket rule {rule.label} ({rule.match}: {rule.pattern})")

    def _bucket_for(self, url: str) -> Bucket:
        for rule in self._rules:
            if rule.matches(url):
                return self._buckets[rule.label]
        return self._catch_all

    def add_results(self, results: Iterable[Result]) -> None:
        added = 0
        for result in results:
            self._bucket_for(result.url).add(result)
            added += 1
        logger.debug(
            f"Distributed {added} results over {len(self._rules)} buckets, "
            f"{len(self._catch_all)} in catch-all"
        )

    def buckets(self) -> List[Bucket]:
        """Named buckets in rule order."""
        return [self._buckets[rule.label] for rule in self._rules]

    def catch_all_bucket(self) -> Bucket:
        return self._catch_all

    def total_results(self) -> int:
        return sum(len(bucket) for bucket in self.buckets()) + len(self._catch_all)
