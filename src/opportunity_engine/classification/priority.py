"""Priority classifier with fixed rule precedence and explanation trail."""

from typing import Callable, Iterable, Optional

from pydantic import BaseModel, Field

from opportunity_engine.models.opportunity import OpportunityRecord, PriorityBucket

from .rules import apply_aspirational_rule, apply_passive_income_rule, apply_quick_win_rule


class PriorityResult(BaseModel):
    """Bucket assigned to a record plus the rules consulted on the way."""

    bucket: PriorityBucket
    explanations: list[str] = Field(default_factory=list)
    matched_rule: Optional[str] = Field(
        default=None,
        description="Rule that assigned the bucket (quick_win|passive_income|aspirational); None for the default",
    )


RuleFn = Callable[[OpportunityRecord], tuple[bool, str]]


class PriorityClassifier:
    """
    Assigns one PriorityBucket per record. Rules are evaluated in order and
    the first match wins; later rules are never consulted. Records matching
    no rule are Growth. Nothing is cached: buckets are derived on every call.
    """

    def __init__(self) -> None:
        self._rules: list[tuple[str, RuleFn, PriorityBucket]] = [
            ("quick_win", apply_quick_win_rule, PriorityBucket.QUICK_WIN),
            ("passive_income", apply_passive_income_rule, PriorityBucket.PASSIVE_INCOME),
            ("aspirational", apply_aspirational_rule, PriorityBucket.ASPIRATIONAL),
        ]

    def explain(self, record: OpportunityRecord) -> PriorityResult:
        """Classify and return the explanation trail."""
        explanations: list[str] = []
        for rule_id, rule_fn, bucket in self._rules:
            matched, explanation = rule_fn(record)
            explanations.append(explanation)
            if matched:
                return PriorityResult(bucket=bucket, explanations=explanations, matched_rule=rule_id)
        explanations.append("Growth: default bucket")
        return PriorityResult(bucket=PriorityBucket.GROWTH, explanations=explanations)

    def classify(self, record: OpportunityRecord) -> PriorityBucket:
        return self.explain(record).bucket

    def classify_many(self, records: Iterable[OpportunityRecord]) -> list[PriorityBucket]:
        """One bucket per record, in input order."""
        return [self.classify(r) for r in records]


_default_classifier = PriorityClassifier()


def classify(record: OpportunityRecord) -> PriorityBucket:
    """Priority bucket for a normalized record."""
    return _default_classifier.classify(record)


def explain(record: OpportunityRecord) -> PriorityResult:
    """Priority bucket for a record with the explanation trail."""
    return _default_classifier.explain(record)
