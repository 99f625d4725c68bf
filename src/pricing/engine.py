"""Price rule engine — picks the rule that governs a part's displayed price."""

from __future__ import annotations

from typing import Any, Iterable, Optional

import structlog

from src.pricing.lot import get_lot_price
from src.schemas.pricing import PriceResolution

logger = structlog.get_logger()

# Most specific scope wins
SCOPE_RANK = {
    "part": 5,
    "vin": 4,
    "model": 3,
    "make": 2,
    "all": 1,
}

RULE_TYPES = ("discount", "markup")
AMOUNT_TYPES = ("percent", "fixed")


def _norm(value: Any) -> str:
    return str(value).strip().lower()


def _amount(rule: Any) -> Optional[float]:
    """Positive rule amount, or None when the stored value is unusable."""
    try:
        amount = float(rule.amount)
    except (TypeError, ValueError):
        return None
    return amount if amount > 0 else None


def _created_ts(rule: Any) -> float:
    created_at = getattr(rule, "created_at", None)
    return created_at.timestamp() if created_at is not None else float("-inf")


class PriceRuleEngine:
    """Resolves discounts and markups with scope-ranked matching.

    Precedence: part > vin > model > make > all. Among rules of the same
    scope the newest (``created_at``) wins; undated rules come after dated
    ones and keep their input order.
    """

    def resolve(self, part: Any, rules: Iterable[Any]) -> PriceResolution:
        """Apply the winning rule (if any) to the part's lot price.

        Args:
            part: Anything with id, make, model, vin, price, quantity, price_per
            rules: Price rules, ideally already filtered to active ones

        Returns:
            PriceResolution with the final price and badge flags
        """
        base_price = get_lot_price(
            part.price,
            getattr(part, "quantity", None),
            getattr(part, "price_per", None),
        )

        rule = self.select_rule(part, rules)
        if rule is None:
            return PriceResolution(original_price=base_price, final_price=base_price)

        amount = float(rule.amount)
        if rule.amount_type == "percent":
            adjustment = base_price * (amount / 100)
        else:
            adjustment = amount

        if rule.type == "discount":
            final_price = max(0.0, base_price - adjustment)
        else:
            final_price = base_price + adjustment

        logger.debug(
            "price_rule_applied",
            part_id=str(getattr(part, "id", None)),
            rule_id=str(getattr(rule, "id", None)),
            scope=rule.scope,
            base_price=base_price,
            final_price=final_price,
        )

        return PriceResolution(
            original_price=base_price,
            final_price=final_price,
            has_discount=rule.type == "discount",
            has_markup=rule.type == "markup",
            applied_rule=rule,
        )

    def select_rule(self, part: Any, rules: Iterable[Any]) -> Optional[Any]:
        """Return the single most specific matching rule, or None."""
        matched = self._match_rules(part, rules)
        if not matched:
            return None
        # max() keeps the first of equal keys, so input order breaks full ties
        return max(matched, key=lambda r: (SCOPE_RANK[r.scope], _created_ts(r)))

    def _match_rules(self, part: Any, rules: Iterable[Any]) -> list[Any]:
        """Filter to well-formed active rules whose scope matches the part."""
        matched = []
        for rule in rules:
            if getattr(rule, "is_active", True) is False:
                continue
            if (
                rule.type not in RULE_TYPES
                or rule.amount_type not in AMOUNT_TYPES
                or rule.scope not in SCOPE_RANK
                or _amount(rule) is None
            ):
                logger.debug("price_rule_malformed", rule_id=str(getattr(rule, "id", None)))
                continue
            if self._scope_matches(part, rule):
                matched.append(rule)
        return matched

    @staticmethod
    def _scope_matches(part: Any, rule: Any) -> bool:
        scope = rule.scope
        if scope == "all":
            return True

        value = rule.scope_value
        if value is None or not str(value).strip():
            return False

        if scope == "part":
            part_id = getattr(part, "id", None)
            return part_id is not None and str(part_id) == value

        # make / model / vin: case-insensitive, surrounding whitespace ignored
        part_value = getattr(part, scope, None)
        if part_value is None:
            return False
        return _norm(part_value) == _norm(value)


_engine = PriceRuleEngine()


def apply_price_rules(part: Any, rules: Iterable[Any]) -> PriceResolution:
    """Resolve a part's displayed price against a list of rules."""
    return _engine.resolve(part, rules)
