"""
Rule Evaluator - fluent rule chains over a notifiable target.

Each rule method resolves a selector to (field name, value), tests the
rule's predicate and, when the predicate fails, records one notification
on the target. Every method returns the evaluator, so rules chain:

    (RuleEvaluator(customer)
        .if_null_or_empty(lambda c: c.name)
        .if_lower_than(lambda c: c.name, 3)
        .if_not_email(lambda c: c.email, message="Invalid e-mail"))

Rules never stop the chain. Two failing rules on the same field record two
notifications, so one pass reports every problem with the target.

Messages: a non-empty ``message`` argument is used verbatim. Otherwise the
rule's template from the message catalog is filled with the field name and
the rule parameters.

Ordering rules (>=, <=, ranges) accept anything comparable: int, float,
Decimal, date, datetime. A None value never satisfies them.
"""

import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from . import checks
from .accessor import Selector, resolve
from .checksum import is_valid_cnpj, is_valid_cpf
from .config_loader import NULL_STRING_POLICIES, get_config
from .messages import MessageCatalog, get_catalog

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RuleEvaluator(Generic[T]):
    """Evaluates chained rules against one target and records notifications."""

    def __init__(
        self,
        target: T,
        catalog: Optional[MessageCatalog] = None,
        null_string_policy: Optional[str] = None,
    ):
        """
        Args:
            target: Object being validated. Must provide
                add_notification(field, message).
            catalog: Message templates, defaults to the process-wide catalog
            null_string_policy: "guard" or "raise", defaults to the
                configured policy

        Raises:
            ValueError: If null_string_policy is not recognized
        """
        if null_string_policy is not None and null_string_policy not in NULL_STRING_POLICIES:
            raise ValueError(
                f"null_string_policy must be one of {NULL_STRING_POLICIES}, "
                f"got {null_string_policy!r}"
            )
        self._target = target
        self._catalog = catalog
        self._null_string_policy = null_string_policy

    @property
    def target(self) -> T:
        return self._target

    @property
    def catalog(self) -> MessageCatalog:
        if self._catalog is None:
            self._catalog = get_catalog()
        return self._catalog

    @property
    def null_string_policy(self) -> str:
        if self._null_string_policy is None:
            self._null_string_policy = get_config().get_null_string_policy()
        return self._null_string_policy

    # --- Core -----------------------------------------------------------------

    def _notify(self, rule: str, name: str, message: str, *params: Any) -> None:
        text = message if message else self.catalog.format(rule, name, *params)
        self._target.add_notification(name, text)
        logger.debug(f"{rule} failed on {type(self._target).__name__}.{name}: {text}")

    def _evaluate(
        self,
        rule: str,
        selector: Selector,
        failed: Callable[[Any], bool],
        message: str,
        *params: Any,
    ) -> "RuleEvaluator[T]":
        name, value = resolve(self._target, selector)
        if failed(value):
            self._notify(rule, name, message, *params)
        return self

    def _evaluate_string(
        self,
        rule: str,
        selector: Selector,
        failed: Callable[[str], bool],
        fails_on_null: bool,
        message: str,
        *params: Any,
    ) -> "RuleEvaluator[T]":
        """
        Like _evaluate, for rules that need a real string.

        A None value fails when fails_on_null is set, or raises TypeError
        under the "raise" null string policy.
        """
        name, value = resolve(self._target, selector)
        if value is None:
            if self.null_string_policy == "raise":
                raise TypeError(f"{rule}: field {name!r} is None, expected a string")
            failure = fails_on_null
        else:
            failure = failed(value)
        if failure:
            self._notify(rule, name, message, *params)
        return self

    # --- Presence -------------------------------------------------------------

    def if_null_or_empty(self, selector: Selector, message: str = "") -> "RuleEvaluator[T]":
        """Notify if the string is None or empty."""
        return self._evaluate("if_null_or_empty", selector, checks.is_null_or_empty, message)

    def if_null_or_white_space(self, selector: Selector, message: str = "") -> "RuleEvaluator[T]":
        """Notify if the string is None, empty or only whitespace."""
        return self._evaluate(
            "if_null_or_white_space", selector, checks.is_null_or_white_space, message
        )

    def if_not_null_or_empty(self, selector: Selector, message: str = "") -> "RuleEvaluator[T]":
        """Notify if the string has content."""
        return self._evaluate(
            "if_not_null_or_empty",
            selector,
            lambda v: not checks.is_null_or_empty(v),
            message,
        )

    # --- Length ---------------------------------------------------------------
    #
    # Missing values are only checked by if_null_or_empty_or_invalid_length.

    def if_null_or_empty_or_invalid_length(
        self, selector: Selector, min_length: int, max_length: int, message: str = ""
    ) -> "RuleEvaluator[T]":
        """Notify if the string is missing, blank, or its length is outside [min, max]."""
        return self._evaluate(
            "if_null_or_empty_or_invalid_length",
            selector,
            lambda v: checks.length_outside(v, min_length, max_length),
            message,
            min_length,
            max_length,
        )

    def if_lower_than(
        self, selector: Selector, min_length: int, message: str = ""
    ) -> "RuleEvaluator[T]":
        """Notify if a non-empty string is shorter than min_length."""
        return self._evaluate(
            "if_lower_than",
            selector,
            lambda v: checks.length_below(v, min_length),
            message,
            min_length,
        )

    # Alias, older callers spell it "then"
    if_lower_then = if_lower_than

    def if_greater_than(
        self, selector: Selector, max_length: int, message: str = ""
    ) -> "RuleEvaluator[T]":
        """Notify if a non-empty string is longer than max_length."""
        return self._evaluate(
            "if_greater_than",
            selector,
            lambda v: checks.length_above(v, max_length),
            message,
            max_length,
        )

    def if_length_no_equal(
        self, selector: Selector, length: int, message: str = ""
    ) -> "RuleEvaluator[T]":
        """Notify if a non-empty string does not have exactly length characters."""
        return self._evaluate(
            "if_length_no_equal",
            selector,
            lambda v: checks.length_differs(v, length),
            message,
            length,
        )

    # --- Formats --------------------------------------------------------------

    def if_not_email(self, selector: Selector, message: str = "") -> "RuleEvaluator[T]":
        return self._evaluate_string(
            "if_not_email", selector, lambda v: not checks.is_email(v), True, message
        )

    def if_not_url(self, selector: Selector, message: str = "") -> "RuleEvaluator[T]":
        """Notify unless the value is an http(s) URL."""
        return self._evaluate_string(
            "if_not_url", selector, lambda v: not checks.is_url(v), True, message
        )

    def if_not_match(self, selector: Selector, pattern, message: str = "") -> "RuleEvaluator[T]":
        """
        Notify unless the value matches pattern from its first character.

        Args:
            pattern: Regular expression string or compiled pattern
        """
        return self._evaluate_string(
            "if_not_match",
            selector,
            lambda v: not checks.matches(v, pattern),
            True,
            message,
            getattr(pattern, "pattern", pattern),
        )

    def if_not_guid(self, selector: Selector, message: str = "") -> "RuleEvaluator[T]":
        """Notify unless the value is a GUID string. None always notifies."""
        return self._evaluate(
            "if_not_guid", selector, lambda v: not checks.is_guid(v), message
        )

    def if_not_cpf(self, selector: Selector, message: str = "") -> "RuleEvaluator[T]":
        """Notify unless the value is a CPF with valid check digits."""
        return self._evaluate(
            "if_not_cpf", selector, lambda v: not is_valid_cpf(v), message
        )

    def if_not_cnpj(self, selector: Selector, message: str = "") -> "RuleEvaluator[T]":
        """Notify unless the value is a CNPJ with valid check digits."""
        return self._evaluate(
            "if_not_cnpj", selector, lambda v: not is_valid_cnpj(v), message
        )

    # --- Comparisons ----------------------------------------------------------

    def if_greater_or_equals_than(
        self, selector: Selector, threshold: Any, message: str = ""
    ) -> "RuleEvaluator[T]":
        """Notify if value >= threshold."""
        return self._evaluate(
            "if_greater_or_equals_than",
            selector,
            lambda v: checks.greater_or_equal(v, threshold),
            message,
            threshold,
        )

    def if_lower_or_equals_than(
        self, selector: Selector, threshold: Any, message: str = ""
    ) -> "RuleEvaluator[T]":
        """Notify if value <= threshold."""
        return self._evaluate(
            "if_lower_or_equals_than",
            selector,
            lambda v: checks.lower_or_equal(v, threshold),
            message,
            threshold,
        )

    def if_not_range(
        self, selector: Selector, low: Any, high: Any, message: str = ""
    ) -> "RuleEvaluator[T]":
        """Notify if value is outside [low, high]. The bounds are allowed."""
        return self._evaluate(
            "if_not_range",
            selector,
            lambda v: checks.outside_closed_range(v, low, high),
            message,
            low,
            high,
        )

    def if_range(
        self, selector: Selector, low: Any, high: Any, message: str = ""
    ) -> "RuleEvaluator[T]":
        """
        Notify if value is strictly between low and high.

        This is the inverse question to if_not_range, on the open interval:
        if_range(sel, 1, 10) notifies for 5 but not for 1 or 10.
        """
        return self._evaluate(
            "if_range",
            selector,
            lambda v: checks.inside_open_range(v, low, high),
            message,
            low,
            high,
        )

    def if_equals_zero(self, selector: Selector, message: str = "") -> "RuleEvaluator[T]":
        return self._evaluate("if_equals_zero", selector, lambda v: v == 0, message)

    # --- Contents and equality ------------------------------------------------

    def if_not_contains(self, selector: Selector, text: str, message: str = "") -> "RuleEvaluator[T]":
        """Notify if text is not a substring of the value."""
        return self._evaluate_string(
            "if_not_contains",
            selector,
            lambda v: not checks.contains(v, text),
            True,
            message,
            text,
        )

    def if_contains(self, selector: Selector, text: str, message: str = "") -> "RuleEvaluator[T]":
        """Notify if text is a substring of the value."""
        return self._evaluate_string(
            "if_contains",
            selector,
            lambda v: checks.contains(v, text),
            False,
            message,
            text,
        )

    def if_not_are_equals(self, selector: Selector, other: Any, message: str = "") -> "RuleEvaluator[T]":
        """Notify if value != other. Strings compare case-insensitively."""
        def failed(v):
            return not checks.equals_ignore_case(v, other)

        if isinstance(other, str):
            return self._evaluate_string(
                "if_not_are_equals", selector, failed, True, message, other
            )
        return self._evaluate("if_not_are_equals", selector, failed, message, other)

    def if_are_equals(self, selector: Selector, other: Any, message: str = "") -> "RuleEvaluator[T]":
        """Notify if value == other. Strings compare case-insensitively."""
        def failed(v):
            return checks.equals_ignore_case(v, other)

        if isinstance(other, str):
            return self._evaluate_string(
                "if_are_equals", selector, failed, False, message, other
            )
        return self._evaluate("if_are_equals", selector, failed, message, other)

    # --- Booleans -------------------------------------------------------------

    def if_true(self, selector: Selector, message: str = "") -> "RuleEvaluator[T]":
        return self._evaluate("if_true", selector, lambda v: v is True, message)

    def if_false(self, selector: Selector, message: str = "") -> "RuleEvaluator[T]":
        return self._evaluate("if_false", selector, lambda v: v is False, message)

    # --- Nulls and collections ------------------------------------------------

    def if_null(self, selector: Selector, message: str = "") -> "RuleEvaluator[T]":
        return self._evaluate("if_null", selector, lambda v: v is None, message)

    def if_not_null(self, selector: Selector, message: str = "") -> "RuleEvaluator[T]":
        return self._evaluate("if_not_null", selector, lambda v: v is not None, message)

    def if_collection_is_null(self, selector: Selector, message: str = "") -> "RuleEvaluator[T]":
        return self._evaluate(
            "if_collection_is_null", selector, lambda v: v is None, message
        )

    def if_collection_is_null_or_empty(
        self, selector: Selector, message: str = ""
    ) -> "RuleEvaluator[T]":
        """Notify if the collection is None or has no items."""
        return self._evaluate(
            "if_collection_is_null_or_empty",
            selector,
            checks.is_null_or_empty_collection,
            message,
        )
