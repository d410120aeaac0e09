"""
Message catalog - templates for generated notification messages.

Templates are keyed by rule identifier (the RuleEvaluator method name)
and use positional placeholders. {0} is always the field name; the rule's
parameters follow in the order the rule method takes them:

    if_not_range: "The field {0} must be between {1} and {2}"

Catalogs are read from messages.yaml (bundled, or the file local-config
points to) and are immutable once built.

## Usage

    from notification_lib.messages import get_catalog

    catalog = get_catalog()
    catalog.format("if_lower_than", "Name", 5)

**Testing:**

    from notification_lib.config_loader import ConfigLoader
    from notification_lib.messages import reset_catalog

    reset_catalog()
    catalog = get_catalog(ConfigLoader("/path/to/local-config.yaml"))
"""

import logging
import string
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .config_loader import ConfigLoader, get_config

logger = logging.getLogger(__name__)

# Rule identifier -> number of rule parameters the template may use after
# the field name. A rule with arity 2 fills {0}, {1} and {2}.
RULES: Dict[str, int] = {
    "if_null_or_empty": 0,
    "if_null_or_white_space": 0,
    "if_not_null_or_empty": 0,
    "if_null_or_empty_or_invalid_length": 2,
    "if_lower_than": 1,
    "if_greater_than": 1,
    "if_length_no_equal": 1,
    "if_not_email": 0,
    "if_not_url": 0,
    "if_not_match": 1,
    "if_greater_or_equals_than": 1,
    "if_lower_or_equals_than": 1,
    "if_not_range": 2,
    "if_range": 2,
    "if_not_contains": 1,
    "if_contains": 1,
    "if_not_are_equals": 1,
    "if_are_equals": 1,
    "if_true": 0,
    "if_false": 0,
    "if_not_cpf": 0,
    "if_not_cnpj": 0,
    "if_not_guid": 0,
    "if_collection_is_null": 0,
    "if_collection_is_null_or_empty": 0,
    "if_equals_zero": 0,
    "if_null": 0,
    "if_not_null": 0,
}

_FORMATTER = string.Formatter()


def _fields(template: str):
    """Yield every replacement field name in template, nested ones included."""
    for _, field, format_spec, _ in _FORMATTER.parse(template):
        if field is not None:
            yield field
            if format_spec:
                yield from _fields(format_spec)


def _check_placeholders(rule: str, template: str, arity: int, locale: str) -> None:
    """
    Fail unless every placeholder is a positional index from 0 to arity.

    Unknown rules have arity 0: only the field name is available.
    """
    try:
        fields = list(_fields(template))
    except ValueError as e:
        raise ValueError(
            f"Malformed template for {rule!r} in locale {locale!r}: {e}"
        ) from e

    allowed = {str(i) for i in range(arity + 1)}
    invalid = [f"{{{field}}}" for field in fields if field not in allowed]
    if invalid:
        raise ValueError(
            f"Template for {rule!r} in locale {locale!r} uses "
            f"{', '.join(invalid)}; expected positional placeholders "
            f"{{0}} to {{{arity}}}"
        )


class MessageCatalog:
    """Immutable mapping from rule identifier to message template."""

    def __init__(self, templates: Mapping[str, str], locale: str = "en"):
        """
        Args:
            templates: Rule identifier -> template string
            locale: Locale the templates are written in

        Raises:
            ValueError: If a template for a known rule is missing, or a
                template uses a placeholder its rule does not fill
        """
        missing = [rule for rule in RULES if rule not in templates]
        if missing:
            raise ValueError(
                f"Message catalog for locale {locale!r} is missing "
                f"templates for: {', '.join(missing)}"
            )
        for rule, template in templates.items():
            _check_placeholders(rule, template, RULES.get(rule, 0), locale)
        self._templates = MappingProxyType(dict(templates))
        self._locale = locale

    @classmethod
    def from_config(
        cls, config_loader: ConfigLoader, locale: Optional[str] = None
    ) -> "MessageCatalog":
        """
        Build the catalog for a locale from loaded configuration.

        Args:
            config_loader: ConfigLoader instance
            locale: Locale to use, defaults to the configured locale

        Raises:
            ValueError: If the locale is not in the catalog file
        """
        locale = locale or config_loader.get_locale()
        messages = config_loader.get_messages()
        if locale not in messages:
            raise ValueError(
                f"Locale {locale!r} not found in message catalog. "
                f"Available: {', '.join(sorted(messages))}"
            )
        return cls(messages[locale], locale)

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def rules(self) -> Tuple[str, ...]:
        return tuple(self._templates)

    def template(self, rule: str) -> str:
        """Return the raw template for rule. Raises KeyError if unknown."""
        try:
            return self._templates[rule]
        except KeyError:
            raise KeyError(f"No message template for rule {rule!r}") from None

    def format(self, rule: str, *args: Any) -> str:
        """Fill the template for rule with the field name and rule parameters."""
        return self.template(rule).format(*args)


_catalog: Optional[MessageCatalog] = None


def get_catalog(config_loader: Optional[ConfigLoader] = None) -> MessageCatalog:
    """Get or initialize the process-wide MessageCatalog."""
    global _catalog
    if _catalog is None:
        _catalog = MessageCatalog.from_config(config_loader or get_config())
        logger.debug(f"Message catalog initialized (locale={_catalog.locale})")
    return _catalog


def reset_catalog():
    """Reset the process-wide catalog (for testing)."""
    global _catalog
    _catalog = None
