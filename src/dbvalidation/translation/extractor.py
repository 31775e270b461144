import logging

from ..exceptions.base import MalformedErrorText, TemplateConfigurationError, UnsupportedErrorType
from .classifier import ErrorClassifier, RawDatabaseError, as_raw_error
from .custom_rules import CustomRuleStore
from .parsed_error import ParsedError
from .substitution import make_replacements
from .templates import TemplateRegistry

logger = logging.getLogger(__name__)


class MessageExtractor:
    """
    Turn a raw engine error into a ParsedError (field name + final message).

    Order matters and is fixed:
      1. parse the engine text with the template pattern
      2. run the template's post-processing hook (may change parameters / message)
      3. resolve the field name from the designator parameter
      4. apply the first matching custom rule for (code, field name)
      5. substitute placeholders
    Custom rules are matched against the field name produced by the hook, not the raw
    capture, which is why they come after it.
    """

    def __init__(self, registry: TemplateRegistry, rules: CustomRuleStore, classifier: ErrorClassifier | None = None):
        self.registry = registry
        self.rules = rules
        self.classifier = classifier or ErrorClassifier(registry)

    def extract(self, error: RawDatabaseError | BaseException) -> ParsedError:
        raw = as_raw_error(error)
        if not self.classifier.is_supported(raw):
            logger.warning("extractor.unsupported_code", extra={"engine_code": raw.code})
            raise UnsupportedErrorType(raw.code)

        template = self.registry.get(raw.code)
        parameters = template.parse(raw.message)
        if parameters is None:
            logger.warning(
                "extractor.malformed_text",
                extra={"engine_code": raw.code, "pattern": template.pattern.pattern},
            )
            # raw engine text may contain user data; DEBUG only
            logger.debug("extractor.malformed_text_raw", extra={"raw": raw.message, "sql": raw.sql})
            raise MalformedErrorText(raw.code, template.pattern.pattern)

        parsed = ParsedError(code=raw.code, raw_message=raw.message, parameters=parameters, message=template.message)

        if template.post_process is not None:
            template.post_process(parsed)

        try:
            field_name = parsed.parameters[template.field_param]
        except KeyError:
            raise TemplateConfigurationError(
                f"Template produced no {template.field_param!r} parameter", code=raw.code
            ) from None

        rule = self.rules.find_match(raw.code, field_name)
        if rule is not None:
            parsed.message = rule.message
            if rule.new_field is not None:
                field_name = rule.new_field

        parsed.field_name = field_name
        parsed.message = make_replacements(parsed.message, parsed.parameters)

        logger.info(
            "extractor.extracted",
            extra={"engine_code": raw.code, "field": field_name, "custom_rule": rule is not None},
        )
        return parsed


__all__ = ["MessageExtractor"]
