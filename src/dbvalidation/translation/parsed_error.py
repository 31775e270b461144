from dataclasses import dataclass, field


@dataclass
class ParsedError:
    """
    Per-error working record, created by the extractor and discarded after rendering.

    `message` starts as the template's default text; post-processing hooks may replace
    it, a matching custom rule replaces it again, and placeholder substitution turns it
    into the final text. `field_name` is set once the designator parameter is resolved
    and may be a comma-joined list of fields.
    """

    code: int
    raw_message: str
    parameters: dict[str, str] = field(default_factory=dict)
    message: str = ""
    field_name: str | None = None

    @property
    def fields(self) -> list[str]:
        return self.field_name.split(",") if self.field_name else []
