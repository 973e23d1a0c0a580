"""Provider capability profiles.

Each converter declares what its provider's call parameters can express.
The profile gates the response-format mapper (providers without
structured output fail the conversion) and is listed by
``promptconv providers``.
"""

from pydantic import BaseModel


class ProviderProfile(BaseModel):
    """Structured representation of a provider's parameter vocabulary."""

    supports_response_format: bool = False
    supports_parallel_tool_control: bool = False
    system_placement: str = "messages"

    def as_row(self) -> dict[str, str]:
        """Flatten the profile for tabular display."""
        return {
            "response_format": _yes_no(self.supports_response_format),
            "parallel_control": _yes_no(self.supports_parallel_tool_control),
            "system": self.system_placement,
        }


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"
