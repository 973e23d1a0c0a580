"""Parameter assembly — merge base settings with mapped fields.

Base fields (the prompt's invocation parameters and provider defaults) are
opaque and copied as they are. Mapped fields (model, messages, tools, tool
choice, response format) are applied second and win on collision. A mapped
field set to ``None`` means "absent": the key is removed from the result
even if the invocation parameters carried it.
"""

from collections.abc import Mapping
from typing import Any


def assemble_params(base: Mapping[str, Any], mapped: Mapping[str, Any]) -> dict[str, Any]:
    """Combine *base* and *mapped* into one provider parameter object."""
    params: dict[str, Any] = dict(base)
    for key, value in mapped.items():
        if value is None:
            params.pop(key, None)
        else:
            params[key] = value
    return params
