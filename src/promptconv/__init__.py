"""promptconv — turn stored prompt records into provider call parameters."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from promptconv.sdk.convert import to_anthropic as to_anthropic
    from promptconv.sdk.convert import to_azure_openai as to_azure_openai
    from promptconv.sdk.convert import to_gemini as to_gemini
    from promptconv.sdk.convert import to_openai as to_openai
    from promptconv.sdk.convert import to_sdk as to_sdk

_SDK_EXPORTS = {
    "to_openai": "promptconv.sdk.convert",
    "to_azure_openai": "promptconv.sdk.convert",
    "to_anthropic": "promptconv.sdk.convert",
    "to_gemini": "promptconv.sdk.convert",
    "to_sdk": "promptconv.sdk.convert",
}


def __getattr__(name: str) -> object:
    module_path = _SDK_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'promptconv' has no attribute {name!r}")
