"""能力基类：选项校验、默认值填充与请求体构建。

Base capability behavior shared by every format.

Every capability runs the same options pipeline: validate, apply defaults,
emit. Streaming protocols use StreamingCapability, which adds the streaming
request builder and chunk parsing; non-streaming capabilities do not expose
those operations at all.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from llm_agents.errors import DecodeError, ValidationError
from llm_agents.types.events import StreamingChunk
from llm_agents.types.message import Message
from llm_agents.types.protocol import Protocol
from llm_agents.types.request import ProtocolRequest

STREAM_DONE = "[DONE]"


@dataclass(frozen=True)
class OptionDescriptor:
    """Declares one option a capability accepts.

    Attributes:
        key: Option name as it appears in the request body
        required: Whether the caller must supply it
        default: Value inserted when the key is absent (None means no default)
    """

    key: str
    required: bool = False
    default: Any = None


class Capability:
    """A named request recipe for one protocol.

    Subclasses set ``protocol`` and ``response_type`` and may override
    ``shape`` to rewrite messages or options before the body is emitted.
    """

    protocol: ClassVar[Protocol]
    response_type: ClassVar[type[BaseModel]]

    def __init__(self, name: str, options: Iterable[OptionDescriptor]) -> None:
        self._name = name
        self._options: tuple[OptionDescriptor, ...] = tuple(options)

    @property
    def name(self) -> str:
        """Format name this capability was registered under."""
        return self._name

    @property
    def options(self) -> tuple[OptionDescriptor, ...]:
        """Declared option descriptors, in declaration order."""
        return self._options

    @property
    def supports_streaming(self) -> bool:
        """Whether this capability can build streaming requests."""
        return False

    def validate(self, options: Mapping[str, Any], *, partial: bool = False) -> None:
        """Check options against the declared descriptors.

        Args:
            options: Options to check
            partial: Skip the required-key check (used for stored defaults)

        Raises:
            ValidationError: If a key is not declared or a required key is missing
        """
        accepted = {d.key for d in self._options}
        for key in options:
            if key not in accepted:
                raise ValidationError(
                    f"capability '{self._name}': unsupported option: {key}",
                    field=key,
                    expected=sorted(accepted),
                )
        if partial:
            return
        for descriptor in self._options:
            if descriptor.required and descriptor.key not in options:
                raise ValidationError(
                    f"capability '{self._name}': required option missing: {descriptor.key}",
                    field=descriptor.key,
                )

    def process(self, options: Mapping[str, Any]) -> dict[str, Any]:
        """Validate options and fill in defaults.

        Provided values always win, including an explicit None. Defaults
        are inserted only for absent keys.

        Returns:
            A new options dict; the input is not modified
        """
        self.validate(options)
        result: dict[str, Any] = {}
        for descriptor in self._options:
            if descriptor.key in options:
                result[descriptor.key] = options[descriptor.key]
            elif descriptor.default is not None:
                result[descriptor.key] = descriptor.default
        return result

    def shape(
        self, messages: list[Message], options: dict[str, Any]
    ) -> tuple[list[Message], dict[str, Any]]:
        """Rewrite messages and processed options before emission."""
        return messages, options

    def build_request(
        self,
        messages: list[Message],
        options: Mapping[str, Any],
        model: str,
    ) -> ProtocolRequest:
        """Build a buffered request.

        Args:
            messages: Conversation turns
            options: Caller options, merged with model defaults
            model: Model name injected into the body

        Returns:
            ProtocolRequest with options at the body root
        """
        processed = self.process(options)
        shaped_messages, shaped_options = self.shape(list(messages), processed)
        shaped_options["model"] = model
        return ProtocolRequest(
            protocol=self.protocol,
            messages=shaped_messages,
            options=shaped_options,
        )

    def parse_response(self, data: bytes | str) -> Any:
        """Decode a buffered response body.

        Raises:
            DecodeError: If the body is not valid JSON of the expected shape
        """
        try:
            return self.response_type.model_validate_json(data)
        except PydanticValidationError as exc:
            raise DecodeError(
                f"capability '{self._name}': failed to parse {self.protocol.value} response",
                capability=self._name,
                cause=exc,
            ) from exc

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, protocol={self.protocol.value!r})"


class StreamingCapability(Capability):
    """Capability for a protocol whose responses can be streamed."""

    @property
    def supports_streaming(self) -> bool:
        return True

    def build_stream_request(
        self,
        messages: list[Message],
        options: Mapping[str, Any],
        model: str,
    ) -> ProtocolRequest:
        """Build a streaming request; identical to the buffered one plus ``stream: true``."""
        request = self.build_request(messages, options, model)
        request.options["stream"] = True
        return request

    def is_stream_complete(self, data: str) -> bool:
        """Check whether a payload is the terminal ``[DONE]`` sentinel."""
        return data.strip() == STREAM_DONE

    def parse_chunk(self, data: str) -> StreamingChunk:
        """Decode one SSE data payload (prefix already removed) into a StreamingChunk.

        Raises:
            DecodeError: If the payload is empty, terminal or not a JSON chunk
        """
        line = data.strip()
        if not line or line == STREAM_DONE:
            raise DecodeError(
                f"capability '{self._name}': no chunk in frame",
                capability=self._name,
            )
        try:
            return StreamingChunk.model_validate_json(line)
        except (PydanticValidationError, json.JSONDecodeError) as exc:
            raise DecodeError(
                f"capability '{self._name}': failed to parse streaming chunk",
                capability=self._name,
                cause=exc,
            ) from exc
