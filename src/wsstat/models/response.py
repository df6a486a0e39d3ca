# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Decoded response payloads.

The shape of a response is decided once, when frames are decoded, and carried as one of
four variants so renderers never have to re-inspect raw values. Top-level variants keep
the frame they were decoded from in ``source`` for undecoded output.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class AbsentResponse:
    """No application-level response (ping mode)."""

    def native(self) -> None:
        return None


@dataclass(frozen=True)
class ObjectResponse:
    items: dict[str, Any] = field(hash=False)
    source: str | bytes | None = field(default=None, compare=False, repr=False)

    @property
    def is_jsonrpc(self) -> bool:
        return "jsonrpc" in self.items

    def native(self) -> dict[str, Any]:
        return self.items


@dataclass(frozen=True)
class SequenceResponse:
    items: tuple[Response, ...] = ()
    source: str | bytes | None = field(default=None, compare=False, repr=False)

    def native(self) -> list[Any]:
        return [item.native() for item in self.items]


@dataclass(frozen=True)
class RawResponse:
    """Uninterpreted text or bytes; JSON scalars when nested inside a sequence."""

    value: Any
    source: str | bytes | None = field(default=None, compare=False, repr=False)

    def native(self) -> Any:
        return self.value


Response = Union[AbsentResponse, ObjectResponse, SequenceResponse, RawResponse]


def _from_value(value: Any, source: str | bytes | None = None) -> Response:
    if isinstance(value, dict):
        return ObjectResponse(value, source=source)
    if isinstance(value, list):
        return SequenceResponse(tuple(_from_value(item) for item in value), source=source)
    return RawResponse(value, source=source)


def decode_frame(frame: str | bytes | None) -> Response:
    """
    Decode one received frame.

    Text frames holding a JSON object or array become structured responses; anything else
    (plain text, JSON scalars, binary frames) stays raw.
    """
    if frame is None:
        return AbsentResponse()
    if isinstance(frame, (bytes, bytearray, memoryview)):
        return RawResponse(bytes(frame), source=bytes(frame))
    stripped = frame.strip()
    if stripped[:1] in ("{", "["):
        try:
            return _from_value(json.loads(stripped), source=frame)
        except ValueError:
            pass
    return RawResponse(frame, source=frame)


def decode_frames(frames: Sequence[str | bytes]) -> Response:
    """No frames: absent; one frame: that response; several: a sequence in arrival order."""
    if not frames:
        return AbsentResponse()
    if len(frames) == 1:
        return decode_frame(frames[0])
    return SequenceResponse(tuple(decode_frame(frame) for frame in frames))


def source_text(response: Response) -> str:
    """The response exactly as received; a burst gives one frame per line."""
    source = getattr(response, "source", None)
    if isinstance(source, bytes):
        return source.decode("utf-8", errors="replace")
    if source is not None:
        return source
    if isinstance(response, SequenceResponse):
        return "\n".join(source_text(item) for item in response.items)
    native = response.native()
    return "" if native is None else str(native)


__all__ = [
    "AbsentResponse",
    "ObjectResponse",
    "RawResponse",
    "Response",
    "SequenceResponse",
    "decode_frame",
    "decode_frames",
    "source_text",
]
