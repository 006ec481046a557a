#!/usr/bin/env python3

"""Decoding of engine JSON output into typed records."""

from typing import List, Type, TypeVar, Union

from pydantic import BaseModel, TypeAdapter, ValidationError

from volumebot.errors import DecodeError

RecordT = TypeVar("RecordT", bound=BaseModel)


def decode_json_lines(raw: Union[bytes, str], model: Type[RecordT]) -> List[RecordT]:
    """Decodes output containing one JSON object per line.

    Blank lines are ignored, the order of the records is preserved.

    Args:
        raw (Union[bytes, str]): Engine output.
        model (Type[RecordT]): Record type of every line.

    Raises:
        DecodeError: On the first line which is no valid record.

    Returns:
        List[RecordT]: Decoded records.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as error:
            raise DecodeError(f"Output is not valid UTF-8: {error}") from error

    records: List[RecordT] = []
    for number, line in enumerate(raw.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            records.append(model.model_validate_json(line))
        except ValidationError as error:
            raise DecodeError(f"Failed to decode line {number} as '{model.__name__}': {error}") from error

    return records


def decode_json_array(raw: Union[bytes, str], model: Type[RecordT]) -> List[RecordT]:
    """Decodes output consisting of a single JSON array.

    Args:
        raw (Union[bytes, str]): Engine output.
        model (Type[RecordT]): Type of the array elements.

    Raises:
        DecodeError: If the output is no JSON array of valid records.

    Returns:
        List[RecordT]: Decoded records.
    """
    try:
        return TypeAdapter(List[model]).validate_json(raw)  # type: ignore[valid-type]
    except ValidationError as error:
        raise DecodeError(f"Failed to decode array of '{model.__name__}': {error}") from error
