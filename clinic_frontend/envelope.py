"""Decoding of list response bodies.

The API answers list requests either with a bare JSON array or with an
``{"items": [...]}`` envelope. ``decode_list_body`` names which one arrived,
``records_of`` just hands back the records.
"""
from __future__ import annotations
from typing import Any, Literal, Union
from pydantic import BaseModel


class Sequence(BaseModel):
    kind: Literal["sequence"] = "sequence"
    records: list[Any]


class Enveloped(BaseModel):
    kind: Literal["enveloped"] = "enveloped"
    records: list[Any]


class Unrecognized(BaseModel):
    kind: Literal["unrecognized"] = "unrecognized"
    body: Any = None

    @property
    def records(self) -> list[Any]:
        return []


ListBody = Union[Sequence, Enveloped, Unrecognized]


def decode_list_body(body: Any) -> ListBody:
    if isinstance(body, list):
        return Sequence(records=body)
    if isinstance(body, dict) and isinstance(body.get("items"), list):
        return Enveloped(records=body["items"])
    return Unrecognized(body=body)


def records_of(body: Any) -> list[Any]:
    """Ordered records of a list body; empty when the shape is unknown."""
    return list(decode_list_body(body).records)
