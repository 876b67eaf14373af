"""Value types shared by the cache tests."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel


class Person(BaseModel):
    name: str
    age: int


@dataclass
class Address:
    street: str
    number: int = 0


class Other(BaseModel):
    label: str = ""


@dataclass
class Blob:
    name: str
    data: bytes = b""
