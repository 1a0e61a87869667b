from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum

from ...constants import Signatures


class HeaderSignature(IntEnum):
    NONE = 0
    LIBRARY = 1
    MEMBER = 2
    DESCRIPTOR = 3
    NAMESTR = 4
    OBSERVATION = 5


SIGNATURE_MAP: dict[str, HeaderSignature] = {
    Signatures.LIBRARY: HeaderSignature.LIBRARY,
    Signatures.MEMBER: HeaderSignature.MEMBER,
    Signatures.DESCRIPTOR: HeaderSignature.DESCRIPTOR,
    Signatures.NAMESTR: HeaderSignature.NAMESTR,
    Signatures.OBSERVATION: HeaderSignature.OBSERVATION,
}


def recognize_signature(namedesc: str) -> HeaderSignature:
    """Match the untrimmed 21-character name field of a header card."""
    return SIGNATURE_MAP.get(namedesc, HeaderSignature.NONE)


class HeaderStatus(Enum):
    OK = "ok"
    NO_LIBRARY_HEADER = "no_library_header"
    NO_MEMBER_HEADER = "no_member_header"
    NO_DESCRIPTOR_HEADER = "no_descriptor_header"
    NO_NAMESTR_HEADER = "no_namestr_header"
    NO_OBSERVATION_HEADER = "no_observation_header"

    @property
    def ok(self) -> bool:
        return self is HeaderStatus.OK


@dataclass(frozen=True, slots=True)
class LibraryHeader:
    sas_symbols: tuple[str, str]
    saslib: str
    sas_version: str
    sas_os: str
    created: datetime | None
    modified: datetime | None


@dataclass(frozen=True, slots=True)
class MemberHeader:
    sas_symbol: str
    dataset_name: str
    sasdata: str
    sas_version: str
    sas_os: str
    created: datetime | None
    modified: datetime | None
    label: str
    dataset_type: str
