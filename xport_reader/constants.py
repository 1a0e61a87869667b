from typing import ClassVar


class Signatures:
    LIBRARY = "LIBRARY HEADER RECORD"
    MEMBER = "MEMBER  HEADER RECORD"
    DESCRIPTOR = "DSCRPTR HEADER RECORD"
    NAMESTR = "NAMESTR HEADER RECORD"
    OBSERVATION = "OBS     HEADER RECORD"


class Layout:
    CARD_LENGTH = 80
    # generic header card: "HEADER RECORD" + stars, then the 21-byte name field
    NAMEDESC_OFFSET = 20
    NAMEDESC_LENGTH = 21
    # six 5-character numeric subfields follow the exclamation marks
    NUMERIC_FIELDS_OFFSET = 48
    NUMERIC_FIELD_LENGTH = 5
    NAMESTR_COUNT_FIELD = 1
    NAMESTR_SIZE_FIELD = 5
    NAMESTR_LENGTH = 140
    NAMESTR_LENGTH_VAX = 136
    SUPPORTED_NAMESTR_LENGTHS: ClassVar[frozenset[int]] = frozenset({136, 140})
    NUMERIC_VALUE_LENGTH = 8


class NamestrOffsets:
    NTYPE = 0
    NHFUN = 2
    NLNG = 4
    NVAR0 = 6
    NNAME = 8
    NNAME_LENGTH = 8
    NLABEL = 16
    NLABEL_LENGTH = 40
    NFORM = 56
    NFORM_LENGTH = 8
    NFL = 64
    NFD = 66
    NFJ = 68
    NIFORM = 72
    NIFORM_LENGTH = 8
    NIFL = 80
    NIFD = 82
    NPOS = 84


class LibraryCardOffsets:
    SAS_SYMBOL_1 = 0
    SAS_SYMBOL_2 = 8
    SASLIB = 16
    SASVER = 24
    SAS_OS = 32
    CREATED = 64
    FIELD_LENGTH = 8
    DATETIME_LENGTH = 16


class MemberCardOffsets:
    SAS_SYMBOL = 0
    DSNAME = 8
    SASDATA = 16
    SASVER = 24
    SAS_OS = 32
    CREATED = 64
    MODIFIED = 0
    DSLABEL = 32
    DSLABEL_LENGTH = 40
    DSTYPE = 72
    FIELD_LENGTH = 8
    DATETIME_LENGTH = 16


class Defaults:
    TEXT_ENCODING = "latin-1"
    NUMERIC_TEXT_PRECISION = 6
    STRICT_EOF = False
    CONFIG_FILE = "xport_reader.toml"


class MissingValues:
    MARKERS: ClassVar[frozenset[int]] = frozenset(
        {ord("."), ord("_"), *range(ord("A"), ord("Z") + 1)}
    )
