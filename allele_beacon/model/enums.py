from enum import StrEnum


class Chromosome(StrEnum):
    """Reference names accepted in allele queries (case-sensitive)."""
    CHR_1 = "1"
    CHR_2 = "2"
    CHR_3 = "3"
    CHR_4 = "4"
    CHR_5 = "5"
    CHR_6 = "6"
    CHR_7 = "7"
    CHR_8 = "8"
    CHR_9 = "9"
    CHR_10 = "10"
    CHR_11 = "11"
    CHR_12 = "12"
    CHR_13 = "13"
    CHR_14 = "14"
    CHR_15 = "15"
    CHR_16 = "16"
    CHR_17 = "17"
    CHR_18 = "18"
    CHR_19 = "19"
    CHR_20 = "20"
    CHR_21 = "21"
    CHR_22 = "22"
    X = "X"
    Y = "Y"


class InfoKey(StrEnum):
    """Recognised keys of the VCF-style alternateBasesInfo string."""
    END = "END"
    SVLEN = "SVLEN"
    CIPOS = "CIPOS"
    CIEND = "CIEND"


class SemanticType(StrEnum):
    """Semantic field types of the data contract.

    These are independent of the Python representation: both `int64` and
    `int32` are Python integers, they only differ by their value range.
    """
    STRING = "string"
    INT64 = "int64"
    INT32 = "int32"
    BOOLEAN = "boolean"
    DOUBLE = "double"
    SEQUENCE = "sequence"
    MAP = "map"
    RECORD = "record"
