from .types import (
    Count,
    Flag,
    Frequency,
    InfoString,
    Int,
    Metadata,
    Position,
    Record,
    ReferenceName,
    SequenceString,
    Text,
)


# Based on the GA4GH Beacon v0.4 data contract (beacon.yaml):
# https://github.com/ga4gh-beacon/specification/blob/v0.4.0/beacon.yaml
class BeaconAlleleRequest(Record):
    """Allele query; absent `datasetIds` means all datasets of the Beacon."""
    referenceName: ReferenceName
    start: Position
    referenceBases: SequenceString
    alternateBases: SequenceString
    alternateBasesInfo: InfoString | None = None
    assemblyId: Text
    datasetIds: list[Text] | None = None
    includeDatasetResponses: Flag = False


class BeaconError(Record):
    errorCode: Int
    message: Text | None = None


class BeaconDatasetAlleleResponse(Record):
    datasetId: Text
    exists: Flag | None = None
    error: BeaconError | None = None
    frequency: Frequency | None = None
    variantCount: Count | None = None
    callCount: Count | None = None
    sampleCount: Count | None = None
    note: Text | None = None
    externalUrl: Text | None = None
    info: Metadata | None = None


class BeaconAlleleResponse(Record):
    beaconId: Text
    exists: Flag | None = None
    error: BeaconError | None = None
    alleleRequest: BeaconAlleleRequest | None = None
    datasetAlleleResponses: list[BeaconDatasetAlleleResponse] | None = None
