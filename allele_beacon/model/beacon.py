from .allele import BeaconAlleleRequest
from .types import Count, Metadata, Record, Text, Timestamp


# Catalog records. Based on these documents:
# https://github.com/ga4gh-beacon/specification/blob/v0.4.0/beacon.yaml
# https://docs.genomebeacons.org/schemas-md/datasets_defaultSchema/
class BeaconDataset(Record):
    id: Text
    name: Text
    description: Text | None = None
    assemblyId: Text
    createDateTime: Timestamp
    updateDateTime: Timestamp
    version: Text | None = None
    variantCount: Count | None = None
    callCount: Count | None = None
    sampleCount: Count | None = None
    externalUrl: Text | None = None
    info: Metadata | None = None


class BeaconOrganization(Record):
    id: Text
    name: Text
    description: Text | None = None
    address: Text | None = None
    welcomeUrl: Text | None = None
    contactUrl: Text | None = None
    logoUrl: Text | None = None
    info: Metadata | None = None


class Beacon(Record):
    id: Text
    name: Text
    apiVersion: Text
    organization: BeaconOrganization
    description: Text | None = None
    version: Text | None = None
    welcomeUrl: Text | None = None
    alternativeUrl: Text | None = None
    createDateTime: Timestamp | None = None
    updateDateTime: Timestamp | None = None
    datasets: list[BeaconDataset]
    sampleAlleleRequests: list[BeaconAlleleRequest] | None = None
    info: Metadata | None = None

    def get_dataset(self, dataset_id: str) -> BeaconDataset | None:
        for dataset in self.datasets:
            if dataset.id == dataset_id:
                return dataset
        return None

    def get_dataset_ids(self) -> list[str]:
        return [dataset.id for dataset in self.datasets]
