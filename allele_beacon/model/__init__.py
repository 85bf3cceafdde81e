from .allele import (
    BeaconAlleleRequest,
    BeaconAlleleResponse,
    BeaconDatasetAlleleResponse,
    BeaconError,
)
from .beacon import Beacon, BeaconDataset, BeaconOrganization
from .enums import Chromosome, InfoKey, SemanticType
from .schema import (
    FieldDescriptor,
    RecordType,
    fields_of,
    record_model,
    record_type_of,
)
from .types import Record, parse_info
