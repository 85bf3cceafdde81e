from .composer import AlleleResponseComposer, DatasetLookup
from .exceptions import AlleleBeaconError, ConfigurationError, ValidationFailed
from .model import (
    Beacon,
    BeaconAlleleRequest,
    BeaconAlleleResponse,
    BeaconDataset,
    BeaconDatasetAlleleResponse,
    BeaconError,
    BeaconOrganization,
    Chromosome,
    FieldDescriptor,
    InfoKey,
    RecordType,
    SemanticType,
    fields_of,
    parse_info,
    record_model,
)
from .setup import InfoKeyPolicy, ValidationPolicy
from .validation import (
    ConsistencyError,
    ErrorKind,
    FieldError,
    Rejected,
    RuleName,
    Valid,
    ValidationResult,
    check_consistency,
    ensure_valid,
    validate,
    validate_structure,
)

"""Data contract of the allele Beacon: records, field schema, validation and
response composition.

The typical ingress/egress flow is::

    result = validate(RecordType.BEACON_ALLELE_REQUEST, payload)
    if not result.ok:
        ...  # reject with result.errors
    response = AlleleResponseComposer(beacon).compose(result.record, lookup)
"""
