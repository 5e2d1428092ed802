from enum import Enum

class QRStatus(str, Enum):
    VALID = "Valid"
    USED = "Used"
    INACTIVE = "Inactive"
    DELETED = "Deleted"

class ScanState(str, Enum):
    UNVERIFIED = "UNVERIFIED"       # count == 0
    WITHIN_LIMIT = "WITHIN_LIMIT"   # 0 < count <= limit
    OVER_LIMIT = "OVER_LIMIT"       # count > limit

class ImportOutcome(str, Enum):
    SUCCESS = "SUCCESS"
    PARTIAL = "PARTIAL"
    FAILED = "FAILED"
