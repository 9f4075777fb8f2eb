"""Station classification module.

Maps radio station particulars onto report catalog rows.
"""

from licensereport.classification.rules import (
    LabelPair,
    StationRuleTable,
    classify_particular,
    detect_application_type,
    detect_receive_kind,
)

__all__ = [
    "LabelPair",
    "StationRuleTable",
    "classify_particular",
    "detect_application_type",
    "detect_receive_kind",
]
