"""Input side: application document views and issue dump parsing."""

from licensereport.ingest.issues import iter_application_documents, load_issues, parse_issue_body
from licensereport.ingest.records import ApplicationRecord, Particular, PersonName

__all__ = [
    "ApplicationRecord",
    "Particular",
    "PersonName",
    "iter_application_documents",
    "load_issues",
    "parse_issue_body",
]
