from .detail import parse_document, resolve
from .json_ld import find_job_postings, format_address, salary_from_posting
from .resolvers import FIELD_RESOLVERS, DetailContext, first_non_empty

__all__ = [
    "DetailContext",
    "FIELD_RESOLVERS",
    "find_job_postings",
    "first_non_empty",
    "format_address",
    "parse_document",
    "resolve",
    "salary_from_posting",
]
