# ABOUTME: DOM extraction package turning page markup into provisional records.
# ABOUTME: Exports the company, person, member-card and experience extractors.

from linkedin_networker.extraction.companies import extract_company_cards
from linkedin_networker.extraction.containers import CARD_CONTAINER_PATTERNS, find_cards
from linkedin_networker.extraction.models import (
    CompanyCard,
    ConnectionCandidate,
    CurrentCompany,
    DirectConnection,
    ExtractionDiagnostics,
    ExtractionResult,
)
from linkedin_networker.extraction.people import (
    extract_current_company,
    extract_direct_connections,
    extract_person_cards,
)
from linkedin_networker.extraction.text import is_valid_person_name

__all__ = [
    "CARD_CONTAINER_PATTERNS",
    "CompanyCard",
    "ConnectionCandidate",
    "CurrentCompany",
    "DirectConnection",
    "ExtractionDiagnostics",
    "ExtractionResult",
    "extract_company_cards",
    "extract_current_company",
    "extract_direct_connections",
    "extract_person_cards",
    "find_cards",
    "is_valid_person_name",
]
