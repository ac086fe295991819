"""User-facing strings for the documents view (Slovak)."""

# Authentication
LOGIN_REQUIRED = "Musíte byť prihlásený"
LOGIN_REQUIRED_FOR_DOCUMENTS = "Musíte sa prihlásiť pre prístup k dokumentom"

# List
DOCUMENTS_LOAD_FAILED = "Nepodarilo sa načítať dokumenty"
UNEXPECTED_ERROR = "Nastala neočakávaná chyba"
LOADING_DOCUMENTS = "Načítavam dokumenty..."
NO_DOCUMENTS = "Nenašli sa žiadne dokumenty"
ALL_TAGS = "Všetky tagy"
SEARCH_PLACEHOLDER = "Hľadať podľa názvu alebo popisu..."

# Mutations
DOCUMENT_CREATED = "Dokument bol úspešne vytvorený"
DOCUMENT_UPDATED = "Dokument bol úspešne upravený"
DOCUMENT_DELETED = "Dokument bol úspešne odstránený"
CREATE_FAILED = "Nepodarilo sa vytvoriť dokument"
UPDATE_FAILED = "Nepodarilo sa upraviť dokument"
DELETE_FAILED = "Nepodarilo sa odstrániť dokument"
DOWNLOAD_FAILED = "Nepodarilo sa stiahnuť súbor"
CONFIRM_DELETE = "Naozaj chcete odstrániť tento dokument?"

# Form validation
NAME_REQUIRED = "Prosím zadajte názov dokumentu"
FILE_REQUIRED = "Prosím vyberte súbor"
FILE_NOT_FOUND = "Vybraný súbor neexistuje"

# Pagination
PREVIOUS_PAGE = "Predchádzajúca"
NEXT_PAGE = "Nasledujúca"


def page_info(page: int, total_pages: int) -> str:
    return f"Strana {page} z {total_pages}"


def download_saved(path: str) -> str:
    return f"Súbor uložený: {path}"


def documents_count(count: int) -> str:
    if count == 1:
        return "1 dokument"
    if 2 <= count <= 4:
        return f"{count} dokumenty"
    return f"{count} dokumentov"
