"""Catalog service: loads the document listing from GitHub and holds the current snapshot."""

import logging
import re
import threading
from collections import OrderedDict
from datetime import UTC, date, datetime
from typing import Any

import httpx
from pydantic import BaseModel

from src.core.config import constants, settings
from src.core.errors import CatalogFetchError, DocumentNotFoundError, classify_catalog_error
from src.core.logging import log_with_context, span
from src.domain.document import Document, DocumentCategory, DocumentPriority
from src.domain.search import CatalogSnapshot, MatchResult
from src.services.search_service import MatchThresholds, match


logger = logging.getLogger(__name__)

_EXTENSION_PATTERN = re.compile(r"\.[^/.]+$")

_LEARNING_VALUES: tuple[tuple[str, str], ...] = (
    ("activity", "Essential for understanding basic DPM workflows"),
    ("marketing", "Real-world application and strategic planning"),
    ("essay", "Theoretical foundation and case studies"),
    ("cla", "Advanced concepts for DPM implementation"),
)

_CATEGORY_KEYWORDS: tuple[tuple[str, DocumentCategory], ...] = (
    ("activity", DocumentCategory.FUNDAMENTALS),
    ("cla", DocumentCategory.ADVANCED),
    ("essay", DocumentCategory.THEORY),
    ("marketing", DocumentCategory.PRACTICAL),
)

_PRIORITY_LABELS: dict[DocumentPriority, str] = {
    DocumentPriority.HIGH: "Essential",
    DocumentPriority.MEDIUM: "Important",
    DocumentPriority.LOW: "Supplementary",
}


def determine_priority(filename: str) -> DocumentPriority:
    """Derive learning priority from filename keywords."""
    name = filename.lower()
    if "activity" in name or "marketing" in name:
        return DocumentPriority.HIGH
    if "cla" in name or "essay" in name:
        return DocumentPriority.MEDIUM
    return DocumentPriority.LOW


def determine_category(filename: str) -> DocumentCategory:
    """Derive topic category from filename keywords (first keyword wins)."""
    name = filename.lower()
    for keyword, category in _CATEGORY_KEYWORDS:
        if keyword in name:
            return category
    return DocumentCategory.GENERAL


def learning_value(filename: str, category: DocumentCategory, priority: DocumentPriority) -> str:
    """Describe why a document is worth reading."""
    name = filename.lower()
    for keyword, value in _LEARNING_VALUES:
        if keyword in name:
            return value
    return f"{_PRIORITY_LABELS[priority]} {category} content"


def is_document_file(item: dict[str, Any]) -> bool:
    """Return True for listing entries that are files with a document extension."""
    name = item.get("name")
    return item.get("type") == "file" and isinstance(name, str) and name.endswith(constants.DOCUMENT_EXTENSIONS)


def _format_size(size: Any) -> str:
    if not size:
        return "Unknown"
    return f"{round(size / constants.BYTES_PER_KB)} KB"


def to_document(item: dict[str, Any], *, document_id: int, today: date | None = None) -> Document:
    """Build a catalog document from a GitHub contents entry.

    Args:
        item: Contents API entry (name, size, download_url, html_url, sha)
        document_id: 1-based position in the listing
        today: Date stamped as last_modified (defaults to today)

    Returns:
        Document with derived priority, category and learning value
    """
    filename = item["name"]
    name = _EXTENSION_PATTERN.sub("", filename)
    priority = determine_priority(filename)
    category = determine_category(filename)

    return Document(
        id=document_id,
        name=name,
        type=constants.DOCUMENT_TYPE,
        filename=filename,
        description=f"{name} document for DPM processes",
        size=_format_size(item.get("size")),
        last_modified=(today or date.today()).isoformat(),
        download_url=item.get("download_url"),
        github_url=item.get("html_url"),
        priority=priority,
        category=category,
        learning_value=learning_value(filename, category, priority),
        sha=item.get("sha"),
    )


def _request_headers() -> dict[str, str]:
    headers = {"Accept": constants.GITHUB_ACCEPT_HEADER}
    if settings.github_token:
        headers["Authorization"] = f"Bearer {settings.github_token}"
    return headers


def _repo_api_url() -> str:
    return f"{constants.GITHUB_API_BASE_URL}/repos/{settings.github_owner}/{settings.github_repo}"


def tree_item_to_contents(item: dict[str, Any]) -> dict[str, Any]:
    """Convert a git trees API blob into the contents API entry shape."""
    path = item["path"]
    owner, repo, branch = settings.github_owner, settings.github_repo, settings.github_branch
    prefix = f"{settings.github_docs_path.strip('/')}/"
    return {
        "name": path.removeprefix(prefix),
        "type": "file",
        "size": item.get("size"),
        "download_url": f"{constants.GITHUB_RAW_BASE_URL}/{owner}/{repo}/{branch}/{path}",
        "html_url": f"{constants.GITHUB_WEB_BASE_URL}/{owner}/{repo}/blob/{branch}/{path}",
        "sha": item.get("sha"),
    }


def _decode_json(response: httpx.Response, *, api: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise CatalogFetchError(f"{api} returned invalid JSON: {e}", status_code=response.status_code) from e


async def _fetch_contents(client: httpx.AsyncClient) -> list[dict[str, Any]]:
    url = f"{_repo_api_url()}/contents/{settings.github_docs_path.strip('/')}"
    response = await client.get(url, params={"ref": settings.github_branch}, headers=_request_headers())
    if not response.is_success:
        raise CatalogFetchError(f"Contents API failed: {response.status_code}", status_code=response.status_code)

    payload = _decode_json(response, api="Contents API")
    if not isinstance(payload, list):
        raise CatalogFetchError("Contents API returned an unexpected payload", status_code=response.status_code)
    return [item for item in payload if isinstance(item, dict)]


async def _fetch_tree(client: httpx.AsyncClient) -> list[dict[str, Any]]:
    url = f"{_repo_api_url()}/git/trees/{settings.github_branch}"
    response = await client.get(url, params={"recursive": "1"}, headers=_request_headers())
    if not response.is_success:
        raise CatalogFetchError(
            f"All APIs failed. Status: {response.status_code} {response.reason_phrase}",
            status_code=response.status_code,
        )

    payload = _decode_json(response, api="Trees API")
    tree = payload.get("tree") if isinstance(payload, dict) else None
    if not isinstance(tree, list):
        raise CatalogFetchError("Trees API returned an unexpected payload", status_code=response.status_code)

    prefix = f"{settings.github_docs_path.strip('/')}/"
    return [
        tree_item_to_contents(item)
        for item in tree
        if isinstance(item, dict)
        and item.get("type") == "blob"
        and isinstance(item.get("path"), str)
        and item["path"].startswith(prefix)
    ]


async def fetch_catalog() -> list[Document]:
    """Fetch the document catalog from GitHub.

    Tries the contents API first and falls back to the git trees API.

    Returns:
        Documents in listing order

    Raises:
        CatalogFetchError: If both APIs fail or no document files are found
        httpx.HTTPError: If the trees API request itself fails at transport level
    """
    with span("catalog_service.fetch_catalog"):
        async with httpx.AsyncClient(timeout=constants.API_TIMEOUT_SECONDS) as client:
            try:
                contents = await _fetch_contents(client)
            except (CatalogFetchError, httpx.HTTPError) as e:
                logger.info("Contents API failed, trying tree API: %s", e)
                contents = await _fetch_tree(client)

        files = [item for item in contents if is_document_file(item)]
        if not files:
            raise CatalogFetchError("No document files found in repository")

        today = date.today()
        documents = [to_document(item, document_id=index, today=today) for index, item in enumerate(files, start=1)]
        log_with_context(logger, "info", "Catalog fetched", documents=len(documents), listed=len(contents))
        return documents


def fallback_documents() -> list[Document]:
    """Built-in catalog used when GitHub cannot be reached."""
    base = f"{constants.GITHUB_RAW_BASE_URL}/Talion-101/DPM/main"
    return [
        Document(
            id=1,
            name="Activity",
            type="DPM",
            filename="Activity.docx",
            description="Activity document for DPM processes and workflow management",
            size="245 KB",
            last_modified="2024-07-20",
            download_url=f"{base}/Activity.docx",
            priority=DocumentPriority.HIGH,
            category=DocumentCategory.FUNDAMENTALS,
            learning_value="Essential for understanding basic DPM workflows",
        ),
        Document(
            id=2,
            name="CLA 2",
            type="DPM",
            filename="CLA 2.docx",
            description="Advanced CLA 2 document covering complex DPM scenarios",
            size="189 KB",
            last_modified="2024-07-20",
            download_url=f"{base}/CLA%202.docx",
            priority=DocumentPriority.MEDIUM,
            category=DocumentCategory.ADVANCED,
            learning_value="Advanced concepts for DPM implementation",
        ),
        Document(
            id=3,
            name="Essay",
            type="DPM",
            filename="Essay.docx",
            description="Comprehensive essay on DPM theoretical foundations",
            size="167 KB",
            last_modified="2024-07-20",
            download_url=f"{base}/Essay.docx",
            priority=DocumentPriority.MEDIUM,
            category=DocumentCategory.THEORY,
            learning_value="Theoretical foundation and case studies",
        ),
        Document(
            id=4,
            name="Marketing Plan",
            type="DPM",
            filename="Marketing plan.docx",
            description="Strategic marketing plan utilizing DPM methodologies",
            size="312 KB",
            last_modified="2024-07-20",
            download_url=f"{base}/Marketing%20plan.docx",
            priority=DocumentPriority.HIGH,
            category=DocumentCategory.PRACTICAL,
            learning_value="Real-world application and strategic planning",
        ),
    ]


class LoadedCatalog(BaseModel):
    """Outcome of a catalog load before it is installed in the store."""

    documents: list[Document]
    is_cached: bool = False
    error: str | None = None
    error_status_code: int | None = None


async def load_catalog() -> LoadedCatalog:
    """Fetch the catalog, falling back to the built-in documents on failure."""
    try:
        documents = await fetch_catalog()
    except (CatalogFetchError, httpx.HTTPError) as e:
        category, _ = classify_catalog_error(e)
        log_with_context(logger, "error", "Error fetching repository contents", error=str(e), category=category.value)
        return LoadedCatalog(
            documents=fallback_documents(),
            is_cached=True,
            error=str(e),
            error_status_code=getattr(e, "status_code", None),
        )
    return LoadedCatalog(documents=documents)


class DownloadLink(BaseModel):
    """Where to fetch a document from."""

    url: str
    filename: str


def resolve_download(document: Document) -> DownloadLink:
    """Resolve the retrieval location of a document.

    Raises:
        DocumentNotFoundError: If the document has no download URL
    """
    if not document.download_url:
        raise DocumentNotFoundError(f"Document {document.id} has no download URL")
    logger.info("Download requested", extra={"document_id": document.id, "document_name": document.name})
    return DownloadLink(url=document.download_url, filename=document.filename or document.name)


class CatalogStore:
    """Holds the current catalog snapshot and memoizes searches against it.

    Search results are keyed on (trimmed query, catalog version), so replacing
    the catalog never serves a result computed against the previous one.
    """

    def __init__(self, *, max_entries: int = constants.SEARCH_CACHE_MAX_ENTRIES) -> None:
        """Initialize an empty store."""
        self._snapshot = CatalogSnapshot()
        self._results: OrderedDict[tuple[str, int], MatchResult] = OrderedDict()
        self._max_entries = max_entries
        self._lock = threading.Lock()

    @property
    def snapshot(self) -> CatalogSnapshot:
        """The catalog currently served."""
        return self._snapshot

    def thresholds(self) -> MatchThresholds:
        """Match thresholds from settings."""
        return MatchThresholds(similar=settings.similar_threshold, suggestion=settings.suggestion_threshold)

    def replace(
        self,
        documents: list[Document],
        *,
        is_cached: bool = False,
        error: str | None = None,
        error_status_code: int | None = None,
    ) -> CatalogSnapshot:
        """Install a new catalog and drop memoized results.

        Args:
            documents: The new catalog
            is_cached: Whether these are the built-in fallback documents
            error: Fetch error that led to the fallback, if any
            error_status_code: HTTP status of that error, if it came from a response

        Returns:
            The installed snapshot
        """
        with self._lock:
            self._snapshot = CatalogSnapshot(
                documents=list(documents),
                version=self._snapshot.version + 1,
                last_updated=datetime.now(UTC),
                is_cached=is_cached,
                error=error,
                error_status_code=error_status_code,
            )
            self._results.clear()
            snapshot = self._snapshot

        log_with_context(
            logger,
            "info",
            "Catalog replaced",
            version=snapshot.version,
            documents=len(snapshot.documents),
            is_cached=is_cached,
        )
        return snapshot

    async def refresh(self) -> CatalogSnapshot:
        """Reload the catalog from GitHub (or the fallback) and install it."""
        with span("catalog_store.refresh"):
            loaded = await load_catalog()
            return self.replace(
                loaded.documents,
                is_cached=loaded.is_cached,
                error=loaded.error,
                error_status_code=loaded.error_status_code,
            )

    def search(self, query: str) -> MatchResult:
        """Match a query against the current catalog, reusing earlier results."""
        snapshot = self._snapshot
        key = (query.strip(), snapshot.version)

        with self._lock:
            cached = self._results.get(key)
            if cached is not None:
                self._results.move_to_end(key)
                return cached

        result = match(query, snapshot.documents, thresholds=self.thresholds())

        with self._lock:
            # A replace() in between bumps the version; the stale entry is never read
            self._results[key] = result
            while len(self._results) > self._max_entries:
                self._results.popitem(last=False)

        return result

    def get_document(self, document_id: int) -> Document:
        """Look up a document by id.

        Raises:
            DocumentNotFoundError: If no document has that id
        """
        for document in self._snapshot.documents:
            if document.id == document_id:
                return document
        raise DocumentNotFoundError(f"Document {document_id} not found")


# Global catalog store instance
catalog_store = CatalogStore()
