from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from typing import Any, Dict, List, Optional
import structlog

from src.config import settings
from src.services.query_service import PAGE_SIZE, filter_records, paginate, page_window, total_pages, clamp_page
from src.services.registry_store import JsonFileTokenStore, TokenStore
from src.utils.exceptions import StorageUnavailable, ValidationError
from src.api.models import ErrorResponse, TokenPageResponse, TokenResponse

logger = structlog.get_logger()

router = APIRouter(prefix="/api")

READ_ERROR = "Error reading tokens data"
SAVE_ERROR = "Error saving token data"


def get_token_store() -> TokenStore:
    return JsonFileTokenStore(settings.DATA_FILE)


def error_response(status_code: int, message: str, code: Optional[str] = None, field: Optional[str] = None):
    body = ErrorResponse(error=message, code=code, field=field)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.get(
    "/tokens",
    response_model=List[TokenResponse],
    responses={500: {"model": ErrorResponse}},
)
def list_tokens(store: TokenStore = Depends(get_token_store)):
    try:
        records = store.list()
    except StorageUnavailable as e:
        logger.error("Failed to list tokens", error=e.message)
        return error_response(500, READ_ERROR)
    return [TokenResponse.from_record(r) for r in records]


@router.post(
    "/tokens",
    status_code=201,
    response_model=TokenResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def create_token(
    payload: Dict[str, Any] = Body(..., examples=[{"owner": "A", "tokenName": "AT", "balance": 10,
                                                    "fundingSource": "F", "fee": 1, "liquidity": 100,
                                                    "supplyPercentAdded": 1}]),
    store: TokenStore = Depends(get_token_store),
):
    try:
        record = store.create(payload)
    except ValidationError as e:
        logger.warning("Rejected token data", error_code=e.error_code, field=e.field, error=e.message)
        return error_response(400, e.message, e.error_code, e.field)
    except StorageUnavailable as e:
        logger.error("Failed to save token", error=e.message)
        return error_response(500, SAVE_ERROR)
    return TokenResponse.from_record(record)


@router.get(
    "/tokens/view",
    response_model=TokenPageResponse,
    responses={500: {"model": ErrorResponse}},
)
def view_tokens(
    search: str = Query("", description="Case-insensitive substring of owner, token name or funding source"),
    page: int = Query(1, description="Requested page, clamped to the available range"),
    store: TokenStore = Depends(get_token_store),
):
    try:
        records = store.list()
    except StorageUnavailable as e:
        logger.error("Failed to list tokens", error=e.message)
        return error_response(500, READ_ERROR)

    page_size = PAGE_SIZE
    matches = filter_records(records, search)
    pages = total_pages(len(matches), page_size)
    first, last = page_window(len(matches), page_size, page)
    return TokenPageResponse(
        items=[TokenResponse.from_record(r) for r in paginate(matches, page_size, page)],
        page=clamp_page(page, pages),
        totalPages=pages,
        pageSize=page_size,
        total=len(matches),
        first=first,
        last=last,
    )
