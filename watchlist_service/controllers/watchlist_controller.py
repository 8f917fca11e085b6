from fastapi import APIRouter, Depends, HTTPException, Path, Request, status
from fastapi.responses import JSONResponse

from ..schemas import ActionResult, WatchlistAddRequest, WatchlistPage, WatchlistStatus, WatchlistSymbolsResponse
from ..services import (
    EnrichmentService,
    IdentityService,
    WatchlistService,
    get_enrichment_service,
    get_identity_service,
    get_watchlist_service,
)
from ..views import WatchlistTable

ACTION_STATUS_CODES = {
    WatchlistStatus.ADDED: status.HTTP_200_OK,
    WatchlistStatus.REMOVED: status.HTTP_200_OK,
    WatchlistStatus.INVALID: status.HTTP_400_BAD_REQUEST,
    WatchlistStatus.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    WatchlistStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    WatchlistStatus.FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _action_response(result: ActionResult) -> JSONResponse:
    return JSONResponse(status_code=ACTION_STATUS_CODES[result.status], content=result.model_dump(mode="json"))


class WatchlistController:
    def __init__(self):
        self.router = APIRouter(prefix="/watchlist", tags=["watchlist"])
        self.register_routes()

    @staticmethod
    async def _get_user_id(request: Request, identity_service: IdentityService) -> str:
        email = request.state.user_email
        if not email:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not authenticated")
        user_id = await identity_service.resolve_user_id(email)
        if not user_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user_id

    def register_routes(self):
        @self.router.get("/", response_model=WatchlistPage)
        async def get_watchlist(
            request: Request,
            identity_service: IdentityService = Depends(get_identity_service),
            watchlist_service: WatchlistService = Depends(get_watchlist_service),
            enrichment_service: EnrichmentService = Depends(get_enrichment_service),
        ):
            user_id = await self._get_user_id(request, identity_service)
            entries = await watchlist_service.get_user_watchlist(user_id)
            quotes = await enrichment_service.enrich(entries)
            table = WatchlistTable(watchlist=quotes, user_id=user_id, watchlist_service=watchlist_service)
            return WatchlistPage(
                title="My Watchlist",
                subtitle="Track your favorite stocks in one place",
                user_id=user_id,
                table=table.render(),
            )

        @self.router.get("/symbols", response_model=WatchlistSymbolsResponse)
        async def get_watchlist_symbols(
            request: Request,
            watchlist_service: WatchlistService = Depends(get_watchlist_service),
        ):
            email = request.state.user_email
            if not email:
                raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not authenticated")
            symbols = await watchlist_service.get_symbols_by_email(email)
            return WatchlistSymbolsResponse(symbols=symbols)

        @self.router.post("/add", response_model=ActionResult)
        async def add_to_watchlist(
            payload: WatchlistAddRequest,
            request: Request,
            identity_service: IdentityService = Depends(get_identity_service),
            watchlist_service: WatchlistService = Depends(get_watchlist_service),
        ):
            user_id = await self._get_user_id(request, identity_service)
            result = await watchlist_service.add_to_watchlist(user_id, payload.symbol, payload.company)
            return _action_response(result)

        @self.router.delete("/{symbol}", response_model=ActionResult)
        async def remove_from_watchlist(
            request: Request,
            symbol: str = Path(..., description="Stock ticker to remove from watchlist"),
            identity_service: IdentityService = Depends(get_identity_service),
            watchlist_service: WatchlistService = Depends(get_watchlist_service),
        ):
            user_id = await self._get_user_id(request, identity_service)
            result = await watchlist_service.remove_from_watchlist(user_id, symbol)
            return _action_response(result)

    def get_router(self):
        return self.router
