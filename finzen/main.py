"""FastAPI main application.

Run:
  uvicorn finzen.main:app --reload --port 8000
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional
from fastapi import Depends, FastAPI, Header, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from finzen.adapters.base import IdentityProvider
from finzen.adapters.factory import get_backend
from finzen.config import settings
from finzen.errors import AuthenticationError, FormValidationError, RemoteServiceError
from finzen.logging_config import configure_logging
from finzen.models.auth import AuthSession, AuthUser, SignInRequest, SignUpRequest, SignUpResponse
from finzen.models.forms import SavingsGoalForm, TransactionForm
from finzen.models.goal import GOAL_ICON_LABELS, SavingsGoal
from finzen.models.summary import DashboardView, GoalProgress, HistoryView
from finzen.models.tip import FinancialTip
from finzen.models.transaction import Transaction
from finzen.services.dashboard import DashboardService
from finzen.services.filters import ALL, DateWindow, TransactionFilter, TypeFilter
from finzen.services.forms import CATEGORIES
from finzen.utils.privacy import mask_email

configure_logging()
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(title=settings.app_name, debug=settings.debug, version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_dashboard_service: Optional[DashboardService] = None


@app.exception_handler(FormValidationError)
async def _form_error(request, exc: FormValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(AuthenticationError)
async def _auth_error(request, exc: AuthenticationError):
    return JSONResponse(status_code=401, content={"detail": exc.message})


@app.exception_handler(RemoteServiceError)
async def _remote_error(request, exc: RemoteServiceError):
    logger.error("Remote service error: %s", exc.message, extra={"path": request.url.path})
    return JSONResponse(status_code=502, content={"detail": exc.message})


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

def get_identity() -> IdentityProvider:
    identity, _ = get_backend()
    return identity


def get_dashboard_service() -> DashboardService:
    global _dashboard_service
    if _dashboard_service is None:
        _, data = get_backend()
        _dashboard_service = DashboardService(data)
    return _dashboard_service


def get_access_token(authorization: Optional[str] = Header(None)) -> str:
    """Extract the bearer token from the Authorization header or raise 401."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Missing bearer token")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing bearer token")
    return token


async def get_current_user(
    token: str = Depends(get_access_token),
    identity: IdentityProvider = Depends(get_identity),
) -> AuthUser:
    return await identity.get_user(token)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": settings.app_name, "version": app.version}


@app.post("/auth/signup", response_model=SignUpResponse)
async def sign_up(request: SignUpRequest, identity: IdentityProvider = Depends(get_identity)):
    """Create an account. The session is null while email confirmation is pending."""
    result = await identity.sign_up(request.email, request.password, request.full_name)
    logger.info("New account for %s", mask_email(request.email))
    return result


@app.post("/auth/signin", response_model=AuthSession)
async def sign_in(request: SignInRequest, identity: IdentityProvider = Depends(get_identity)):
    return await identity.sign_in(request.email, request.password)


@app.post("/auth/signout")
async def sign_out(
    token: str = Depends(get_access_token),
    identity: IdentityProvider = Depends(get_identity),
    service: DashboardService = Depends(get_dashboard_service),
):
    try:
        user = await identity.get_user(token)
    except AuthenticationError:
        user = None
    await identity.sign_out(token)
    if user is not None:
        service.forget(user.id)
    return {"message": "Signed out"}


@app.get("/auth/me", response_model=AuthUser)
async def current_user(user: AuthUser = Depends(get_current_user)):
    return user


@app.get("/dashboard", response_model=DashboardView)
async def dashboard(
    as_of: Optional[datetime] = Query(None, description="Reference moment for the monthly snapshot"),
    user: AuthUser = Depends(get_current_user),
    token: str = Depends(get_access_token),
    service: DashboardService = Depends(get_dashboard_service),
):
    """
    Load the user's data and return balance, monthly snapshot, top
    categories, goal progress and tips.
    """
    state = await service.load(user.id, token)
    return service.build_view(state, as_of=as_of)


@app.get("/transactions", response_model=HistoryView)
async def transaction_history(
    tx_type: TypeFilter = Query(TypeFilter.ALL, alias="type"),
    category: str = Query(ALL),
    period: DateWindow = Query(DateWindow.ALL),
    user: AuthUser = Depends(get_current_user),
    token: str = Depends(get_access_token),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Filtered transaction history, newest first."""
    state = await service.load(user.id, token)
    selection = TransactionFilter(type=tx_type, category=category, period=period)
    return service.build_history(state, selection)


@app.post("/transactions", response_model=Transaction, status_code=201)
async def create_transaction(
    form: TransactionForm,
    user: AuthUser = Depends(get_current_user),
    token: str = Depends(get_access_token),
    service: DashboardService = Depends(get_dashboard_service),
):
    return await service.add_transaction(user.id, form, token)


@app.delete("/transactions/{transaction_id}", status_code=204)
async def delete_transaction(
    transaction_id: str,
    user: AuthUser = Depends(get_current_user),
    token: str = Depends(get_access_token),
    service: DashboardService = Depends(get_dashboard_service),
):
    deleted = await service.delete_transaction(user.id, transaction_id, token)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Transaction {transaction_id} not found")
    return Response(status_code=204)


@app.get("/goals", response_model=List[GoalProgress])
async def list_goals(
    user: AuthUser = Depends(get_current_user),
    token: str = Depends(get_access_token),
    service: DashboardService = Depends(get_dashboard_service),
):
    state = await service.load(user.id, token)
    return service.progress.progress_all(state.goals)


@app.post("/goals", response_model=SavingsGoal, status_code=201)
async def create_goal(
    form: SavingsGoalForm,
    user: AuthUser = Depends(get_current_user),
    token: str = Depends(get_access_token),
    service: DashboardService = Depends(get_dashboard_service),
):
    return await service.add_goal(user.id, form, token)


@app.get("/tips", response_model=List[FinancialTip])
async def list_tips(
    user: AuthUser = Depends(get_current_user),
    token: str = Depends(get_access_token),
    service: DashboardService = Depends(get_dashboard_service),
):
    state = await service.load(user.id, token)
    return state.tips[: settings.tip_display_limit]


@app.get("/categories")
async def list_categories() -> Dict[str, List[str]]:
    """Predefined category options per transaction type."""
    return CATEGORIES


@app.get("/goals/icons")
async def list_goal_icons():
    return [{"value": icon.value, "label": label} for icon, label in GOAL_ICON_LABELS.items()]


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
